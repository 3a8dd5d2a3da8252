"""图片存储：按名称选择存储盘，默认盘由配置显式传入。"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import Mapping, Protocol

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class StorageDisk(Protocol):
    def put(self, path: str, content: bytes) -> None: ...


class LocalDisk:
    """本地目录存储盘：path 为相对 root 的 posix 路径，父目录按需创建。"""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def full_path(self, path: str) -> Path:
        rel = PurePosixPath(path)
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"存储路径必须是相对路径且不含 ..: {path}")
        return self.root.joinpath(*rel.parts)

    def put(self, path: str, content: bytes) -> None:
        """先写临时文件再改名，不会留下写了一半的文件。"""
        target = self.full_path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".tmp_", suffix=target.suffix)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            # mkstemp 建的文件只有属主可读，存储盘上的图片需对 Web 服务可读
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("已写入 %s（%d 字节）", target, len(content))

    def exists(self, path: str) -> bool:
        return self.full_path(path).exists()


class DiskManager:
    """存储盘集合：disk(None) 返回默认盘。"""

    def __init__(self, disks: Mapping[str, StorageDisk], default: str) -> None:
        if default not in disks:
            raise ValueError(f"默认存储盘未配置: {default}")
        self._disks = dict(disks)
        self.default = default

    def disk(self, name: str | None = None) -> StorageDisk:
        key = name or self.default
        try:
            return self._disks[key]
        except KeyError:
            raise ValueError(f"未配置的存储盘: {key}（可选: {', '.join(self._disks)}）") from None

    @property
    def names(self) -> list[str]:
        return list(self._disks)

    @classmethod
    def local(cls, roots: Mapping[str, Path | str], default: str) -> DiskManager:
        """由 {盘名: 根目录} 构造全部为本地盘的集合。"""
        return cls({name: LocalDisk(root) for name, root in roots.items()}, default)
