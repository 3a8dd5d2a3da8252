"""
路径解析：基准目录、配置目录、输出/日志/存储目录。

各目录均可用环境变量覆盖（CATALOG_CONTENT_*），未设置时位于基准目录下。
"""

from __future__ import annotations

import os
from pathlib import Path

ENV_PREFIX = "CATALOG_CONTENT_"


def _env_dir(name: str) -> Path | None:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value and value.strip():
        return Path(value.strip()).resolve()
    return None


def get_base_dir() -> Path:
    """基准目录：环境变量 CATALOG_CONTENT_BASE_DIR，否则为项目根（core 的父目录）。"""
    return _env_dir("BASE_DIR") or Path(__file__).resolve().parent.parent.parent


def get_config_dir() -> Path:
    """配置文件目录。"""
    return _env_dir("CONFIG_DIR") or get_base_dir() / "config"


def get_output_dir() -> Path:
    """生成结果输出目录。"""
    return _env_dir("OUTPUT_DIR") or get_base_dir() / "output"


def get_log_dir() -> Path:
    """日志文件目录。"""
    return _env_dir("LOG_DIR") or get_base_dir() / "logs"


def get_storage_dir() -> Path:
    """存储盘根目录的基准；storage.disks 中的相对 root 按此目录解析。"""
    return _env_dir("STORAGE_DIR") or get_base_dir() / "storage"


def resolve_disk_root(root: str) -> Path:
    """存储盘根目录：绝对路径原样返回，相对路径挂到存储目录下。"""
    p = Path(root)
    if p.is_absolute():
        return p
    return get_storage_dir() / p
