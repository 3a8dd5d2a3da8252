"""pytest 共享 fixture 与配置。"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

# 保证项目根在 sys.path 中，便于导入 core / app / models
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))


def make_completion(payload: dict[str, Any] | str) -> SimpleNamespace:
    """构造与 OpenAI ChatCompletion 结构一致的最小响应对象。"""
    content = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class RecordingDisk:
    """记录每次 put 调用的存储盘。"""

    def __init__(self) -> None:
        self.puts: list[tuple[str, bytes]] = []

    def put(self, path: str, content: bytes) -> None:
        self.puts.append((path, content))


@pytest.fixture
def openai_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def recording_disk() -> RecordingDisk:
    return RecordingDisk()


@pytest.fixture(autouse=True)
def _reset_config_cache():
    from core.config import reset_app_config

    reset_app_config()
    yield
    reset_app_config()


@pytest.fixture
def completion():
    """返回 make_completion，供测试构造模型响应。"""
    return make_completion
