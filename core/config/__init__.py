"""
core.config：整合路径、统一 YAML 配置 app_config.yaml 及加载。

- 配置：config/app_config.yaml（含 llm、generation、pexels、storage）。
- 路径：config 目录及 output/logs/storage（见 .paths）。
- 统一加载：load_app_config() 启动时调用一次，之后通过 get_app_config() 等获取。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from models.schemas import AppConfigSchema, ConfigDisplay, LlmConfigResult

from . import llm as _llm
from . import loader as _loader
from . import paths as _paths
from . import pexels as _pexels

logger = logging.getLogger(__name__)

# ----- 路径（直接转发） -----

get_app_config_path = _loader.get_app_config_path
get_base_dir = _paths.get_base_dir
get_config_dir = _paths.get_config_dir
get_output_dir = _paths.get_output_dir
get_log_dir = _paths.get_log_dir
get_storage_dir = _paths.get_storage_dir
resolve_disk_root = _paths.resolve_disk_root

# ----- Key（直接转发） -----

mask_key = _llm.mask_key
encrypt_key = _llm.encrypt_key
decrypt_key = _llm.decrypt_key
load_llm_config = _llm.load_llm_config
resolve_pexels_api_key = _pexels.resolve_pexels_api_key

# ----- 统一加载与缓存 -----

_app_config: AppConfigSchema | None = None
_llm_config: LlmConfigResult | None = None
_pexels_api_key: str | None = None


def load_app_config(path: Path | None = None) -> AppConfigSchema:
    """加载全部配置：从 config/app_config.yaml 读取并缓存；已加载时直接返回缓存。"""
    global _app_config, _llm_config, _pexels_api_key

    if _app_config is not None:
        return _app_config

    app_config = _loader.load_app_config_yaml(path)
    _llm_config = load_llm_config(app_config.llm)
    _pexels_api_key = resolve_pexels_api_key(app_config.pexels)
    _app_config = app_config
    logger.debug("公用配置已加载: config_file=%s", path or get_app_config_path())
    return _app_config


def reset_app_config() -> None:
    """清空缓存，下次访问时重新加载（供单测使用）。"""
    global _app_config, _llm_config, _pexels_api_key
    _app_config = None
    _llm_config = None
    _pexels_api_key = None


def get_app_config() -> AppConfigSchema:
    return load_app_config()


def get_llm_config() -> LlmConfigResult:
    load_app_config()
    assert _llm_config is not None
    return _llm_config


def get_pexels_api_key() -> str | None:
    load_app_config()
    return _pexels_api_key


def get_config_display() -> dict[str, str]:
    """用于界面/日志的配置展示：provider、base_url、model、key 脱敏。"""
    llm_config = get_llm_config()
    display = ConfigDisplay(
        provider=llm_config.provider,
        base_url=llm_config.base_url,
        model=llm_config.model,
        api_key_masked=mask_key(llm_config.api_key),
        configured="是" if llm_config.api_key else "否",
        pexels_key_masked=mask_key(get_pexels_api_key()),
    )
    return display.model_dump()


# ----- CLI：加密 key -----


def main_encrypt(argv: list[str] | None = None) -> None:
    """命令行：python -m core.config encrypt <明文key> 或 python -m core.config <明文key>"""
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] == "encrypt":
        args = args[1:]
    if not args or not args[0].strip():
        print("用法: python -m core.config encrypt <明文API_Key>")
        print("输出加密后的字符串，填入 config/app_config.yaml 的 llm.api_key_encrypted。")
        sys.exit(1)
    print("将下面一行填入 config/app_config.yaml 的 llm.api_key_encrypted：")
    print(encrypt_key(args[0].strip()))


__all__ = [
    "load_app_config",
    "reset_app_config",
    "get_app_config",
    "get_llm_config",
    "get_pexels_api_key",
    "get_config_display",
    "get_app_config_path",
    "get_base_dir",
    "get_config_dir",
    "get_output_dir",
    "get_log_dir",
    "get_storage_dir",
    "resolve_disk_root",
    "load_llm_config",
    "resolve_pexels_api_key",
    "mask_key",
    "encrypt_key",
    "decrypt_key",
    "main_encrypt",
]
