"""
依赖组装：由 app_config.yaml 构造内容生成器、图片解析器与存储盘，不包含业务逻辑。
"""

from __future__ import annotations

import logging

from core import ContentGenerator, DiskManager, ImageResolver, StructuredClient
from core.config import get_app_config, get_llm_config, get_pexels_api_key, resolve_disk_root
from models.schemas import AppConfigSchema, LlmConfigResult

logger = logging.getLogger(__name__)


def build_content_generator(
    app_config: AppConfigSchema | None = None,
    llm_config: LlmConfigResult | None = None,
) -> ContentGenerator:
    """按 llm、generation 节构造 ContentGenerator；未配置 key 时抛 GenerationError。"""
    app_config = app_config or get_app_config()
    llm_config = llm_config or get_llm_config()
    gen = app_config.generation
    client = StructuredClient(
        llm_config,
        retry_times=gen.retry_times,
        retry_sleep_ms=gen.retry_sleep_ms,
    )
    return ContentGenerator(
        client,
        title_temperature=gen.title_temperature,
        description_temperature=gen.description_temperature,
        review_temperature=gen.review_temperature,
    )


def build_disk_manager(app_config: AppConfigSchema | None = None) -> DiskManager:
    """按 storage 节构造存储盘；相对 root 挂到存储目录下。"""
    storage = (app_config or get_app_config()).storage
    roots = {name: resolve_disk_root(disk.root) for name, disk in storage.disks.items()}
    return DiskManager.local(roots, storage.default)


def build_image_resolver(
    app_config: AppConfigSchema | None = None,
    api_key: str | None = None,
) -> ImageResolver | None:
    """按 pexels、storage 节构造 ImageResolver；未配置 Pexels key 时返回 None。"""
    app_config = app_config or get_app_config()
    api_key = api_key or get_pexels_api_key()
    if not api_key:
        return None
    pexels = app_config.pexels
    return ImageResolver(
        api_key,
        build_disk_manager(app_config),
        search_url=pexels.search_url,
        timeout=pexels.timeout,
        orientation=pexels.orientation,
        size=pexels.size,
    )


__all__ = [
    "build_content_generator",
    "build_disk_manager",
    "build_image_resolver",
]
