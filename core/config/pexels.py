"""Pexels 图片搜索配置：api_key（明文/环境变量）。"""

from __future__ import annotations

import logging
import os

from models.schemas import PexelsSection

logger = logging.getLogger(__name__)

PEXELS_API_KEY_ENV = "PEXELS_API_KEY"


def resolve_pexels_api_key(section: PexelsSection) -> str | None:
    """优先 app_config.yaml 中的 pexels.api_key，否则环境变量 PEXELS_API_KEY。"""
    if section.api_key:
        return section.api_key
    api_key = os.environ.get(PEXELS_API_KEY_ENV, "").strip() or None
    if api_key is None:
        logger.warning("未配置 Pexels API Key（app_config.yaml 或环境变量 %s），图片搜索将跳过", PEXELS_API_KEY_ENV)
    return api_key
