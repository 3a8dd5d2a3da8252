"""商品内容生成：按类目生成多语言名称，按名称生成多语言描述与评价。"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from domain.catalog import LanguageSet

from .llm.client import StructuredClient
from .llm.prompt import (
    build_description_prompt,
    build_description_schema,
    build_review_prompt,
    build_review_schema,
    build_title_prompt,
    build_title_schema,
)

logger = logging.getLogger(__name__)

TITLE_TEMPERATURE = 0.8
DESCRIPTION_TEMPERATURE = 0.8
REVIEW_TEMPERATURE = 0.7


class ContentGenerator:
    """
    商品内容生成器。languages 传 {'uk': 'Ukrainian', 'en': 'English'} 或 LanguageSet，
    第一个语言为主语言，其余为其译文。远程失败以 GenerationError 抛给调用方。
    """

    def __init__(
        self,
        client: StructuredClient,
        *,
        title_temperature: float = TITLE_TEMPERATURE,
        description_temperature: float = DESCRIPTION_TEMPERATURE,
        review_temperature: float = REVIEW_TEMPERATURE,
    ) -> None:
        self.client = client
        self.title_temperature = title_temperature
        self.description_temperature = description_temperature
        self.review_temperature = review_temperature

    def generate_product_title(
        self,
        category_path: str,
        languages: LanguageSet | Mapping[str, str],
        example: str | None = None,
    ) -> dict[str, Any]:
        """
        为类目生成商品名称，返回 {'title_<code>': 名称, ...}。
        类目最好传完整层级，如 "Home Appliances / Vacuum Cleaners / Robot Vacuum Cleaner"。
        """
        language_set = LanguageSet.coerce(languages)
        logger.info("生成商品名称 [类目=%s, 语言=%s]", category_path[:80], ",".join(language_set.codes))
        return self.client.generate(
            build_title_prompt(category_path, example),
            build_title_schema(language_set),
            self.title_temperature,
        )

    def generate_product_description(
        self,
        product_title: str,
        languages: LanguageSet | Mapping[str, str],
    ) -> dict[str, Any]:
        """为商品生成描述，返回 {'description_<code>': 描述, ...}。"""
        language_set = LanguageSet.coerce(languages)
        logger.info("生成商品描述 [商品=%s, 语言=%s]", product_title[:80], ",".join(language_set.codes))
        return self.client.generate(
            build_description_prompt(product_title),
            build_description_schema(language_set),
            self.description_temperature,
        )

    def generate_product_review(self, product_title: str, example: str | None = None) -> dict[str, Any]:
        """为商品生成一条评价，返回 {'text': ..., 'rating': ...}。"""
        logger.info("生成商品评价 [商品=%s]", product_title[:80])
        return self.client.generate(
            build_review_prompt(product_title, example),
            build_review_schema(),
            self.review_temperature,
        )
