"""
大模型调用：按 JSON Schema 生成结构化的商品名称、描述与评价。
配置见 core/config（provider、model、key 等从 app_config.yaml 的 llm 节获取）。
"""

from .client import GenerationError, StructuredClient
from .prompt import (
    DESCRIPTION_PREFIX,
    TITLE_PREFIX,
    build_description_prompt,
    build_description_schema,
    build_language_schema,
    build_review_prompt,
    build_review_schema,
    build_title_prompt,
    build_title_schema,
    format_example,
)

__all__ = [
    "DESCRIPTION_PREFIX",
    "TITLE_PREFIX",
    "GenerationError",
    "StructuredClient",
    "build_description_prompt",
    "build_description_schema",
    "build_language_schema",
    "build_review_prompt",
    "build_review_schema",
    "build_title_prompt",
    "build_title_schema",
    "format_example",
]
