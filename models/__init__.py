"""Pydantic 模型与 Schema：配置各节、运行时路径、商品生成结果。"""

from .schemas import (
    AppConfigSchema,
    CatalogRecord,
    ConfigDisplay,
    DiskSchema,
    GenerationSection,
    LlmConfigResult,
    LlmConfigSchema,
    PexelsSection,
    RunConfigSchema,
    StorageSection,
)

__all__ = [
    "AppConfigSchema",
    "CatalogRecord",
    "ConfigDisplay",
    "DiskSchema",
    "GenerationSection",
    "LlmConfigResult",
    "LlmConfigSchema",
    "PexelsSection",
    "RunConfigSchema",
    "StorageSection",
]
