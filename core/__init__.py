"""
生成核心：结构化内容生成（名称/描述/评价）、图片搜索下载与存储盘。
"""

from domain.catalog import DownloadAttempt, FieldRole, ImageCandidate, Language, LanguageSet, ObjectSchema, SchemaField
from .content import ContentGenerator
from .images import ImageResolver, build_image_path, random_token, url_extension
from .llm import GenerationError, StructuredClient
from .storage import DiskManager, LocalDisk, StorageDisk

__all__ = [
    "ContentGenerator",
    "DiskManager",
    "DownloadAttempt",
    "FieldRole",
    "GenerationError",
    "ImageCandidate",
    "ImageResolver",
    "Language",
    "LanguageSet",
    "LocalDisk",
    "ObjectSchema",
    "SchemaField",
    "StorageDisk",
    "StructuredClient",
    "build_image_path",
    "random_token",
    "url_extension",
]
