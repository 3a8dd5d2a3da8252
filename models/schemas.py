"""
Pydantic V2 Schema：应用配置（app_config.yaml 各节）、运行时路径与输出记录。

- LlmConfigSchema / GenerationSection / PexelsSection / StorageSection: YAML 各节解析。
- AppConfigSchema: app_config.yaml 根结构，各节均有默认值。
- LlmConfigResult / ConfigDisplay: 解析后的大模型配置与脱敏展示。
- RunConfigSchema / CatalogRecord: CLI 运行时路径与单条商品生成结果。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _strip_str(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


# ----- 大模型配置 -----


class LlmConfigSchema(BaseModel):
    """app_config.yaml 的 llm 节。"""

    provider: str = Field(default="openai", description="服务商：openai | deepseek | dashscope | ollama")
    api_key: str = Field(default="", description="明文 API Key")
    api_key_encrypted: str = Field(default="", description="加密后的 API Key")
    base_url: str = Field(default="", description="API base URL，为空时按 provider 取默认值")
    model: str = Field(default="", description="模型名，为空时按 provider 取默认值")

    @field_validator("provider", "api_key", "api_key_encrypted", "base_url", "model", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> str:
        return _strip_str(v)

    @field_validator("provider", mode="after")
    @classmethod
    def lower_provider(cls, v: str) -> str:
        return v.lower() if v else "openai"

    @field_validator("base_url", mode="after")
    @classmethod
    def rstrip_slash(cls, v: str) -> str:
        return v.rstrip("/") if v else v


class LlmConfigResult(BaseModel):
    """大模型配置加载结果。api_key 仅用于调用，不可写入日志。"""

    provider: str = Field(default="openai", description="服务商")
    api_key: str | None = Field(default=None, description="API Key，未配置时为 None")
    base_url: str = Field(default="", description="API base URL")
    model: str = Field(default="", description="模型名")


class ConfigDisplay(BaseModel):
    """用于界面/日志的配置展示：key 脱敏。"""

    provider: str = Field(default="", description="服务商")
    base_url: str = Field(default="", description="API base URL")
    model: str = Field(default="", description="模型名")
    api_key_masked: str = Field(default="", description="脱敏后的大模型 Key")
    configured: str = Field(default="否", description="大模型是否已配置（是/否）")
    pexels_key_masked: str = Field(default="", description="脱敏后的 Pexels Key")


# ----- 生成参数 -----


class GenerationSection(BaseModel):
    """app_config.yaml 的 generation 节：采样温度、重试次数与默认语言。"""

    title_temperature: float = Field(default=0.8, ge=0.0, le=2.0, description="商品名称生成温度")
    description_temperature: float = Field(default=0.8, ge=0.0, le=2.0, description="商品描述生成温度")
    review_temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="商品评价生成温度")
    retry_times: int = Field(default=5, ge=1, description="结构化生成最大尝试次数")
    retry_sleep_ms: int = Field(default=100, ge=0, description="两次尝试之间的等待（毫秒）")
    languages: dict[str, str] = Field(
        default_factory=lambda: {"uk": "Ukrainian", "en": "English"},
        description="默认语言，第一个为主语言，其余为翻译语言",
    )


# ----- 图片搜索 -----


class PexelsSection(BaseModel):
    """app_config.yaml 的 pexels 节。文档：https://www.pexels.com/api/documentation/"""

    api_key: str = Field(default="", description="Pexels API Key，为空时取环境变量 PEXELS_API_KEY")
    search_url: str = Field(default="https://api.pexels.com/v1/search", description="搜索接口地址")
    timeout: float = Field(default=10.0, gt=0, description="单张图片下载超时（秒）")
    orientation: str = Field(default="square", description="图片方向")
    size: str = Field(default="small", description="图片尺寸")

    @field_validator("api_key", "search_url", "orientation", "size", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> str:
        return _strip_str(v)


# ----- 存储 -----


class DiskSchema(BaseModel):
    """单个本地存储盘：根目录，相对路径按 storage 目录解析。"""

    root: str = Field(description="存储根目录")

    @field_validator("root", mode="before")
    @classmethod
    def strip_root(cls, v: Any) -> str:
        return _strip_str(v)


class StorageSection(BaseModel):
    """app_config.yaml 的 storage 节：默认盘与盘列表。"""

    default: str = Field(default="local", description="未指定盘名时使用的存储盘")
    disks: dict[str, DiskSchema] = Field(
        default_factory=lambda: {"local": DiskSchema(root="app"), "public": DiskSchema(root="app/public")},
        description="存储盘名称 -> 配置",
    )


class AppConfigSchema(BaseModel):
    """app_config.yaml 根结构。"""

    llm: LlmConfigSchema = Field(default_factory=LlmConfigSchema)
    generation: GenerationSection = Field(default_factory=GenerationSection)
    pexels: PexelsSection = Field(default_factory=PexelsSection)
    storage: StorageSection = Field(default_factory=StorageSection)


# ----- 运行时 -----


class RunConfigSchema(BaseModel):
    """运行时路径配置：输出目录、日志目录、存储目录。"""

    output_dir: Path = Field(description="生成结果输出目录")
    log_dir: Path = Field(description="日志文件目录")
    storage_dir: Path = Field(description="图片存储根目录")

    model_config = {"frozen": False}


class CatalogRecord(BaseModel):
    """单条商品生成结果：多语言名称与描述、评价、图片路径。"""

    category_path: str = Field(default="", description="输入类目路径")
    titles: dict[str, str] = Field(default_factory=dict, description="title_<code> -> 名称")
    descriptions: dict[str, str] = Field(default_factory=dict, description="description_<code> -> 描述")
    reviews: list[dict[str, str]] = Field(default_factory=list, description="评价列表，每条含 text、rating")
    image: str | None = Field(default=None, description="图片相对路径，未获取到时为 None")

    @field_validator("category_path", mode="before")
    @classmethod
    def strip_path(cls, v: Any) -> str:
        return _strip_str(v)
