"""商品内容生成相关数据模型（Pydantic V2）：语言集合、结构化输出 Schema、图片候选与下载结果。"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator


class FieldRole(str, Enum):
    """字段角色：主语言为原始值，其余语言为其译文。"""

    PRIMARY = "primary"
    TRANSLATION = "translation"


class Language(BaseModel):
    """语言集合中的一项：代码、展示名与角色。"""

    code: str = Field(description="语言代码，如 uk")
    name: str = Field(description="语言展示名，如 Ukrainian")
    role: FieldRole = Field(default=FieldRole.TRANSLATION, description="主语言或翻译语言")

    model_config = {"frozen": True}


class LanguageSet(BaseModel):
    """
    有序语言集合：第一个为主语言，其余为翻译目标。
    不可为空，代码唯一；角色在构造时按顺序确定，调用方无需再按下标判断。
    """

    languages: list[Language] = Field(default_factory=list, description="按顺序排列的语言")

    model_config = {"frozen": True}

    @field_validator("languages", mode="after")
    @classmethod
    def check_languages(cls, v: list[Language]) -> list[Language]:
        if not v:
            raise ValueError("语言集合不能为空")
        seen: set[str] = set()
        for lang in v:
            if not lang.code:
                raise ValueError("语言代码不能为空")
            if lang.code in seen:
                raise ValueError(f"语言代码重复: {lang.code}")
            seen.add(lang.code)
        return v

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> LanguageSet:
        """从 {'uk': 'Ukrainian', 'en': 'English'} 构造，第一个为主语言。"""
        languages = [
            Language(
                code=str(code).strip(),
                name=str(name).strip(),
                role=FieldRole.PRIMARY if idx == 0 else FieldRole.TRANSLATION,
            )
            for idx, (code, name) in enumerate(mapping.items())
        ]
        return cls(languages=languages)

    @classmethod
    def parse(cls, raw: str) -> LanguageSet:
        """
        解析命令行形式的语言列表："uk:Ukrainian,en:English"。
        只写代码时展示名与代码相同；重复代码报错而不是静默覆盖。
        """
        pairs: list[tuple[str, str]] = []
        for part in (raw or "").split(","):
            part = part.strip()
            if not part:
                continue
            code, _, name = part.partition(":")
            code = code.strip()
            pairs.append((code, name.strip() or code))
        codes = [code for code, _ in pairs]
        if len(set(codes)) != len(codes):
            raise ValueError(f"语言代码重复: {raw}")
        return cls.from_mapping(dict(pairs))

    @classmethod
    def coerce(cls, value: LanguageSet | Mapping[str, str]) -> LanguageSet:
        if isinstance(value, LanguageSet):
            return value
        return cls.from_mapping(value)

    @property
    def primary(self) -> Language:
        return self.languages[0]

    @property
    def codes(self) -> list[str]:
        return [lang.code for lang in self.languages]

    def field_names(self, prefix: str) -> list[str]:
        """各语言对应的字段名：prefix + code。"""
        return [f"{prefix}{code}" for code in self.codes]

    def as_mapping(self) -> dict[str, str]:
        return {lang.code: lang.name for lang in self.languages}

    def __len__(self) -> int:
        return len(self.languages)


class SchemaField(BaseModel):
    """结构化输出中的一个字符串字段及其给模型的说明。"""

    name: str = Field(description="字段名")
    description: str = Field(default="", description="字段说明")

    model_config = {"frozen": True}


class ObjectSchema(BaseModel):
    """结构化输出的对象 Schema：名称、说明、必填字段与字段列表。"""

    name: str = Field(description="Schema 名称，如 product_title")
    description: str = Field(default="", description="Schema 说明")
    required_fields: list[str] = Field(default_factory=list, description="必填字段名")
    properties: list[SchemaField] = Field(default_factory=list, description="字段列表")

    def to_json_schema(self) -> dict[str, Any]:
        """转为 JSON Schema 对象，可直接用于 OpenAI response_format 的 strict 模式。"""
        return {
            "type": "object",
            "properties": {
                p.name: {"type": "string", "description": p.description} for p in self.properties
            },
            "required": list(self.required_fields),
            "additionalProperties": False,
        }


class ImageCandidate(BaseModel):
    """图片搜索结果中的一项，只使用原图地址。"""

    id: int | str | None = Field(default=None, description="图片 ID")
    original_url: str = Field(default="", description="原图地址（src.original）")

    @classmethod
    def from_photo(cls, photo: Mapping[str, Any]) -> ImageCandidate:
        src = photo.get("src") or {}
        url = src.get("original") if isinstance(src, Mapping) else None
        return cls(id=photo.get("id"), original_url=str(url or "").strip())


class DownloadAttempt(BaseModel):
    """单个候选图片的下载结果：成功时带内容，失败时带原因，不抛异常。"""

    url: str = Field(default="", description="下载地址")
    ok: bool = Field(default=False, description="是否下载成功")
    content: bytes = Field(default=b"", description="图片内容，仅成功时有值")
    status_code: int | None = Field(default=None, description="HTTP 状态码，传输失败时为 None")
    error: str = Field(default="", description="失败原因")
