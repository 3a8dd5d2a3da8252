"""提示词与结构化输出 Schema：商品名称、描述、评价。"""

from __future__ import annotations

from domain.catalog import FieldRole, LanguageSet, ObjectSchema, SchemaField

TITLE_PREFIX = "title_"
DESCRIPTION_PREFIX = "description_"

# 第一个语言为原始值，其余语言为其译文
_PRIMARY_INSTRUCTION = "{subject} in language {language}"
_TRANSLATION_INSTRUCTION = "Translate {subject_lower} in language {language}"

TITLE_PROMPT = 'Product name for the category "{category_path}"'
DESCRIPTION_PROMPT = 'Product description for the product "{product_title}"'
REVIEW_PROMPT = 'Product review for the product "{product_title}"'


def field_instruction(subject: str, language: str, role: FieldRole) -> str:
    """单个字段给模型的说明：主语言与翻译语言的措辞不同。"""
    if role is FieldRole.PRIMARY:
        return _PRIMARY_INSTRUCTION.format(subject=subject, language=language)
    return _TRANSLATION_INSTRUCTION.format(subject_lower=subject.lower(), language=language)


def build_language_schema(
    languages: LanguageSet,
    *,
    prefix: str,
    subject: str,
    name: str,
    description: str,
) -> ObjectSchema:
    """按语言集合构造 Schema：每个语言一个必填字符串字段 prefix + code。"""
    properties = [
        SchemaField(name=f"{prefix}{lang.code}", description=field_instruction(subject, lang.name, lang.role))
        for lang in languages.languages
    ]
    return ObjectSchema(
        name=name,
        description=description,
        required_fields=languages.field_names(prefix),
        properties=properties,
    )


def build_title_schema(languages: LanguageSet) -> ObjectSchema:
    return build_language_schema(
        languages,
        prefix=TITLE_PREFIX,
        subject="Product name",
        name="product_title",
        description="A structured product name",
    )


def build_description_schema(languages: LanguageSet) -> ObjectSchema:
    return build_language_schema(
        languages,
        prefix=DESCRIPTION_PREFIX,
        subject="Product description",
        name="product_description",
        description="A structured product description",
    )


def build_review_schema() -> ObjectSchema:
    """评价 Schema 固定为 text、rating 两个字段，与语言无关。"""
    return ObjectSchema(
        name="product_review",
        description="A structured product review",
        required_fields=["text", "rating"],
        properties=[
            SchemaField(name="text", description="Review text"),
            SchemaField(name="rating", description="Rating (1-5)"),
        ],
    )


def format_example(example: str | None) -> str:
    """示例提示：空值不追加，否则为 ' (Example <example>)'。"""
    if not example or not example.strip():
        return ""
    return f" (Example {example})"


def build_title_prompt(category_path: str, example: str | None = None) -> str:
    return TITLE_PROMPT.format(category_path=category_path) + format_example(example)


def build_description_prompt(product_title: str) -> str:
    return DESCRIPTION_PROMPT.format(product_title=product_title)


def build_review_prompt(product_title: str, example: str | None = None) -> str:
    return REVIEW_PROMPT.format(product_title=product_title) + format_example(example)
