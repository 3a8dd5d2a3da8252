"""批量生成：单条类目生成完整商品记录 + 按类目列表批量运行。"""

from __future__ import annotations

import logging

from tqdm import tqdm  # type: ignore[import-untyped]

from core import ContentGenerator, GenerationError, ImageResolver, LanguageSet
from core.llm import TITLE_PREFIX
from models.schemas import CatalogRecord

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_FOLDER = "products"


def build_catalog_record(
    category_path: str,
    languages: LanguageSet,
    generator: ContentGenerator,
    resolver: ImageResolver | None = None,
    *,
    example: str | None = None,
    review_example: str | None = None,
    reviews: int = 1,
    image_folder: str = DEFAULT_IMAGE_FOLDER,
    disk: str | None = None,
) -> CatalogRecord:
    """
    单条类目：名称 -> 主语言名称的描述 -> 评价 -> 按主语言名称搜索图片。
    名称/描述/评价失败时抛 GenerationError；图片未获取到或存储失败时 image 为 None。
    """
    titles = generator.generate_product_title(category_path, languages, example)
    primary_title = str(titles[f"{TITLE_PREFIX}{languages.primary.code}"]).strip()
    descriptions = generator.generate_product_description(primary_title, languages)
    review_list = [generator.generate_product_review(primary_title, review_example) for _ in range(max(reviews, 0))]
    image = None
    if resolver is not None:
        try:
            image = resolver.find_image(primary_title, image_folder, disk)
        except (ValueError, OSError) as e:
            logger.warning("图片保存失败，记录不带图片 [%s]: %s", category_path[:80], e)
    return CatalogRecord(
        category_path=category_path,
        titles={k: str(v) for k, v in titles.items()},
        descriptions={k: str(v) for k, v in descriptions.items()},
        reviews=[{k: str(v) for k, v in r.items()} for r in review_list],
        image=image,
    )


def run_batch_generate(
    categories: list[str],
    languages: LanguageSet,
    generator: ContentGenerator,
    resolver: ImageResolver | None = None,
    **kwargs,
) -> tuple[list[CatalogRecord], list[str]]:
    """批量生成。返回 (成功记录, 生成失败的类目)；单条失败记录日志后继续。"""
    records: list[CatalogRecord] = []
    failed: list[str] = []
    for category in tqdm(categories, desc="商品生成", unit="条"):
        try:
            records.append(build_catalog_record(category, languages, generator, resolver, **kwargs))
        except GenerationError as e:
            logger.warning("生成失败，跳过 [%s]: %s", category[:80], e)
            failed.append(category)
    return records, failed
