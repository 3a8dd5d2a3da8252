"""
商品内容生成入口：加载配置后读取类目文件，为每个类目生成多语言名称、描述、评价与图片，输出到 output 目录。

流程拆分为：init_config -> load_categories -> run_generation -> save_output，
便于单测与维护。
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from app import read_categories_from_file, run_batch_generate, write_catalog_excel
from app.batch import DEFAULT_IMAGE_FOLDER
from bootstrap import build_content_generator, build_image_resolver
from core import ContentGenerator, GenerationError, ImageResolver, LanguageSet
from core.config import get_app_config, get_config_display, get_log_dir, get_output_dir, get_storage_dir, load_app_config
from models.schemas import CatalogRecord, RunConfigSchema

logger = logging.getLogger(__name__)


def init_config(
    *,
    output_dir: Path | None = None,
    log_dir: Path | None = None,
) -> RunConfigSchema:
    """
    初始化配置与日志：加载应用配置、配置 logging，返回运行时路径配置。

    Args:
        output_dir: 结果输出目录，默认从 core.config.get_output_dir() 获取。
        log_dir: 日志目录，默认从 core.config.get_log_dir() 获取。
    """
    load_app_config()
    config = RunConfigSchema(
        output_dir=output_dir or get_output_dir(),
        log_dir=log_dir or get_log_dir(),
        storage_dir=get_storage_dir(),
    )
    _setup_logging(config.log_dir)
    display = get_config_display()
    logger.info("配置已加载: %s", display)
    print(f"配置已加载: provider={display['provider']}, model={display['model']}, output_dir={config.output_dir}")
    return config


def _setup_logging(log_dir: Path) -> None:
    """
    将日志按日期写入 log_dir，文件名 catalog_content_YYYYMMDD.log。
    若已存在指向当日日志文件的 FileHandler 则不再添加。
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    today = datetime.now().strftime("%Y%m%d")
    log_file = log_dir / f"catalog_content_{today}.log"
    log_path = str(log_file.resolve())
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    # httpx 每个请求都打 INFO 日志
    logging.getLogger("httpx").setLevel(logging.WARNING)
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == log_path:
            return
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(handler)


def load_categories(input_path: Path) -> list[str]:
    """
    读取类目文件。

    Raises:
        FileNotFoundError: 文件不存在。
    """
    if not input_path.exists():
        raise FileNotFoundError(f"类目文件不存在: {input_path}")
    return read_categories_from_file(input_path)


def run_generation(
    categories: list[str],
    languages: LanguageSet,
    generator: ContentGenerator,
    resolver: ImageResolver | None,
    **kwargs,
) -> list[CatalogRecord]:
    """对类目列表批量生成，返回成功的记录；失败条目已记录日志。"""
    if not categories:
        return []
    records, failed = run_batch_generate(categories, languages, generator, resolver, **kwargs)
    without_image = sum(1 for r in records if not r.image)
    print(f"生成成功 {len(records)} 条，失败 {len(failed)} 条，无图片 {without_image} 条（已标红）。")
    return records


def save_output(
    records: list[CatalogRecord],
    languages: LanguageSet,
    output_dir: Path,
    *,
    source_stem: str | None = None,
) -> Path:
    """
    将生成结果写入 Excel 并保存到 output_dir，文件名带时间戳。

    Raises:
        RuntimeError: 写入 Excel 失败。
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_filename = f"{source_stem}_商品内容_{stamp}.xlsx" if source_stem else f"商品内容_{stamp}.xlsx"
    output_path = output_dir / output_filename
    try:
        write_catalog_excel(records, languages, output_path)
    except OSError as e:
        raise RuntimeError(f"写入结果文件失败: {output_path}") from e
    return output_path


def _parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """解析命令行参数；args 为 None 时使用 sys.argv，便于单测注入。"""
    parser = argparse.ArgumentParser(
        description="商品内容生成：按类目生成多语言名称、描述、评价，并搜索下载商品图片，输出 Excel。",
    )
    parser.add_argument("input_file", help="类目文件路径（每行一个类目，建议写完整层级，如 Home / Vacuum Cleaners）")
    parser.add_argument(
        "--languages",
        default=None,
        help="语言列表，如 uk:Ukrainian,en:English；第一个为主语言。默认取 app_config.yaml 的 generation.languages。",
    )
    parser.add_argument("--example", default=None, help="商品名称示例")
    parser.add_argument("--review-example", default=None, help="商品评价示例")
    parser.add_argument("--reviews", type=int, default=1, help="每个商品生成的评价条数，默认 1")
    parser.add_argument("--image-folder", default=DEFAULT_IMAGE_FOLDER, help="图片保存目录（存储盘内的相对路径）")
    parser.add_argument("--disk", default=None, help="存储盘名称，默认取 storage.default")
    parser.add_argument("--no-image", action="store_true", help="不搜索下载图片")
    return parser.parse_args(args)


def main(args: list[str] | None = None) -> None:
    """
    入口：初始化配置 -> 读取类目 -> 批量生成 -> 写结果。

      python main.py categories.txt
      python main.py categories.txt --languages uk:Ukrainian,en:English --reviews 3
    """
    parsed = _parse_args(args)
    config = init_config()

    try:
        languages = LanguageSet.parse(parsed.languages) if parsed.languages else LanguageSet.from_mapping(
            get_app_config().generation.languages
        )
    except ValueError as e:
        print(f"语言参数无效，退出: {e}")
        sys.exit(1)

    input_path = Path(parsed.input_file.strip().strip("\"'"))
    try:
        categories = load_categories(input_path)
    except (FileNotFoundError, RuntimeError) as e:
        print(f"读取类目失败，退出: {e}")
        sys.exit(1)
    if not categories:
        print(f"文件中没有有效类目行: {input_path}")
        return

    try:
        generator = build_content_generator()
    except GenerationError as e:
        print(f"大模型未配置，退出: {e}")
        sys.exit(1)
    resolver = None if parsed.no_image else build_image_resolver()
    if resolver is None and not parsed.no_image:
        print("未配置 Pexels API Key，跳过图片。")
    if resolver is not None and parsed.disk and parsed.disk not in resolver.storage.names:
        print(f"未配置的存储盘: {parsed.disk}（可选: {', '.join(resolver.storage.names)}），退出")
        sys.exit(1)

    records = run_generation(
        categories,
        languages,
        generator,
        resolver,
        example=parsed.example,
        review_example=parsed.review_example,
        reviews=parsed.reviews,
        image_folder=parsed.image_folder,
        disk=parsed.disk,
    )
    if not records:
        print("没有生成成功的商品，未写入结果文件。")
        return
    try:
        out_path = save_output(records, languages, config.output_dir, source_stem=input_path.stem)
    except RuntimeError as e:
        print(f"{e}")
        sys.exit(1)
    print(f"已写入: {out_path}")


if __name__ == "__main__":
    main()
