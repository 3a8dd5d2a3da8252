"""文件读写：类目列表读取、生成结果写入 Excel。"""

from __future__ import annotations

from pathlib import Path

import openpyxl  # type: ignore[import-untyped]
from openpyxl.styles import Font  # type: ignore[import-untyped]

from core import LanguageSet
from core.llm import DESCRIPTION_PREFIX, TITLE_PREFIX
from models.schemas import CatalogRecord

REVIEW_HEADERS = ("类目", "商品名称", "评价", "评分")


def read_categories_from_file(file_path: Path) -> list[str]:
    """读取文件，每行一个类目路径，去空行、去首尾空白。"""
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"无法读取文件 {file_path}: {e}") from e
    return [line.strip() for line in text.splitlines() if line.strip()]


def product_headers(languages: LanguageSet) -> list[str]:
    return ["类目", *languages.field_names(TITLE_PREFIX), *languages.field_names(DESCRIPTION_PREFIX), "图片"]


def _append_text_row(ws, values: list[str]) -> None:
    """追加一行；以 = 开头的模型文本按字符串写入，不作为公式。"""
    ws.append(values)
    for cell in ws[ws.max_row]:
        if isinstance(cell.value, str) and cell.value.startswith("="):
            cell.data_type = "s"


def write_catalog_excel(records: list[CatalogRecord], languages: LanguageSet, output_path: Path) -> None:
    """将结果写入 Excel：「商品」与「评价」两个工作表，未获取到图片的商品行标红。"""
    wb = openpyxl.Workbook()
    ws = wb.active
    if ws is None:
        raise RuntimeError("无法创建工作表")
    ws.title = "商品"
    headers = product_headers(languages)
    ws.append(headers)
    red_font = Font(color="FF0000")
    for row_idx, record in enumerate(records, start=2):
        row = [
            record.category_path,
            *(record.titles.get(name, "") for name in languages.field_names(TITLE_PREFIX)),
            *(record.descriptions.get(name, "") for name in languages.field_names(DESCRIPTION_PREFIX)),
            record.image or "",
        ]
        _append_text_row(ws, row)
        if not record.image:
            for col_idx in range(1, len(headers) + 1):
                ws.cell(row=row_idx, column=col_idx).font = red_font

    reviews_ws = wb.create_sheet("评价")
    reviews_ws.append(list(REVIEW_HEADERS))
    primary_title = f"{TITLE_PREFIX}{languages.primary.code}"
    for record in records:
        for review in record.reviews:
            _append_text_row(
                reviews_ws,
                [record.category_path, record.titles.get(primary_title, ""), review.get("text", ""), review.get("rating", "")]
            )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
