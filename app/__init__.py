"""应用层：批量生成、文件读写。"""

from .batch import build_catalog_record, run_batch_generate
from .io import read_categories_from_file, write_catalog_excel

__all__ = [
    "build_catalog_record",
    "read_categories_from_file",
    "run_batch_generate",
    "write_catalog_excel",
]
