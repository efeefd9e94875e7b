"""Output file naming conventions per conversion kind."""

import time
from pathlib import PurePath

BRAND = "FileMorph"


def _stem(source_name: str) -> str:
    return PurePath(source_name).stem or "document"


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def image_bundle_name() -> str:
    return f"{BRAND}_Bundle_{_timestamp_ms()}.pdf"


def image_analysis_name() -> str:
    return f"{BRAND}_Analysis.xlsx"


def pdf_data_name(source_name: str) -> str:
    return f"{_stem(source_name)}_data.xlsx"


def spreadsheet_pdf_name(source_name: str) -> str:
    return f"{_stem(source_name)}.pdf"


def optimized_pdf_name(source_name: str) -> str:
    return f"{_stem(source_name)}_optimized.pdf"


def batch_entry_name(source_name: str) -> str:
    return f"{_stem(source_name)}_lite.pdf"


def batch_archive_name() -> str:
    return f"{BRAND}_Batch_{_timestamp_ms()}.zip"


def image_sheet_prefix(source_name: str) -> str:
    """Prefix for sheets extracted from one of several images."""
    return _stem(source_name)[:10]
