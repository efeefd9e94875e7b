"""Accepted input formats per conversion kind."""

import mimetypes
from collections.abc import Callable
from pathlib import PurePath

from filemorph.processor.models import ConversionKind

PDF_MIME_TYPE = "application/pdf"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_EXTENSION_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".xlsx": XLSX_MIME_TYPE,
    ".xlsm": "application/vnd.ms-excel.sheet.macroEnabled.12",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}

SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xlsm"})
TABLE_IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
TABLE_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})
RASTER_EXTENSIONS = frozenset(
    ext for ext, mime in _EXTENSION_MIME_TYPES.items() if mime.startswith("image/")
)


def guess_mime_type(name: str) -> str:
    """Guess a mime type from the file name, preferring the known raster/document table."""
    suffix = PurePath(name).suffix.lower()
    if suffix in _EXTENSION_MIME_TYPES:
        return _EXTENSION_MIME_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"


def _is_pdf(name: str, mime_type: str) -> bool:
    return mime_type == PDF_MIME_TYPE or name.lower().endswith(".pdf")


def _is_spreadsheet(name: str, mime_type: str) -> bool:
    _ = mime_type
    return PurePath(name).suffix.lower() in SPREADSHEET_EXTENSIONS


def _is_table_image(name: str, mime_type: str) -> bool:
    return (
        mime_type in TABLE_IMAGE_MIME_TYPES
        or PurePath(name).suffix.lower() in TABLE_IMAGE_EXTENSIONS
    )


def _is_image(name: str, mime_type: str) -> bool:
    return mime_type.startswith("image/") or PurePath(name).suffix.lower() in RASTER_EXTENSIONS


_PREDICATES: dict[ConversionKind, Callable[[str, str], bool]] = {
    ConversionKind.PDF_TO_EXCEL: _is_pdf,
    ConversionKind.COMPRESS_PDF: _is_pdf,
    ConversionKind.EXCEL_TO_PDF: _is_spreadsheet,
    ConversionKind.IMAGE_TO_EXCEL: _is_table_image,
    ConversionKind.IMAGE_TO_PDF: _is_image,
}


def is_accepted(kind: ConversionKind, name: str, mime_type: str) -> bool:
    """Return True if a file with this name and mime type is valid input for `kind`."""
    return _PREDICATES[kind](name, mime_type)
