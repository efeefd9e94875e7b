"""Validates parsed service output and builds typed extraction payloads."""

import math
from typing import Any

from filemorph.extraction.exceptions import MalformedResponseError
from filemorph.extraction.models import BOX_SCALE, ExtractedTable, OcrBlock, OcrPayload, TablePayload
from filemorph.logging.logger import Log


def build_table_payload(data: Any) -> TablePayload:
    """Build a TablePayload from a bare table array or a ``{"tables": [...]}`` object.

    Raises:
        MalformedResponseError: if the structure does not match the table schema.
    """
    if isinstance(data, dict) and "tables" in data:
        data = data["tables"]
    if not isinstance(data, list):
        raise MalformedResponseError("Invalid AI data format: expected a list of tables")
    return TablePayload(tables=[_build_table(item, i) for i, item in enumerate(data)])


def _build_table(raw: Any, index: int) -> ExtractedTable:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Table at index {index} must be an object")
    sheet_name = raw.get("sheetName")
    if not isinstance(sheet_name, str) or not sheet_name.strip():
        sheet_name = f"Table {index + 1}"
    headers = raw.get("headers", [])
    if not isinstance(headers, list):
        raise MalformedResponseError(f"Table at index {index}: 'headers' must be a list")
    rows = raw.get("rows", [])
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise MalformedResponseError(f"Table at index {index}: 'rows' must be a list of lists")
    return ExtractedTable(
        sheet_name=sheet_name.strip(),
        headers=[_cell_text(h) for h in headers],
        rows=[[_cell_text(cell) for cell in row] for row in rows],
    )


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def build_ocr_payload(data: Any) -> OcrPayload:
    """Build an OcrPayload from a ``{"blocks": [...]}`` object.

    Blocks whose box is not four numbers are dropped. Coordinates are clamped
    into the 0-1000 range and reordered so that min <= max on both axes.

    Raises:
        MalformedResponseError: if the response is not an object with a block list.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Invalid AI data format: expected an OCR object")
    raw_blocks = data.get("blocks", [])
    if not isinstance(raw_blocks, list):
        raise MalformedResponseError("'blocks' must be a list")
    blocks: list[OcrBlock] = []
    for i, raw in enumerate(raw_blocks):
        block = _build_block(raw)
        if block is None:
            Log.warning(f"Dropping OCR block {i}: invalid text or box_2d")
            continue
        blocks.append(block)
    return OcrPayload(blocks=blocks)


def _build_block(raw: Any) -> OcrBlock | None:
    if not isinstance(raw, dict):
        return None
    text = raw.get("text")
    box = raw.get("box_2d")
    if not isinstance(text, str) or not isinstance(box, list) or len(box) != 4:
        return None
    if not all(_is_number(v) for v in box):
        return None
    ymin, xmin, ymax, xmax = (_clamp(float(v)) for v in box)
    return OcrBlock(
        text=text,
        ymin=min(ymin, ymax),
        xmin=min(xmin, xmax),
        ymax=max(ymin, ymax),
        xmax=max(xmin, xmax),
    )


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _clamp(value: float) -> float:
    return max(0.0, min(float(BOX_SCALE), value))
