import io
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import InvalidFileException

from filemorph.extraction.models import ExtractedTable
from filemorph.synthesis.exceptions import SynthesisError
from filemorph.synthesis.sheet_names import unique_sheet_names


@dataclass(frozen=True)
class SheetData:
    """Cell values of one non-empty worksheet, as text."""

    name: str
    rows: list[list[str]]


def tables_to_xlsx(tables: Sequence[ExtractedTable]) -> bytes:
    """Write one sheet per table: headers in the first row, then the data rows."""
    if not tables:
        raise SynthesisError("No tables were found in the document.")
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    names = unique_sheet_names(table.sheet_name for table in tables)
    for name, table in zip(names, tables):
        sheet = workbook.create_sheet(title=name)
        sheet.append([_clean_cell(h) for h in table.headers])
        for row in table.rows:
            sheet.append([_clean_cell(cell) for cell in row])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _clean_cell(value: str) -> str:
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def read_sheets(data: bytes, source_name: str) -> list[SheetData]:
    """Read every worksheet with at least one non-empty row.

    Trailing empty rows and cells are dropped; shorter rows are padded so the
    sheet is rectangular.
    """
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise SynthesisError(f"Could not read spreadsheet '{source_name}': {exc}") from exc
    try:
        sheets = []
        for worksheet in workbook.worksheets:
            rows = [_row_text(values) for values in worksheet.iter_rows(values_only=True)]
            while rows and not any(rows[-1]):
                rows.pop()
            if not rows:
                continue
            width = max(len(row) for row in rows)
            sheets.append(
                SheetData(name=worksheet.title, rows=[row + [""] * (width - len(row)) for row in rows])
            )
        return sheets
    finally:
        workbook.close()


def _row_text(values: Sequence[object]) -> list[str]:
    cells = ["" if value is None else str(value) for value in values]
    while cells and not cells[-1]:
        cells.pop()
    return cells
