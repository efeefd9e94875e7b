import io
import json
import os
import time
from collections.abc import Callable, Sequence

import openpyxl
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from filemorph.extraction.client_base import BaseExtractionClient
from filemorph.extraction.schemas import OCR_SCHEMA_NAME, TABLE_SCHEMA_NAME
from filemorph.pdf.base import BasePageRenderer
from filemorph.pdf.exceptions import RenderError
from filemorph.pdf.models import RenderedPage, RenderProfile


def make_pdf_bytes(pages: int, text: str = "Page") -> bytes:
    """Build a letter-sized PDF with `pages` pages, each labelled with its number."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for number in range(1, pages + 1):
        c.drawString(72, 720, f"{text} {number}")
        c.showPage()
    c.save()
    return buf.getvalue()


def make_image_bytes(width: int, height: int, fmt: str = "JPEG", color: str = "white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(buf, format=fmt)
    return buf.getvalue()


def make_workbook_bytes(sheets: dict[str, list[list[object]]]) -> bytes:
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        sheet = workbook.create_sheet(title=name)
        for row in rows:
            sheet.append(row)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


class FakeExtractionClient(BaseExtractionClient):
    """Records every request and answers from per-schema response factories."""

    def __init__(
        self,
        tables_response: Callable[[Sequence[str]], str] | None = None,
        ocr_response: Callable[[Sequence[str]], str] | None = None,
    ) -> None:
        self.calls: list[dict[str, object]] = []
        self._responses = {
            TABLE_SCHEMA_NAME: tables_response or (lambda urls: json.dumps([])),
            OCR_SCHEMA_NAME: ocr_response or (lambda urls: json.dumps({"blocks": []})),
        }

    async def create_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_urls: Sequence[str],
        json_schema: dict[str, object],
        schema_name: str,
    ) -> str:
        self.calls.append(
            {"model": model, "schema_name": schema_name, "image_count": len(image_urls)}
        )
        return self._responses[schema_name](image_urls)




class StubPageRenderer(BasePageRenderer):
    """Picklable rendering provider for worker-process tests.

    Every rendered page carries the id of the process that rendered it as its data.
    """

    def __init__(self, pages: int, fail_on: int | None = None, delay: float = 0.0) -> None:
        self.pages = pages
        self.fail_on = fail_on
        self.delay = delay

    def page_count(self, pdf_bytes: bytes) -> int:
        return self.pages

    def render_page(self, pdf_bytes: bytes, index: int, profile: RenderProfile) -> RenderedPage:
        if index == self.fail_on:
            raise RenderError(f"cannot render page {index + 1}")
        time.sleep(self.delay)
        return RenderedPage(
            data=str(os.getpid()).encode(),
            mime_type="image/jpeg",
            width=int(100 * profile.scale),
            height=int(200 * profile.scale),
            index=index,
        )
