import io

import pdfplumber

from filemorph.pdf.base import BasePageRenderer
from filemorph.pdf.exceptions import RenderError
from filemorph.pdf.models import RenderedPage, RenderProfile

_BASE_DPI = 72


class PdfPlumberAdapter(BasePageRenderer):
    """Renders PDF pages using pdfplumber (pypdfium2 under the hood)."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as exc:
            raise RenderError(f"Could not open PDF: {exc}") from exc

    def render_page(self, pdf_bytes: bytes, index: int, profile: RenderProfile) -> RenderedPage:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page = pdf.pages[index]
                page_image = page.to_image(resolution=_BASE_DPI * profile.scale)
                image = page_image.original.convert("RGB")
                buffer = io.BytesIO()
                image.save(buffer, format="JPEG", quality=profile.jpeg_quality)
                width, height = image.size
                page.close()
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"pdfplumber could not render page {index + 1}: {exc}") from exc
        return RenderedPage(
            data=buffer.getvalue(), mime_type="image/jpeg", width=width, height=height, index=index
        )
