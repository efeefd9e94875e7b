import pymupdf

from filemorph.pdf.base import BasePageRenderer
from filemorph.pdf.exceptions import RenderError
from filemorph.pdf.models import RenderedPage, RenderProfile


class PyMuPdfAdapter(BasePageRenderer):
    """Renders PDF pages using PyMuPDF."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return doc.page_count
        except Exception as exc:
            raise RenderError(f"Could not open PDF: {exc}") from exc

    def render_page(self, pdf_bytes: bytes, index: int, profile: RenderProfile) -> RenderedPage:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page = doc.load_page(index)
                pixmap = page.get_pixmap(
                    matrix=pymupdf.Matrix(profile.scale, profile.scale), alpha=False
                )
                try:
                    data = pixmap.tobytes("jpeg", jpg_quality=profile.jpeg_quality)
                    width, height = pixmap.width, pixmap.height
                finally:
                    del pixmap
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"pymupdf could not render page {index + 1}: {exc}") from exc
        return RenderedPage(
            data=data, mime_type="image/jpeg", width=width, height=height, index=index
        )
