from abc import ABC, abstractmethod

from filemorph.pdf.models import RenderedPage, RenderProfile


class BasePageRenderer(ABC):
    """Contract for all page rendering adapters."""

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        """Return the number of pages in the document.

        Raises:
            RenderError: if the document cannot be opened.
        """

    @abstractmethod
    def render_page(self, pdf_bytes: bytes, index: int, profile: RenderProfile) -> RenderedPage:
        """Rasterize one page to a JPEG image.

        Args:
            pdf_bytes: Raw PDF file content.
            index: Zero-based page index.
            profile: Resolution scale and JPEG quality.

        Returns:
            RenderedPage with pixel dimensions of the rendered image.

        Raises:
            RenderError: if the page cannot be rendered for any reason.
        """
