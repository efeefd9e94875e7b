from filemorph.config.settings import Settings
from filemorph.pdf.base import BasePageRenderer
from filemorph.pdf.pdfplumber_adapter import PdfPlumberAdapter
from filemorph.pdf.pymupdf_adapter import PyMuPdfAdapter


class PageRendererFactory:
    """Creates the correct page rendering adapter based on settings."""

    ADAPTERS: dict[str, type[BasePageRenderer]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageRenderer:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
