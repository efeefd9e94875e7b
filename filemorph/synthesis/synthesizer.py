from collections.abc import Sequence

from filemorph.assets.formats import PDF_MIME_TYPE, XLSX_MIME_TYPE
from filemorph.extraction.models import ExtractedTable, OcrBlock
from filemorph.logging.logger import Log
from filemorph.pdf.models import RenderedPage
from filemorph.processor.models import ConversionResult
from filemorph.synthesis.exceptions import CompressionError
from filemorph.synthesis.pdf_writer import images_to_pdf
from filemorph.synthesis.spreadsheet import read_sheets, tables_to_xlsx
from filemorph.synthesis.table_pdf import sheets_to_pdf


class DocumentSynthesizer:
    """Builds output artifacts from rendered images, extracted tables or spreadsheets."""

    def images_to_pdf(
        self,
        pages: Sequence[RenderedPage],
        filename: str,
        ocr_blocks: Sequence[Sequence[OcrBlock]] | None = None,
    ) -> ConversionResult:
        data = images_to_pdf(pages, ocr_blocks)
        Log.info(f"Built {filename}: {len(pages)} page(s), {len(data)} bytes")
        return ConversionResult(data=data, filename=filename, media_type=PDF_MIME_TYPE)

    def tables_to_spreadsheet(
        self, tables: Sequence[ExtractedTable], filename: str
    ) -> ConversionResult:
        data = tables_to_xlsx(tables)
        Log.info(f"Built {filename}: {len(tables)} sheet(s), {len(data)} bytes")
        return ConversionResult(data=data, filename=filename, media_type=XLSX_MIME_TYPE)

    def spreadsheet_to_pdf(
        self, workbook_bytes: bytes, source_name: str, filename: str
    ) -> ConversionResult:
        sheets = read_sheets(workbook_bytes, source_name)
        data = sheets_to_pdf(sheets)
        Log.info(f"Built {filename}: {len(sheets)} sheet(s), {len(data)} bytes")
        return ConversionResult(data=data, filename=filename, media_type=PDF_MIME_TYPE)

    def compressed_pdf(
        self, pages: Sequence[RenderedPage], source_name: str, filename: str
    ) -> ConversionResult:
        """Rebuild a PDF from compressed page images."""
        if not pages:
            raise CompressionError(f"Compression failed: '{source_name}' has no renderable pages.")
        return self.images_to_pdf(pages, filename)
