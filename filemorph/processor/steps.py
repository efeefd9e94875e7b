"""One conversion pipeline per conversion kind."""

from dataclasses import replace

from filemorph.archive.archiver import BatchArchiver
from filemorph.assets.images import decode_image
from filemorph.assets.loader import AssetLoader
from filemorph.extraction.extractor import Extractor
from filemorph.extraction.models import ExtractedTable, OcrBlock
from filemorph.pdf.exceptions import RenderError
from filemorph.pdf.models import COMPRESSION_PROFILE, EXTRACTION_PROFILE, RenderedPage
from filemorph.pdf.renderer import PageRenderer
from filemorph.processor.models import ConversionResult
from filemorph.processor.pipeline import ConversionPipeline, PipelineContext
from filemorph.processor.progress import LOAD_BAND, SYNTHESIS_BAND, WORK_BAND
from filemorph.synthesis import naming
from filemorph.synthesis.synthesizer import DocumentSynthesizer


async def _load_assets(loader: AssetLoader, context: PipelineContext, status: str) -> None:
    band = context.progress.band(LOAD_BAND)
    band.report(0.5, status)
    context.assets = await loader.load(context.files, context.kind)
    band.report(1.0, f"Loaded {len(context.assets)} file(s)")


def _decode_images(context: PipelineContext) -> list[RenderedPage]:
    return [decode_image(asset, index) for index, asset in enumerate(context.assets)]


class ImageToPdfPipeline(ConversionPipeline):
    def __init__(
        self,
        loader: AssetLoader,
        extractor: Extractor,
        synthesizer: DocumentSynthesizer,
    ) -> None:
        self._loader = loader
        self._extractor = extractor
        self._synthesizer = synthesizer

    async def run(self, context: PipelineContext) -> ConversionResult:
        await _load_assets(self._loader, context, "Parallelizing asset loading...")
        pages = _decode_images(context)

        ocr_blocks: list[list[OcrBlock]] | None = None
        if context.options.use_ocr:
            work = context.progress.band(WORK_BAND)
            work.report(0.0, "Executing fast-path OCR...")
            ocr_blocks = await self._extractor.ocr(
                pages,
                on_image=lambda done, total: work.report(
                    done / total, f"OCR complete for image {done} of {total}"
                ),
            )

        synthesis = context.progress.band(SYNTHESIS_BAND)
        synthesis.report(0.0, "Synthesizing PDF stream...")
        result = self._synthesizer.images_to_pdf(pages, naming.image_bundle_name(), ocr_blocks)
        synthesis.report(1.0, f"Finalized {len(pages)} page(s)")
        return result


class ImageToExcelPipeline(ConversionPipeline):
    def __init__(
        self,
        loader: AssetLoader,
        extractor: Extractor,
        synthesizer: DocumentSynthesizer,
    ) -> None:
        self._loader = loader
        self._extractor = extractor
        self._synthesizer = synthesizer

    async def run(self, context: PipelineContext) -> ConversionResult:
        await _load_assets(self._loader, context, "Preparing high-speed analysis...")
        pages = _decode_images(context)

        work = context.progress.band(WORK_BAND)
        tables: list[ExtractedTable] = []
        for position, (asset, page) in enumerate(zip(context.assets, pages)):
            work.report(position / len(pages), f"AI analyzing: {asset.name}...")
            prefix = naming.image_sheet_prefix(asset.name)
            tables.extend(
                replace(table, sheet_name=f"{prefix}_{table.sheet_name}")
                for table in await self._extractor.extract_tables([page])
            )
        work.report(1.0, f"Analyzed {len(pages)} image(s)")

        synthesis = context.progress.band(SYNTHESIS_BAND)
        synthesis.report(0.5, "Encoding spreadsheet binary...")
        result = self._synthesizer.tables_to_spreadsheet(tables, naming.image_analysis_name())
        synthesis.report(1.0, f"Wrote {len(tables)} sheet(s)")
        return result


class PdfToExcelPipeline(ConversionPipeline):
    def __init__(
        self,
        loader: AssetLoader,
        renderer: PageRenderer,
        extractor: Extractor,
        synthesizer: DocumentSynthesizer,
    ) -> None:
        self._loader = loader
        self._renderer = renderer
        self._extractor = extractor
        self._synthesizer = synthesizer

    async def run(self, context: PipelineContext) -> ConversionResult:
        await _load_assets(self._loader, context, "Initializing high-fidelity scanner...")
        source = context.assets[0]

        work = context.progress.band(WORK_BAND)
        work.report(0.0, f"Rendering up to {self._renderer.max_pages} pages in parallel...")
        pages = await self._renderer.render(source.data, EXTRACTION_PROFILE)
        if not pages:
            raise RenderError(f"'{source.name}' has no pages to render.")
        work.report(0.4, "Performing complex data extraction...")
        tables = await self._extractor.extract_tables(pages, accurate=True)
        work.report(1.0, f"Extracted {len(tables)} table(s) from {len(pages)} page(s)")

        synthesis = context.progress.band(SYNTHESIS_BAND)
        synthesis.report(0.5, "Encoding spreadsheet binary...")
        result = self._synthesizer.tables_to_spreadsheet(tables, naming.pdf_data_name(source.name))
        synthesis.report(1.0, f"Wrote {len(tables)} sheet(s)")
        return result


class ExcelToPdfPipeline(ConversionPipeline):
    def __init__(self, loader: AssetLoader, synthesizer: DocumentSynthesizer) -> None:
        self._loader = loader
        self._synthesizer = synthesizer

    async def run(self, context: PipelineContext) -> ConversionResult:
        await _load_assets(self._loader, context, "Parsing spreadsheet...")
        source = context.assets[0]

        synthesis = context.progress.band(SYNTHESIS_BAND)
        synthesis.report(0.0, f"Formatting: {source.name}")
        result = self._synthesizer.spreadsheet_to_pdf(
            source.data, source.name, naming.spreadsheet_pdf_name(source.name)
        )
        synthesis.report(1.0, "PDF layout complete")
        return result


class CompressPdfPipeline(ConversionPipeline):
    """Re-renders every page at reduced resolution and quality.

    One input yields one PDF; several inputs are compressed independently and
    returned as a ZIP archive.
    """

    def __init__(
        self,
        loader: AssetLoader,
        renderer: PageRenderer,
        synthesizer: DocumentSynthesizer,
        archiver: BatchArchiver,
    ) -> None:
        self._loader = loader
        self._renderer = renderer
        self._synthesizer = synthesizer
        self._archiver = archiver

    async def run(self, context: PipelineContext) -> ConversionResult:
        await _load_assets(self._loader, context, "Batch processing optimized streams...")
        batch = len(context.assets) > 1

        work = context.progress.band(WORK_BAND)
        outputs: list[ConversionResult] = []
        for position, asset in enumerate(context.assets):
            band = work.sub_band(position, len(context.assets))
            band.report(0.0, f"Compressing: {asset.name}")
            pages = await self._renderer.render(asset.data, COMPRESSION_PROFILE, all_pages=True)
            filename = (
                naming.batch_entry_name(asset.name) if batch else naming.optimized_pdf_name(asset.name)
            )
            outputs.append(self._synthesizer.compressed_pdf(pages, asset.name, filename))
            band.report(1.0, f"Compressed: {asset.name}")

        if not batch:
            context.progress.band(SYNTHESIS_BAND).report(1.0, "Optimized stream ready")
            return outputs[0]

        synthesis = context.progress.band(SYNTHESIS_BAND)
        synthesis.report(0.0, "Packaging archive...")
        result = self._archiver.pack(outputs, naming.batch_archive_name())
        synthesis.report(1.0, f"Archived {len(outputs)} file(s)")
        return result
