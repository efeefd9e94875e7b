import asyncio
from collections.abc import Sequence

from filemorph.archive.archiver import BatchArchiver
from filemorph.assets.loader import AssetLoader, InputPath
from filemorph.config.settings import Settings
from filemorph.extraction.extractor import Extractor
from filemorph.extraction.factory import ExtractorFactory
from filemorph.logging.logger import Log
from filemorph.pdf.base import BasePageRenderer
from filemorph.pdf.factory import PageRendererFactory
from filemorph.pdf.renderer import PageRenderer
from filemorph.processor.exceptions import ConversionTimeoutError
from filemorph.processor.models import ConversionKind, ConversionOptions, ConversionResult
from filemorph.processor.pipeline import ConversionPipeline, PipelineContext
from filemorph.processor.progress import ProgressCallback, ProgressTracker
from filemorph.processor.steps import (
    CompressPdfPipeline,
    ExcelToPdfPipeline,
    ImageToExcelPipeline,
    ImageToPdfPipeline,
    PdfToExcelPipeline,
)
from filemorph.synthesis.synthesizer import DocumentSynthesizer


class Orchestrator:
    """Single entry point for conversions: dispatches by kind and runs its pipeline.

    Input and configuration problems are reported before any asynchronous work
    starts. The pipeline runs under the job timeout; cancelling the awaiting
    task cancels the job at its next suspension point.
    """

    def __init__(
        self,
        *,
        loader: AssetLoader,
        extractor: Extractor,
        pipelines: dict[ConversionKind, ConversionPipeline],
        timeout_seconds: float,
    ) -> None:
        self._loader = loader
        self._extractor = extractor
        self._pipelines = pipelines
        self._timeout_seconds = timeout_seconds

    async def convert(
        self,
        kind: ConversionKind,
        files: Sequence[InputPath],
        on_progress: ProgressCallback | None = None,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        """Run one conversion and return its artifact.

        Raises:
            ConversionError: subclass describing the failure.
        """
        options = options or ConversionOptions()
        pipeline = self._pipelines.get(kind)
        if pipeline is None:
            raise ValueError(f"Unsupported conversion type: {kind!r}")
        self._loader.validate(files, kind)
        if kind.requires_extraction(options):
            self._extractor.ensure_credential()

        Log.info(f"Starting '{kind.value}' conversion of {len(files)} file(s)")
        context = PipelineContext(
            kind=kind,
            files=files,
            options=options,
            progress=ProgressTracker(on_progress),
        )
        try:
            async with asyncio.timeout(self._timeout_seconds):
                result = await pipeline.run(context)
        except TimeoutError as exc:
            raise ConversionTimeoutError(
                f"The conversion did not finish within {self._timeout_seconds:g} seconds."
            ) from exc
        Log.info(f"Finished '{kind.value}' conversion: {result.filename} ({result.size} bytes)")
        return result


def build_orchestrator(
    settings: Settings,
    *,
    page_renderer: BasePageRenderer | None = None,
    extractor: Extractor | None = None,
) -> Orchestrator:
    """Build an Orchestrator with all required adapters."""
    loader = AssetLoader(concurrency=settings.load_concurrency)
    renderer = PageRenderer(
        page_renderer or PageRendererFactory.create(settings),
        concurrency=settings.render_concurrency,
        max_pages=settings.max_rendered_pages,
    )
    extractor = extractor or ExtractorFactory.create(settings)
    synthesizer = DocumentSynthesizer()
    archiver = BatchArchiver()
    pipelines: dict[ConversionKind, ConversionPipeline] = {
        ConversionKind.IMAGE_TO_PDF: ImageToPdfPipeline(loader, extractor, synthesizer),
        ConversionKind.IMAGE_TO_EXCEL: ImageToExcelPipeline(loader, extractor, synthesizer),
        ConversionKind.PDF_TO_EXCEL: PdfToExcelPipeline(loader, renderer, extractor, synthesizer),
        ConversionKind.EXCEL_TO_PDF: ExcelToPdfPipeline(loader, synthesizer),
        ConversionKind.COMPRESS_PDF: CompressPdfPipeline(loader, renderer, synthesizer, archiver),
    }
    return Orchestrator(
        loader=loader,
        extractor=extractor,
        pipelines=pipelines,
        timeout_seconds=settings.job_timeout_seconds,
    )
