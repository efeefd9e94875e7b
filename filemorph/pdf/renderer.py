import asyncio
import multiprocessing
from concurrent.futures import Executor, ProcessPoolExecutor

from filemorph.concurrency import gather_bounded
from filemorph.logging.logger import Log
from filemorph.pdf.base import BasePageRenderer
from filemorph.pdf.models import RenderedPage, RenderProfile


class PageRenderer:
    """Rasterizes a bounded number of pages of a PDF in worker processes.

    Pages beyond `max_pages` are dropped; callers must not assume full coverage.
    Neither PyMuPDF nor pdfium may be driven from several threads, so each page
    is rendered in a separate process that opens its own copy of the document.
    At most `concurrency` pages render at once. The provider is pickled into
    the workers and must not hold per-instance state it expects back.
    """

    def __init__(
        self,
        provider: BasePageRenderer,
        *,
        concurrency: int = 4,
        max_pages: int = 20,
    ) -> None:
        self._provider = provider
        self._concurrency = concurrency
        self._max_pages = max_pages

    @property
    def max_pages(self) -> int:
        return self._max_pages

    async def render(
        self,
        pdf_bytes: bytes,
        profile: RenderProfile,
        *,
        all_pages: bool = False,
    ) -> list[RenderedPage]:
        """Render pages 1..min(count, max_pages), or every page if `all_pages`."""
        total = self._provider.page_count(pdf_bytes)
        count = total if all_pages else min(total, self._max_pages)
        if count < total:
            Log.warning(f"Document has {total} pages, rendering the first {count}")
        if count == 0:
            return []
        workers = min(self._concurrency, count)
        Log.info(f"Rendering {count} page(s) at scale {profile.scale} with {workers} worker(s)")
        pool = ProcessPoolExecutor(
            max_workers=workers, mp_context=multiprocessing.get_context("spawn")
        )
        try:
            return await gather_bounded(
                [
                    lambda i=index: self._render_one(pool, pdf_bytes, i, profile)
                    for index in range(count)
                ],
                workers,
            )
        finally:
            # Pages not yet started are dropped on failure or cancellation.
            pool.shutdown(wait=False, cancel_futures=True)

    async def _render_one(
        self, pool: Executor, pdf_bytes: bytes, index: int, profile: RenderProfile
    ) -> RenderedPage:
        loop = asyncio.get_running_loop()
        page = await loop.run_in_executor(
            pool, self._provider.render_page, pdf_bytes, index, profile
        )
        Log.debug(f"Rendered page {index + 1}: {page.width}x{page.height}")
        return page
