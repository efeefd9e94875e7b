from collections.abc import Sequence

import pymupdf

from filemorph.extraction.models import OcrBlock
from filemorph.logging.logger import Log
from filemorph.pdf.models import RenderedPage
from filemorph.synthesis.exceptions import SynthesisError

# Font size relative to the height of an OCR box.
_FONT_HEIGHT_RATIO = 0.8
_INVISIBLE_RENDER_MODE = 3


def images_to_pdf(
    pages: Sequence[RenderedPage],
    ocr_blocks: Sequence[Sequence[OcrBlock]] | None = None,
) -> bytes:
    """Build a PDF with one page per image, each sized to the image's pixel dimensions.

    If `ocr_blocks` is given, an invisible text layer is placed over each page so
    the text can be selected and searched without changing the page's look.
    """
    if not pages:
        raise SynthesisError("No pages to write.")
    with pymupdf.open() as doc:  # type: ignore[no-untyped-call]
        for position, image in enumerate(pages):
            page = doc.new_page(width=image.width, height=image.height)
            page.insert_image(page.rect, stream=image.data)
            Log.debug(f"Page {position + 1}: {image.width}x{image.height} {image.orientation}")
            if ocr_blocks is not None and position < len(ocr_blocks):
                placed = sum(_insert_invisible_text(page, block, image) for block in ocr_blocks[position])
                Log.debug(f"Page {position + 1}: placed {placed} text block(s)")
        return doc.tobytes(garbage=3, deflate=True)


def _insert_invisible_text(page: pymupdf.Page, block: OcrBlock, image: RenderedPage) -> int:
    box = block.to_pixel_box(image.width, image.height)
    fontsize = box.height * _FONT_HEIGHT_RATIO
    if fontsize < 1 or not block.text.strip():
        return 0
    page.insert_text(
        (box.x, box.y + fontsize),
        block.text,
        fontsize=fontsize,
        render_mode=_INVISIBLE_RENDER_MODE,
    )
    return 1
