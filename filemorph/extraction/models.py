from dataclasses import dataclass, field
from typing import Literal

# Normalized coordinate scale used by the OCR service for bounding boxes.
BOX_SCALE = 1000


@dataclass(frozen=True)
class ExtractedTable:
    """One logical table found in the input. Rows may be ragged."""

    sheet_name: str
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class PixelBox:
    """A box in a page's pixel space, origin at the top-left corner."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class OcrBlock:
    """One recognized text region; box is (ymin, xmin, ymax, xmax) on a 0-1000 scale."""

    text: str
    ymin: float
    xmin: float
    ymax: float
    xmax: float

    def to_pixel_box(self, page_width: float, page_height: float) -> PixelBox:
        """Rescale the normalized box into a page of the given pixel size."""
        return PixelBox(
            x=self.xmin / BOX_SCALE * page_width,
            y=self.ymin / BOX_SCALE * page_height,
            width=(self.xmax - self.xmin) / BOX_SCALE * page_width,
            height=(self.ymax - self.ymin) / BOX_SCALE * page_height,
        )


@dataclass(frozen=True)
class TablePayload:
    """Parsed response of a table extraction request."""

    tables: list[ExtractedTable]
    kind: Literal["tables"] = "tables"


@dataclass(frozen=True)
class OcrPayload:
    """Parsed response of an OCR request for one image."""

    blocks: list[OcrBlock]
    kind: Literal["ocr"] = "ocr"


ExtractionPayload = TablePayload | OcrPayload
