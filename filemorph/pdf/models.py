import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderProfile:
    """Resolution scale (relative to 72 dpi) and JPEG quality for rasterized pages."""

    scale: float
    jpeg_quality: int


# Higher resolution for extraction accuracy.
EXTRACTION_PROFILE = RenderProfile(scale=2.0, jpeg_quality=80)
# Lower resolution and aggressive quality reduction for size-sensitive output.
COMPRESSION_PROFILE = RenderProfile(scale=1.2, jpeg_quality=40)


@dataclass(frozen=True)
class RenderedPage:
    """One page as an encoded image. width/height are pixels and define overlay coordinates."""

    data: bytes
    mime_type: str
    width: int
    height: int
    index: int

    @property
    def orientation(self) -> str:
        return "landscape" if self.width > self.height else "portrait"

    def as_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"
