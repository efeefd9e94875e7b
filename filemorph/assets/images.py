import io

from PIL import Image, UnidentifiedImageError

from filemorph.assets.exceptions import AssetDecodeError
from filemorph.assets.models import SourceAsset
from filemorph.pdf.models import RenderedPage

# Formats that can be embedded into a PDF page as-is.
_EMBEDDABLE_FORMATS = {"JPEG": "image/jpeg", "PNG": "image/png"}


def decode_image(asset: SourceAsset, index: int) -> RenderedPage:
    """Turn an image asset into a page whose size is the image's pixel size.

    Images in formats other than JPEG or PNG are re-encoded as PNG.
    """
    try:
        with Image.open(io.BytesIO(asset.data)) as img:
            img.load()
            width, height = img.size
            if img.format in _EMBEDDABLE_FORMATS:
                return RenderedPage(
                    data=asset.data,
                    mime_type=_EMBEDDABLE_FORMATS[img.format],
                    width=width,
                    height=height,
                    index=index,
                )
            buffer = io.BytesIO()
            converted = img if img.mode in ("RGB", "RGBA", "L", "LA") else img.convert("RGBA")
            converted.save(buffer, format="PNG")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise AssetDecodeError(f"Could not decode image '{asset.name}': {exc}") from exc
    return RenderedPage(
        data=buffer.getvalue(),
        mime_type="image/png",
        width=width,
        height=height,
        index=index,
    )
