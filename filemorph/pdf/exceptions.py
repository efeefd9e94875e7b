from filemorph.exceptions import ConversionError


class RenderError(ConversionError):
    """Raised when a PDF cannot be opened or a page cannot be rasterized."""
