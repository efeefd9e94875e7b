from filemorph.exceptions import ConversionError


class SynthesisError(ConversionError):
    """Raised when an output document cannot be built from its inputs."""


class CompressionError(SynthesisError):
    """Raised when compressing a PDF produces no renderable pages."""
