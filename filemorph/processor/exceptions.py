from filemorph.exceptions import ConversionError


class ConversionTimeoutError(ConversionError):
    """Raised when a job does not finish within its configured timeout."""
