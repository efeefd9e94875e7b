from filemorph.exceptions import ConversionError


class ExtractionError(ConversionError):
    """Base exception for remote extraction failures."""


class MissingCredentialError(ExtractionError):
    """Raised before any network call when no service API key is configured."""


class NetworkOrAIError(ExtractionError):
    """Raised when the AI provider call fails or returns a non-success status."""


class MalformedResponseError(ExtractionError):
    """Raised when the AI response cannot be parsed or has the wrong shape."""
