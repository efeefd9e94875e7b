from filemorph.exceptions import ConversionError


class AssetError(ConversionError):
    """Base exception for input asset errors."""


class UnsupportedFormatError(AssetError):
    """Raised when an input file does not match the formats accepted by a conversion."""


class InputCountError(AssetError):
    """Raised when a conversion receives no files, or more than it accepts."""


class AssetReadError(AssetError):
    """Raised when an input file cannot be read from disk."""


class AssetDecodeError(AssetError):
    """Raised when an input file passes validation but cannot be decoded."""
