class ConversionError(Exception):
    """Base exception for every failure a conversion job can report to its caller.

    The message is user-facing: it is surfaced verbatim in the failed job state.
    """
