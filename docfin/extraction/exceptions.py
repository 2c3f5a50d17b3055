class ExtractionError(Exception):
    """Base exception for text extraction errors."""


class UnsupportedFormatError(ExtractionError):
    """Raised when a document cannot be turned into text at all.

    This is the only error the pipeline propagates to its caller.
    """


class DocumentLoadError(ExtractionError):
    """Raised when a data URI or file cannot be loaded into a RawDocument."""
