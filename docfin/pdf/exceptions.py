from docfin.pdf.models import PdfFailureReason


class PdfExtractionError(Exception):
    """Raised when a PDF engine cannot parse a document."""

    def __init__(
        self,
        message: str,
        reason: PdfFailureReason = PdfFailureReason.PARSE_ERROR,
    ) -> None:
        super().__init__(message)
        self.reason = reason


class PdfOpenError(PdfExtractionError):
    """Raised when the engine fails before any page could be read."""

    def __init__(self, message: str) -> None:
        super().__init__(message, PdfFailureReason.INITIALIZATION_ERROR)
