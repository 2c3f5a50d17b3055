import threading

from docfin.extraction.exceptions import UnsupportedFormatError
from docfin.extraction.guidance import image_guidance
from docfin.extraction.models import ExtractedText, RawDocument
from docfin.extraction.retry import AttemptFailure
from docfin.logging.logger import Log
from docfin.pdf.extractor import PdfTextExtractor

PDF_MIME_TYPE = "application/pdf"
CSV_MIME_TYPE = "text/csv"


class FormatDispatcher:
    """Routes a document to the extractor matching its declared MIME type."""

    def __init__(self, pdf_extractor: PdfTextExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def extract(
        self,
        document: RawDocument,
        *,
        cancel_event: threading.Event | None = None,
        diagnostics: list[AttemptFailure] | None = None,
    ) -> ExtractedText:
        """Produce text for a document.

        Raises:
            UnsupportedFormatError: for unknown MIME types and undecodable CSV.
        """
        mime_type = document.mime_type
        Log.info(f"Dispatching {mime_type} document of {document.size_bytes} bytes")
        if mime_type == PDF_MIME_TYPE:
            return self._pdf_extractor.extract(
                document.content,
                cancel_event=cancel_event,
                diagnostics=diagnostics,
            )
        if mime_type == CSV_MIME_TYPE:
            return decode_csv(document.content)
        if mime_type.startswith("image/"):
            return image_guidance()
        raise UnsupportedFormatError(
            f"Unsupported file type: {mime_type or '<missing>'}"
        )


def decode_csv(content: bytes) -> ExtractedText:
    """CSV is already textual; decode it without parsing."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnsupportedFormatError(f"CSV file is not valid UTF-8: {exc}") from exc
    return ExtractedText(text=text, page_count=1, source="csv")
