from abc import ABC, abstractmethod

from docfin.pdf.models import ParsedPdf


class BasePdfEngine(ABC):
    """Contract for all PDF structural parsing adapters.

    Engines run inside a child process, so implementations must be picklable
    and keep no state between calls.
    """

    @abstractmethod
    def parse(self, pdf_bytes: bytes, max_pages: int = 0) -> ParsedPdf:
        """Parse PDF bytes into text runs per page.

        Each run is one line of decoded Unicode text, in reading order.

        Args:
            pdf_bytes: Raw PDF file content.
            max_pages: Page ceiling; 0 processes every page.

        Returns:
            ParsedPdf with the total page count and the runs of each
            processed page.

        Raises:
            PdfOpenError: if the document cannot be opened.
            PdfExtractionError: if reading pages fails.
        """


def pages_to_process(total_pages: int, max_pages: int) -> int:
    if max_pages <= 0:
        return total_pages
    return min(total_pages, max_pages)
