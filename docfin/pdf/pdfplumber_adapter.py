import io

import pdfplumber

from docfin.pdf.base import BasePdfEngine, pages_to_process
from docfin.pdf.exceptions import PdfExtractionError, PdfOpenError
from docfin.pdf.models import ParsedPdf


class PdfPlumberAdapter(BasePdfEngine):
    """Parses PDF pages with pdfplumber; each text line is one run."""

    def parse(self, pdf_bytes: bytes, max_pages: int = 0) -> ParsedPdf:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise PdfOpenError(
                f"pdfplumber could not open document ({type(exc).__name__}: {exc})"
            ) from exc
        try:
            total = len(pdf.pages)
            pages = tuple(
                self._page_runs(page.extract_text() or "")
                for page in pdf.pages[: pages_to_process(total, max_pages)]
            )
            return ParsedPdf(total_pages=total, pages=pages)
        except Exception as exc:
            raise PdfExtractionError(
                f"pdfplumber extraction failed ({type(exc).__name__}: {exc})"
            ) from exc
        finally:
            pdf.close()

    @staticmethod
    def _page_runs(text: str) -> tuple[str, ...]:
        return tuple(line for line in text.splitlines() if line.strip())
