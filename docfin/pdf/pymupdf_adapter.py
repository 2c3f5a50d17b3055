import pymupdf

from docfin.pdf.base import BasePdfEngine, pages_to_process
from docfin.pdf.exceptions import PdfExtractionError, PdfOpenError
from docfin.pdf.models import PdfFailureReason, ParsedPdf


class PyMuPdfAdapter(BasePdfEngine):
    """Parses PDF pages with PyMuPDF; each text line of the page dict is one run."""

    def parse(self, pdf_bytes: bytes, max_pages: int = 0) -> ParsedPdf:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfOpenError(
                f"pymupdf could not open document ({type(exc).__name__}: {exc})"
            ) from exc
        with doc:
            if doc.needs_pass:
                raise PdfExtractionError(
                    "Password protected document", PdfFailureReason.PASSWORD_PROTECTED
                )
            try:
                total = doc.page_count
                pages = tuple(
                    self._page_runs(doc[index])
                    for index in range(pages_to_process(total, max_pages))
                )
            except Exception as exc:
                raise PdfExtractionError(
                    f"pymupdf extraction failed ({type(exc).__name__}: {exc})"
                ) from exc
        return ParsedPdf(total_pages=total, pages=pages)

    @staticmethod
    def _page_runs(page: "pymupdf.Page") -> tuple[str, ...]:
        runs: list[str] = []
        for block in page.get_text("dict")["blocks"]:
            for line in block.get("lines", []):
                text = "".join(span["text"] for span in line.get("spans", []))
                if text.strip():
                    runs.append(text)
        return tuple(runs)
