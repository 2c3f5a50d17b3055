import pytest

from docfin.config.settings import Settings
from docfin.pdf.extractor import PdfTextExtractor
from docfin.pdf.factory import PdfEngineFactory
from docfin.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docfin.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPdfEngineFactory:
    def test_creates_pdfplumber_by_default(self) -> None:
        assert isinstance(PdfEngineFactory.create(Settings()), PdfPlumberAdapter)

    def test_creates_pymupdf(self) -> None:
        engine = PdfEngineFactory.create(Settings(pdf_engine="PyMuPDF"))
        assert isinstance(engine, PyMuPdfAdapter)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfEngineFactory.create(Settings(pdf_engine="ghostscript"))

    def test_creates_extractor(self) -> None:
        extractor = PdfEngineFactory.create_extractor(Settings(pdf_attempt_timeout_seconds=3))
        assert isinstance(extractor, PdfTextExtractor)
