from docfin.config.settings import Settings
from docfin.pdf.base import BasePdfEngine
from docfin.pdf.extractor import PdfTextExtractor
from docfin.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docfin.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfEngineFactory:
    """Creates the PDF parsing engine selected in settings."""

    ADAPTERS: dict[str, type[BasePdfEngine]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfEngine:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_extractor(cls, settings: Settings) -> PdfTextExtractor:
        """Create the multi-attempt extractor around the configured engine."""
        return PdfTextExtractor(
            cls.create(settings),
            timeout_seconds=settings.pdf_attempt_timeout_seconds,
        )
