import threading

from docfin.analysis.factory import AIExtractorFactory
from docfin.analysis.fallback import FallbackExtractor
from docfin.analysis.models import AnalysisResult, DocumentSummary
from docfin.analysis.vocabulary import vocabulary_for
from docfin.config.settings import Settings
from docfin.extraction.bounded_runner import BoundedRunner
from docfin.extraction.cancellation import raise_if_cancelled
from docfin.extraction.dispatcher import FormatDispatcher
from docfin.extraction.models import RawDocument
from docfin.logging.logger import Log
from docfin.pdf.extractor import PdfTextExtractor
from docfin.pdf.factory import PdfEngineFactory
from docfin.processor.exceptions import ProcessorError
from docfin.processor.pipeline import PipelineContext, PipelineStep
from docfin.processor.steps import (
    AIExtractStep,
    ExtractTextStep,
    FallbackExtractStep,
    NormalizeTextStep,
    SummarizeStep,
    ValidateResultStep,
)


class Processor:
    """Runs document analysis and summary pipelines.

    Analysis: extract text -> normalize -> AI extraction -> fallback (only if
    the AI produced nothing) -> validate/repair. Only UnsupportedFormatError
    and PipelineCancelledError escape; every other failure is recovered and
    recorded in ``PipelineContext.diagnostics``.
    """

    def __init__(
        self,
        analysis_steps: list[PipelineStep],
        summary_steps: list[PipelineStep] | None = None,
    ) -> None:
        self._analysis_steps = analysis_steps
        self._summary_steps = summary_steps or []

    def run(
        self,
        document: RawDocument,
        steps: list[PipelineStep],
        cancel_event: threading.Event | None = None,
    ) -> PipelineContext:
        context = PipelineContext(document=document, cancel_event=cancel_event)
        with Log.document(document.file_name or document.content_hash[:12]):
            Log.info(
                f"Processing {document.mime_type} document ({document.size_bytes} bytes, "
                f"sha256 {document.content_hash[:12]})"
            )
            for step in steps:
                raise_if_cancelled(cancel_event, type(step).__name__)
                context = step.run(context)
            if context.diagnostics:
                Log.info(f"Recovered from {len(context.diagnostics)} failures")
        return context

    def analyze(
        self,
        document: RawDocument,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisResult:
        """Run the analysis pipeline and return its validated result.

        Raises:
            UnsupportedFormatError: if the document type cannot be analyzed.
            PipelineCancelledError: if ``cancel_event`` was set.
        """
        context = self.run(document, self._analysis_steps, cancel_event)
        if context.result is None:
            raise ProcessorError("Analysis pipeline finished without a result")
        return context.result

    def summarize(
        self,
        document: RawDocument,
        cancel_event: threading.Event | None = None,
    ) -> DocumentSummary:
        """Run the summary pipeline.

        Raises:
            UnsupportedFormatError: if the document type cannot be read.
            PipelineCancelledError: if ``cancel_event`` was set.
        """
        context = self.run(document, self._summary_steps, cancel_event)
        if context.document_summary is None:
            raise ProcessorError("Summary pipeline finished without a summary")
        return context.document_summary


def build_processor(
    settings: Settings,
    runner: BoundedRunner | None = None,
) -> Processor:
    """Build a Processor with all adapters selected in settings."""
    vocabulary = vocabulary_for(settings.analysis_locale)
    pdf_extractor = PdfTextExtractor(
        PdfEngineFactory.create(settings),
        runner=runner,
        timeout_seconds=settings.pdf_attempt_timeout_seconds,
    )
    dispatcher = FormatDispatcher(pdf_extractor)
    analysis_steps: list[PipelineStep] = [
        ExtractTextStep(dispatcher),
        NormalizeTextStep(),
        AIExtractStep(AIExtractorFactory.create(settings)),
        FallbackExtractStep(FallbackExtractor(vocabulary)),
        ValidateResultStep(vocabulary),
    ]
    summary_steps: list[PipelineStep] = [
        ExtractTextStep(dispatcher),
        NormalizeTextStep(),
        SummarizeStep(AIExtractorFactory.create_summarizer(settings)),
    ]
    return Processor(analysis_steps=analysis_steps, summary_steps=summary_steps)
