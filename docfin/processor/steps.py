from docfin.analysis.ai_extractor import AIStructuredExtractor
from docfin.analysis.exceptions import AIExtractionError
from docfin.analysis.fallback import FallbackExtractor
from docfin.analysis.summarizer import DocumentSummarizer
from docfin.analysis.validator import repair
from docfin.analysis.vocabulary import DEFAULT_VOCABULARY, AnalysisVocabulary
from docfin.extraction.dispatcher import FormatDispatcher
from docfin.extraction.text_normalizer import normalize_text
from docfin.logging.logger import Log
from docfin.processor.exceptions import PipelineCancelledError
from docfin.processor.pipeline import PipelineContext, PipelineStep


class ExtractTextStep(PipelineStep):
    def __init__(self, dispatcher: FormatDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extracted = self._dispatcher.extract(
            context.document,
            cancel_event=context.cancel_event,
            diagnostics=context.diagnostics,
        )
        if context.extracted.is_guidance_only:
            Log.warning(
                "No document content extracted, continuing with "
                f"{context.extracted.source} guidance"
            )
        return context


class NormalizeTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before normalization")
        context.normalized_text = normalize_text(context.extracted.text)
        Log.info(f"Normalized text: {len(context.normalized_text)} chars")
        return context


class AIExtractStep(PipelineStep):
    """Asks the language model for a candidate; any failure leaves it unset."""

    def __init__(self, extractor: AIStructuredExtractor | None) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if self._extractor is None:
            Log.info("AI extraction skipped: no provider configured")
            context.record("ai_extraction", "skipped", "no provider configured")
            return context
        try:
            context.candidate = self._extractor.extract(
                context.normalized_text,
                cancel_event=context.cancel_event,
            )
        except PipelineCancelledError:
            raise
        except AIExtractionError as exc:
            Log.warning(f"AI extraction failed, using fallback: {exc}")
            context.record("ai_extraction", type(exc).__name__, str(exc))
            return context
        except Exception as exc:
            Log.error(f"Unexpected AI extraction error, using fallback: {exc}")
            context.record("ai_extraction", "unexpected_error", str(exc))
            return context
        context.producer = "ai"
        return context


class FallbackExtractStep(PipelineStep):
    def __init__(self, fallback: FallbackExtractor) -> None:
        self._fallback = fallback

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.candidate is not None:
            return context
        context.candidate = self._fallback.extract(context.normalized_text)
        context.producer = "fallback"
        return context


class ValidateResultStep(PipelineStep):
    def __init__(self, vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY) -> None:
        self._vocabulary = vocabulary

    def run(self, context: PipelineContext) -> PipelineContext:
        context.result = repair(context.candidate, self._vocabulary)
        summary = context.result.summary
        Log.info(
            f"Analysis complete ({context.producer or 'empty'}): "
            f"{summary.transaction_count} transactions, income {summary.total_income}, "
            f"expense {summary.total_expense}, net {summary.net_profit}"
        )
        return context


class SummarizeStep(PipelineStep):
    def __init__(self, summarizer: DocumentSummarizer) -> None:
        self._summarizer = summarizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document_summary = self._summarizer.summarize(
            context.normalized_text,
            cancel_event=context.cancel_event,
        )
        return context
