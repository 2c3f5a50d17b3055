import threading
from unittest.mock import MagicMock

import pytest

from docfin.analysis.ai_extractor import AIStructuredExtractor
from docfin.analysis.exceptions import AIResponseFormatError
from docfin.analysis.fallback import FallbackExtractor
from docfin.analysis.models import DocumentSummary
from docfin.analysis.summarizer import DocumentSummarizer
from docfin.extraction.dispatcher import FormatDispatcher
from docfin.extraction.models import ExtractedText, RawDocument
from docfin.processor.exceptions import PipelineCancelledError
from docfin.processor.pipeline import PipelineContext
from docfin.processor.steps import (
    AIExtractStep,
    ExtractTextStep,
    FallbackExtractStep,
    NormalizeTextStep,
    SummarizeStep,
    ValidateResultStep,
)

_CANDIDATE = {
    "transactions": [
        {
            "id": "t1",
            "date": "2024-01-15",
            "description": "Penjualan",
            "amount": 1000000,
            "type": "income",
            "category": "Penjualan",
        }
    ],
    "insights": ["ok"],
}


def _context(text: str = "Penjualan Rp 1,000,000") -> PipelineContext:
    context = PipelineContext(
        document=RawDocument(content=text.encode(), declared_mime_type="text/csv")
    )
    context.normalized_text = text
    return context


class TestExtractTextStep:
    def test_stores_extracted_text_and_shares_diagnostics(self) -> None:
        dispatcher = MagicMock(spec=FormatDispatcher)
        dispatcher.extract.return_value = ExtractedText(text="a,b", source="csv")
        context = _context()

        ExtractTextStep(dispatcher).run(context)

        assert context.extracted is not None
        assert context.extracted.text == "a,b"
        dispatcher.extract.assert_called_once_with(
            context.document, cancel_event=None, diagnostics=context.diagnostics
        )


class TestNormalizeTextStep:
    def test_normalizes_extracted_text(self) -> None:
        context = _context()
        context.extracted = ExtractedText(text="  Penjualan   Rp 1\n\n2  ")
        NormalizeTextStep().run(context)
        assert context.normalized_text == "Penjualan Rp 1\n2"

    def test_requires_extracted_text(self) -> None:
        with pytest.raises(ValueError, match="extracted must be set"):
            NormalizeTextStep().run(_context())


class TestAIExtractStep:
    def test_without_extractor_records_skip(self) -> None:
        context = AIExtractStep(None).run(_context())
        assert context.candidate is None
        assert context.diagnostics[0].reason == "skipped"

    def test_success_sets_candidate(self) -> None:
        extractor = MagicMock(spec=AIStructuredExtractor)
        extractor.extract.return_value = _CANDIDATE
        context = AIExtractStep(extractor).run(_context())
        assert context.candidate == _CANDIDATE
        assert context.producer == "ai"
        assert context.diagnostics == []

    def test_extraction_error_is_recorded(self) -> None:
        extractor = MagicMock(spec=AIStructuredExtractor)
        extractor.extract.side_effect = AIResponseFormatError("Invalid JSON response")
        context = AIExtractStep(extractor).run(_context())
        assert context.candidate is None
        assert context.diagnostics[0].reason == "AIResponseFormatError"
        assert context.diagnostics[0].message == "Invalid JSON response"

    def test_unexpected_error_is_recorded(self) -> None:
        extractor = MagicMock(spec=AIStructuredExtractor)
        extractor.extract.side_effect = RuntimeError("boom")
        context = AIExtractStep(extractor).run(_context())
        assert context.candidate is None
        assert context.diagnostics[0].reason == "unexpected_error"

    def test_cancellation_propagates(self) -> None:
        extractor = MagicMock(spec=AIStructuredExtractor)
        extractor.extract.side_effect = PipelineCancelledError("cancelled")
        with pytest.raises(PipelineCancelledError):
            AIExtractStep(extractor).run(_context())


class TestFallbackExtractStep:
    def test_runs_only_without_candidate(self) -> None:
        fallback = MagicMock(spec=FallbackExtractor)
        context = _context()
        context.candidate = _CANDIDATE
        FallbackExtractStep(fallback).run(context)
        fallback.extract.assert_not_called()

    def test_produces_candidate(self) -> None:
        context = FallbackExtractStep(FallbackExtractor()).run(_context())
        assert context.producer == "fallback"
        assert context.candidate is not None
        assert context.candidate["transactions"][0]["amount"] == 1000000


class TestValidateResultStep:
    def test_repairs_candidate(self) -> None:
        context = _context()
        context.candidate = {"transactions": [{"amount": "250", "type": "income"}]}
        ValidateResultStep().run(context)
        assert context.result is not None
        assert context.result.summary.total_income == 250

    def test_missing_candidate_gives_empty_result(self) -> None:
        context = ValidateResultStep().run(_context())
        assert context.result is not None
        assert context.result.transactions == []


class TestSummarizeStep:
    def test_stores_summary(self) -> None:
        summarizer = MagicMock(spec=DocumentSummarizer)
        summarizer.summarize.return_value = DocumentSummary(summary="s")
        cancel = threading.Event()
        context = _context()
        context.cancel_event = cancel

        SummarizeStep(summarizer).run(context)

        assert context.document_summary == DocumentSummary(summary="s")
        summarizer.summarize.assert_called_once_with(
            "Penjualan Rp 1,000,000", cancel_event=cancel
        )
