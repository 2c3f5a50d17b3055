import json
import threading
import time
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docfin.analysis.ai_extractor import (
    TRUNCATION_MARKER,
    AIStructuredExtractor,
    truncate_for_prompt,
)
from docfin.analysis.client_base import BaseCompletionClient
from docfin.analysis.exceptions import AIProviderError, AIResponseFormatError, PromptLoadError
from docfin.analysis.vocabulary import ENGLISH
from docfin.processor.exceptions import PipelineCancelledError


def _make_extractor(
    response: str | Exception, **kwargs: object
) -> tuple[AIStructuredExtractor, MagicMock]:
    client = MagicMock(spec=BaseCompletionClient)
    if isinstance(response, Exception):
        client.complete.side_effect = response
    else:
        client.complete.return_value = response
    return AIStructuredExtractor(client=client, model="test-model", **kwargs), client


def _response(transactions: object = None) -> str:
    return json.dumps({
        "transactions": [] if transactions is None else transactions,
        "summary": {"totalIncome": 1},
        "insights": ["Healthy margin"],
    })


class TestTruncateForPrompt:
    def test_short_text_is_untouched(self) -> None:
        assert truncate_for_prompt("abc", 10) == ("abc", "")

    def test_long_text_is_cut_and_marked(self) -> None:
        text, note = truncate_for_prompt("x" * 20, 10)
        assert text == "x" * 10
        assert TRUNCATION_MARKER in note


class TestAIStructuredExtractor:
    def test_returns_candidate_payload(self) -> None:
        tx = [{"id": "t1", "date": "2024-01-15", "amount": 1500000, "type": "income"}]
        extractor, client = _make_extractor(_response(tx))

        candidate = extractor.extract("Penjualan Rp 1,500,000")

        assert candidate["transactions"] == tx
        assert candidate["insights"] == ["Healthy margin"]
        client.complete.assert_called_once()
        assert client.complete.call_args.kwargs["model"] == "test-model"
        assert client.complete.call_args.kwargs["max_tokens"] == 4000

    def test_accepts_fenced_response(self) -> None:
        extractor, _ = _make_extractor(f"Sure!\n```json\n{_response()}\n```")
        assert extractor.extract("text")["transactions"] == []

    def test_missing_transactions_is_format_error(self) -> None:
        extractor, _ = _make_extractor('{"insights": []}')
        with pytest.raises(AIResponseFormatError, match="transactions"):
            extractor.extract("text")

    def test_non_list_transactions_is_format_error(self) -> None:
        extractor, _ = _make_extractor('{"transactions": {"id": "t1"}}')
        with pytest.raises(AIResponseFormatError, match="transactions"):
            extractor.extract("text")

    def test_prose_response_is_format_error(self) -> None:
        extractor, _ = _make_extractor("I am unable to read this document.")
        with pytest.raises(AIResponseFormatError):
            extractor.extract("text")

    def test_provider_error_propagates(self) -> None:
        extractor, _ = _make_extractor(AIProviderError("AI provider network error: boom"))
        with pytest.raises(AIProviderError, match="network error"):
            extractor.extract("text")

    def test_cancelled_before_call(self) -> None:
        extractor, client = _make_extractor(_response())
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(PipelineCancelledError):
            extractor.extract("text", cancel_event=cancel)
        client.complete.assert_not_called()

    def test_cancel_interrupts_slow_provider_call(self) -> None:
        extractor, client = _make_extractor(_response())
        release = threading.Event()

        def slow_complete(**_: object) -> str:
            release.wait(3.0)
            return _response()

        client.complete.side_effect = slow_complete
        cancel = threading.Event()
        timer = threading.Timer(0.3, cancel.set)
        timer.start()
        started = time.monotonic()
        try:
            with pytest.raises(PipelineCancelledError):
                extractor.extract("text", cancel_event=cancel)
            assert time.monotonic() - started < 1.0
        finally:
            timer.cancel()
            release.set()
        client.complete.assert_called_once()

    def test_slow_provider_call_completes_without_cancel(self) -> None:
        extractor, client = _make_extractor(_response())

        def slow_complete(**_: object) -> str:
            time.sleep(0.3)
            return _response([{"id": "t1", "amount": 10}])

        client.complete.side_effect = slow_complete
        candidate = extractor.extract("text", cancel_event=threading.Event())
        assert candidate["transactions"] == [{"id": "t1", "amount": 10}]

    def test_temperature_is_clamped(self) -> None:
        extractor, client = _make_extractor(_response(), temperature=1.7)
        extractor.extract("text")
        assert client.complete.call_args.kwargs["temperature"] == 1.0

    def test_messages_carry_system_and_user_prompt(self) -> None:
        extractor, client = _make_extractor(_response())
        extractor.extract("Biaya sewa Rp 2,000,000")
        messages = client.complete.call_args.kwargs["messages"]
        assert [m.role for m in messages] == ["system", "user"]
        assert "JSON" in messages[0].content
        assert "Biaya sewa Rp 2,000,000" in messages[1].content


class TestBuildPrompt:
    def test_prompt_contains_schema_and_settings(self) -> None:
        extractor, _ = _make_extractor(
            _response(), language="English", default_year=2025, vocabulary=ENGLISH
        )
        prompt = extractor.build_prompt("Sales Rp 100,000")
        assert "Sales Rp 100,000" in prompt
        assert '"transactions"' in prompt
        assert "2025" in prompt
        assert "Sales, Marketing, Operational" in prompt
        assert "in English" in prompt
        assert TRUNCATION_MARKER not in prompt

    def test_long_text_is_truncated_with_marker(self) -> None:
        extractor, _ = _make_extractor(_response(), max_prompt_chars=100)
        prompt = extractor.build_prompt("a" * 100 + "ZZZ")
        assert "a" * 100 in prompt
        assert "ZZZ" not in prompt
        assert TRUNCATION_MARKER in prompt

    def test_missing_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PromptLoadError):
            _make_extractor(_response(), prompt_template_path=tmp_path / "missing.txt")
