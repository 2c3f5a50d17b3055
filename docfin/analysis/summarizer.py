"""Narrative document summaries (summary, key points, recommendations)."""

import threading
from pathlib import Path
from typing import Any

from docfin.analysis.ai_extractor import DEFAULT_MAX_PROMPT_CHARS, truncate_for_prompt
from docfin.analysis.client_base import BaseCompletionClient, ChatMessage
from docfin.analysis.models import DocumentSummary
from docfin.analysis.prompt_loader import SUMMARY_PROMPT, load_prompt_template
from docfin.analysis.response_parser import parse_json_object
from docfin.analysis.vocabulary import DEFAULT_VOCABULARY, AnalysisVocabulary
from docfin.extraction.cancellation import call_cancellable
from docfin.logging.logger import Log
from docfin.processor.exceptions import PipelineCancelledError


class DocumentSummarizer:
    """Summarizes document text with a language model.

    Never raises for provider or format failures: a fixed apologetic summary
    with guidance is returned instead. Without a client, that summary is
    returned immediately.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient | None,
        model: str = "",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        language: str = "Indonesian",
        max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS,
        vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_tokens = max_tokens
        self._language = language
        self._max_prompt_chars = max_prompt_chars
        self._vocabulary = vocabulary
        self._prompt_template = load_prompt_template(prompt_template_path, name=SUMMARY_PROMPT)

    def summarize(
        self,
        text: str,
        *,
        cancel_event: threading.Event | None = None,
    ) -> DocumentSummary:
        if self._client is None:
            return self._failure("no language model provider is configured")
        try:
            parsed = self._request(self._client, text, cancel_event)
        except PipelineCancelledError:
            raise
        except Exception as exc:
            Log.warning(f"Document summary failed, returning guidance summary: {exc}")
            return self._failure(str(exc))
        return self._build(parsed)

    def _request(
        self,
        client: BaseCompletionClient,
        text: str,
        cancel_event: threading.Event | None,
    ) -> dict[str, Any]:
        document_text, truncation_note = truncate_for_prompt(text, self._max_prompt_chars)
        prompt = self._prompt_template.format(
            document_text=document_text,
            truncation_note=truncation_note,
            language=self._language,
        )
        Log.debug(f"Summary prompt:\n{prompt}")
        messages = [
            ChatMessage(
                role="system",
                content="You are a helpful financial analyst assistant. "
                "Always respond in valid JSON format.",
            ),
            ChatMessage(role="user", content=prompt),
        ]
        raw_response = call_cancellable(
            lambda: client.complete(
                messages=messages,
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            ),
            cancel_event,
            "document summary",
        )
        Log.debug(f"Summary raw response:\n{raw_response}")
        return parse_json_object(raw_response)

    def _build(self, parsed: dict[str, Any]) -> DocumentSummary:
        vocabulary = self._vocabulary
        summary = parsed.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            summary = vocabulary.summary_unavailable
        return DocumentSummary(
            summary=summary.strip(),
            key_points=_string_list(parsed.get("keyPoints"))
            or [vocabulary.key_points_unavailable],
            recommendations=_string_list(parsed.get("recommendations"))
            or [vocabulary.recommendations_unavailable],
        )

    def _failure(self, error: str) -> DocumentSummary:
        vocabulary = self._vocabulary
        return DocumentSummary(
            summary=vocabulary.summary_failure.format(error=error),
            key_points=list(vocabulary.failure_key_points),
            recommendations=list(vocabulary.failure_recommendations),
        )


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, str) and item.strip()]
