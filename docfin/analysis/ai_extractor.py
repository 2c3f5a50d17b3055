"""AI-assisted structured extraction of transactions from document text."""

import threading
from pathlib import Path
from typing import Any

from docfin.analysis.client_base import BaseCompletionClient, ChatMessage
from docfin.analysis.exceptions import AIResponseFormatError
from docfin.analysis.prompt_loader import load_json_schema, load_prompt_template
from docfin.analysis.response_parser import parse_json_object
from docfin.analysis.vocabulary import DEFAULT_VOCABULARY, AnalysisVocabulary
from docfin.extraction.cancellation import call_cancellable
from docfin.logging.logger import Log

TRUNCATION_MARKER = "[content truncated]"
DEFAULT_MAX_PROMPT_CHARS = 4000


def truncate_for_prompt(text: str, max_chars: int) -> tuple[str, str]:
    """Return the prompt-sized text and the note to append when it was cut."""
    if len(text) <= max_chars:
        return text, ""
    return text[:max_chars], f"\n\n{TRUNCATION_MARKER}"


class AIStructuredExtractor:
    """Asks a language model for the analysis JSON and enforces its contract.

    The returned dict is only a candidate; it still goes through the
    validator before leaving the pipeline.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
        language: str = "Indonesian",
        default_year: int = 2024,
        max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS,
        vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_tokens = max_tokens
        self._language = language
        self._default_year = default_year
        self._max_prompt_chars = max_prompt_chars
        self._vocabulary = vocabulary
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)

    def extract(
        self,
        text: str,
        *,
        cancel_event: threading.Event | None = None,
    ) -> dict[str, Any]:
        """Return the model's analysis as a candidate payload.

        Raises:
            AIProviderError: if the provider call fails.
            AIResponseFormatError: if the response is not a usable JSON object.
            PipelineCancelledError: if cancelled before or during the call.
        """
        prompt = self.build_prompt(text)
        Log.debug(f"Analysis prompt:\n{prompt}")

        messages = self.build_messages(prompt)
        raw_response = call_cancellable(
            lambda: self._client.complete(
                messages=messages,
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            ),
            cancel_event,
            "AI extraction",
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        parsed = parse_json_object(raw_response)
        transactions = parsed.get("transactions")
        if not isinstance(transactions, list):
            raise AIResponseFormatError("'transactions' must be a list")

        Log.info(f"AI extraction complete: {len(transactions)} candidate transactions")
        return parsed

    def build_prompt(self, text: str) -> str:
        document_text, truncation_note = truncate_for_prompt(text, self._max_prompt_chars)
        return self._prompt_template.format(
            document_text=document_text,
            truncation_note=truncation_note,
            json_schema=self._json_schema,
            default_year=self._default_year,
            categories=", ".join(self._vocabulary.prompt_categories),
            language=self._language,
        )

    def build_messages(self, prompt: str) -> list[ChatMessage]:
        system_prompt = (
            "You are a financial analyst assistant. Respond with a single valid JSON "
            f"object only, with no other text. Write all narrative text in {self._language}."
        )
        return [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=prompt),
        ]
