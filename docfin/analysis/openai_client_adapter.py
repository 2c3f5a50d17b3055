import httpx
import openai

from docfin.analysis.client_base import BaseCompletionClient, ChatMessage
from docfin.analysis.exceptions import AIProviderError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client for OpenAI and OpenAI-compatible chat APIs (Groq, NVIDIA NIM, ...)."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        json_mode: bool = False,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._json_mode = json_mode

    def complete(
        self,
        *,
        messages: list[ChatMessage],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        extra: dict[str, object] = {}
        if self._json_mode:
            extra["response_format"] = {"type": "json_object"}
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[{"role": m.role, "content": m.content} for m in messages],
                **extra,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AIProviderError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AIProviderError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AIProviderError("AI returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise AIProviderError("AI returned empty response")
        return content
