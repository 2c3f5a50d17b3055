from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str


class BaseCompletionClient(ABC):
    """Contract for provider-specific language-model clients."""

    @abstractmethod
    def complete(
        self,
        *,
        messages: list[ChatMessage],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the provider's completion as plain text.

        Raises:
            AIProviderError: on network, API, or empty-response failures.
        """
