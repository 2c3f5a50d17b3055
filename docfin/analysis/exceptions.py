class AIExtractionError(Exception):
    """Raised when AI-assisted extraction fails; the pipeline falls back."""


class AIProviderError(AIExtractionError):
    """Raised when the language-model provider call fails or returns nothing."""


class AIResponseFormatError(AIExtractionError):
    """Raised when the model output is not JSON or breaks the response contract."""


class PromptLoadError(AIExtractionError):
    """Raised when a bundled prompt or schema file cannot be read."""
