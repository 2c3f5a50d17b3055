from typing import ClassVar

from docfin.analysis.ai_extractor import AIStructuredExtractor
from docfin.analysis.client_base import BaseCompletionClient
from docfin.analysis.example_client_adapter import ExampleClientAdapter
from docfin.analysis.openai_client_adapter import OpenAIClientAdapter
from docfin.analysis.summarizer import DocumentSummarizer
from docfin.analysis.vocabulary import vocabulary_for
from docfin.config.settings import Settings
from docfin.logging.logger import Log


class AIExtractorFactory:
    """Creates the configured language-model client and the components using it.

    ``llm_provider=none``, or a hosted provider without an API key, yields no
    client: AI extraction is skipped and the fallback extractor is used.
    """

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "groq": "https://api.groq.com/openai/v1",
        "nvidia": "https://integrate.api.nvidia.com/v1",
        "openrouter": "https://openrouter.ai/api/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> AIStructuredExtractor | None:
        """Create the AI extractor, or None when no provider is usable."""
        client = cls.create_client(settings)
        if client is None:
            return None
        return AIStructuredExtractor(
            client=client,
            model=cls._resolve_model_name(settings.llm_provider.lower(), settings),
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            language=settings.analysis_language,
            default_year=settings.analysis_default_year,
            max_prompt_chars=settings.analysis_max_prompt_chars,
            vocabulary=vocabulary_for(settings.analysis_locale),
        )

    @classmethod
    def create_summarizer(cls, settings: Settings) -> DocumentSummarizer:
        return DocumentSummarizer(
            client=cls.create_client(settings),
            model=cls._resolve_model_name(settings.llm_provider.lower(), settings),
            language=settings.analysis_language,
            max_prompt_chars=settings.analysis_max_prompt_chars,
            vocabulary=vocabulary_for(settings.analysis_locale),
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseCompletionClient | None:
        provider = settings.llm_provider.lower()
        if provider == "none":
            Log.info("No language model provider configured, AI extraction disabled")
            return None
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        api_key = cls._resolve_api_key(provider, settings)
        if not api_key and provider not in cls.KEYLESS_PROVIDERS:
            Log.warning(
                f"No API key configured for provider '{provider}', AI extraction disabled"
            )
            return None
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=base_url,
            json_mode=settings.llm_json_mode,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.llm_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "llm_openai_compatible_base_url is required for "
                    "llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "none",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.llm_openai_api_key,
            "openai_compatible": settings.llm_openai_compatible_api_key,
            "groq": settings.llm_groq_api_key,
            "nvidia": settings.llm_nvidia_api_key,
            "openrouter": settings.llm_openrouter_api_key,
            "together": settings.llm_together_api_key,
            "deepseek": settings.llm_deepseek_api_key,
            "ollama": settings.llm_ollama_api_key,
        }
        return key_map.get(provider, "").strip()

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "example": "example",
            "openai": settings.llm_openai_model_name,
            "openai_compatible": settings.llm_openai_compatible_model_name,
            "groq": settings.llm_groq_model_name,
            "nvidia": settings.llm_nvidia_model_name,
            "openrouter": settings.llm_openrouter_model_name,
            "together": settings.llm_together_model_name,
            "deepseek": settings.llm_deepseek_model_name,
            "ollama": settings.llm_ollama_model_name,
        }
        return key_map.get(provider, "")

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "openai": settings.llm_openai_timeout_seconds,
            "openai_compatible": settings.llm_openai_compatible_timeout_seconds,
            "groq": settings.llm_groq_timeout_seconds,
            "nvidia": settings.llm_nvidia_timeout_seconds,
            "openrouter": settings.llm_openrouter_timeout_seconds,
            "together": settings.llm_together_timeout_seconds,
            "deepseek": settings.llm_deepseek_timeout_seconds,
            "ollama": settings.llm_ollama_timeout_seconds,
        }
        return key_map.get(provider, 30) or 30
