from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    pdf_attempt_timeout_seconds: float = Field(default=30.0, gt=0)

    llm_provider: str = "groq"
    llm_temperature: float = 0.3
    llm_max_tokens: int = Field(default=4000, gt=0)
    llm_json_mode: bool = False

    llm_openai_api_key: str = ""
    llm_openai_model_name: str = "gpt-4o-mini"
    llm_openai_timeout_seconds: int = 30

    llm_openai_compatible_base_url: str = ""
    llm_openai_compatible_api_key: str = ""
    llm_openai_compatible_model_name: str = ""
    llm_openai_compatible_timeout_seconds: int = 30

    llm_groq_api_key: str = ""
    llm_groq_model_name: str = "llama-3.3-70b-versatile"
    llm_groq_timeout_seconds: int = 30

    llm_nvidia_api_key: str = ""
    llm_nvidia_model_name: str = "meta/llama-4-scout-17b-16e-instruct"
    llm_nvidia_timeout_seconds: int = 30

    llm_openrouter_api_key: str = ""
    llm_openrouter_model_name: str = ""
    llm_openrouter_timeout_seconds: int = 30

    llm_together_api_key: str = ""
    llm_together_model_name: str = ""
    llm_together_timeout_seconds: int = 30

    llm_deepseek_api_key: str = ""
    llm_deepseek_model_name: str = "deepseek-chat"
    llm_deepseek_timeout_seconds: int = 30

    llm_ollama_api_key: str = "ollama"
    llm_ollama_model_name: str = "llama3.1"
    llm_ollama_timeout_seconds: int = 120

    analysis_language: str = "Indonesian"
    analysis_locale: str = "id"
    analysis_default_year: int = 2024
    analysis_max_prompt_chars: int = Field(default=4000, gt=0)
