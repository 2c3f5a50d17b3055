import pytest
from pydantic import ValidationError

from docfin.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_pdf_attempt_timeout(self) -> None:
        s = Settings()
        assert s.pdf_attempt_timeout_seconds == 30.0

    def test_default_llm_provider(self) -> None:
        s = Settings()
        assert s.llm_provider == "groq"

    def test_default_groq_model(self) -> None:
        s = Settings()
        assert s.llm_groq_model_name == "llama-3.3-70b-versatile"

    def test_default_analysis_locale(self) -> None:
        s = Settings()
        assert s.analysis_locale == "id"
        assert s.analysis_language == "Indonesian"

    def test_default_prompt_budget(self) -> None:
        s = Settings()
        assert s.analysis_max_prompt_chars == 4000


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_llm_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("LLM_OPENAI_API_KEY", "sk-test")
        s = Settings()
        assert s.llm_provider == "openai"
        assert s.llm_openai_api_key == "sk-test"

    def test_loads_pdf_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_ATTEMPT_TIMEOUT_SECONDS", "2.5")
        s = Settings()
        assert s.pdf_attempt_timeout_seconds == 2.5

    def test_ignores_unknown_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOMETHING_UNRELATED", "x")
        Settings()


class TestSettingsValidation:
    def test_rejects_non_positive_pdf_timeout(self) -> None:
        with pytest.raises(ValidationError):
            Settings(pdf_attempt_timeout_seconds=0)

    def test_rejects_non_positive_prompt_budget(self) -> None:
        with pytest.raises(ValidationError):
            Settings(analysis_max_prompt_chars=0)

    def test_rejects_invalid_json_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_JSON_MODE", "not-a-bool")
        with pytest.raises(ValidationError):
            Settings()
