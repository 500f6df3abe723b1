# =============================================================================
# Unit Tests — Settings
# =============================================================================

from app.config import Settings, get_settings


class TestSettings:

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_env_overrides_default(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")
        monkeypatch.setenv("CHAT_TEMPERATURE", "0.7")

        settings = Settings(_env_file=None)

        assert settings.llm_provider == "anthropic"
        assert settings.chat_temperature == 0.7

    def test_deterministic_completions_by_default(self, monkeypatch):
        monkeypatch.delenv("LLM_TEMPERATURE", raising=False)
        assert Settings(_env_file=None).llm_temperature == 0.0
