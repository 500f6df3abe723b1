# =============================================================================
# Application Configuration — Pydantic Settings
# =============================================================================
#
# All runtime configuration is loaded through Pydantic V2's `BaseSettings`.
#
# HOW IT WORKS:
# Pydantic Settings loads values in this priority order (highest first):
#   1. Environment variables (e.g., `OPENAI_API_KEY=...`)
#   2. Values from the .env file
#   3. Default values defined below
#
# USAGE:
#   from app.config import settings
#   print(settings.llm_model)
# =============================================================================

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults are suitable for local development against the hosted
    OpenAI API. Override via environment variables or a .env file.
    """

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "Document Comparison Assistant"
    app_version: str = "0.1.0"
    debug: bool = True
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # API Keys — External Services
    # -------------------------------------------------------------------------
    # OPENAI_API_KEY: file search over vector stores + document uploads
    # ANTHROPIC_API_KEY: only needed when LLM_PROVIDER=anthropic
    # -------------------------------------------------------------------------
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # -------------------------------------------------------------------------
    # LLM Configuration — Comparator, Classifier, Explanation, Chat
    # -------------------------------------------------------------------------
    # Providers:
    #   - "openai_compatible": OpenAI itself or any OpenAI-compatible API
    #   - "anthropic": Claude via native Anthropic SDK
    #
    # Document extraction always goes through OpenAI file search (the
    # collections are OpenAI vector stores); only the plain completions
    # follow llm_provider.
    # -------------------------------------------------------------------------
    llm_provider: str = "openai_compatible"  # "openai_compatible" or "anthropic"
    llm_base_url: str | None = None  # Only needed for non-OpenAI endpoints
    llm_api_key: str | None = None   # Overrides provider-specific key if set
    llm_model: str = "gpt-4.1"
    llm_temperature: float = 0.0
    llm_max_tokens: int = 2048

    # Intent-routing chat answers are a little less deterministic
    chat_temperature: float = 0.3

    # -------------------------------------------------------------------------
    # Document Search — OpenAI Responses API + file_search
    # -------------------------------------------------------------------------
    extraction_model: str = "gpt-4.1"

    # Pre-indexed collections registered at start-up. An empty value
    # skips the corresponding seed entry.
    default_project_vector_store_id: str = "vs_697e524aef9c819182db0e8bbfc98456"
    default_permit_vector_store_id: str = "vs_697e529683e081919d31a8ab7a2bc02a"

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache a Settings instance.

    In tests, override with FastAPI's dependency_overrides:
        app.dependency_overrides[get_settings] = lambda: Settings(debug=False)
    """
    return Settings()


# ---------------------------------------------------------------------------
# Module-level convenience instance
# ---------------------------------------------------------------------------
# Import this directly in most cases:
#   from app.config import settings
# ---------------------------------------------------------------------------
settings = Settings()
