"""Configuration management for the notes backend."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderConfig(BaseSettings):
    """Embedding and completion provider configuration.

    Any OpenAI-compatible endpoint works; the defaults target a local
    Ollama instance.
    """

    model_config = SettingsConfigDict(env_prefix="")

    base_url: str = Field(
        default="http://localhost:11434/v1",
        alias="OLLAMA_URL",
    )
    api_key: str = Field(
        default="ollama",
        alias="PROVIDER_API_KEY",
    )
    embedding_model: str = Field(
        default="nomic-embed-text:latest",
        alias="EMBEDDING_MODEL",
    )
    completion_model: str = Field(
        default="llama3.2:3b",
        alias="COMPLETION_MODEL",
    )
    completion_temperature: float | None = Field(
        default=None,
        alias="COMPLETION_TEMPERATURE",
    )
    timeout: float = Field(
        default=120.0,
        alias="PROVIDER_TIMEOUT",
    )
    max_attempts: int = Field(
        default=1,
        ge=1,
        alias="PROVIDER_MAX_ATTEMPTS",
    )


class RetrievalSettings(BaseSettings):
    """Retrieval configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    top_k: int = Field(default=10, ge=1, alias="RETRIEVAL_TOP_K")


class StorageSettings(BaseSettings):
    """Note store configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    db_path: str = Field(default="data/notes.db", alias="NOTES_DB_PATH")


class TraceSettings(BaseSettings):
    """Answer trace persistence."""

    model_config = SettingsConfigDict(env_prefix="TRACE_")

    enabled: bool = Field(default=False)
    dir: str = Field(default="traces")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    # Sub-configurations
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    trace: TraceSettings = Field(default_factory=TraceSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
