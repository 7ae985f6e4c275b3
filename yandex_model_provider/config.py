"""
Configuration Management Module

Configures provider parameters via environment variables or .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Provider Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    DEBUG: bool = False

    # Credentials
    # Folder that hosts the models (used to build model URIs)
    YANDEX_FOLDER_ID: str | None = None
    # API key, sent as "Authorization: Api-Key <key>"
    YANDEX_API_KEY: str | None = None

    # Endpoints
    YANDEX_COMPLETION_URL: str = (
        "https://llm.api.cloud.yandex.net/foundationModels/v1/completion"
    )
    YANDEX_EMBEDDING_URL: str = (
        "https://llm.api.cloud.yandex.net/foundationModels/v1/textEmbedding"
    )
    YANDEX_IMAGE_GENERATION_URL: str = (
        "https://llm.api.cloud.yandex.net/foundationModels/v1/imageGenerationAsync"
    )
    YANDEX_OPERATION_URL: str = "https://operation.api.cloud.yandex.net/operations"
    YANDEX_STT_URL: str = "https://stt.api.cloud.yandex.net/speech/v1/stt:recognize"

    # HTTP Client Config
    # Request timeout (seconds)
    HTTP_TIMEOUT: int = 600

    # Image Generation Config
    # Interval between operation polls (seconds)
    IMAGE_POLL_INTERVAL_SECONDS: float = 1.0
    # Polls before giving up on an operation
    IMAGE_POLL_MAX_ATTEMPTS: int = 300

    # Streaming Config
    # Send only the new text of each snapshot instead of the whole snapshot
    STREAM_DIFF_TEXT_SNAPSHOTS: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get provider configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Provider configuration instance
    """
    return Settings()
