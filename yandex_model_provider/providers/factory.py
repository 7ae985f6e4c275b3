"""
Provider Factory Module

Creates Yandex Cloud models that share one set of credentials.
"""

from typing import Optional

import httpx

from yandex_model_provider.config import get_settings
from yandex_model_provider.providers.chat import YandexChatModel
from yandex_model_provider.providers.embedding import YandexEmbeddingModel
from yandex_model_provider.providers.image import YandexImageModel
from yandex_model_provider.providers.transcription import YandexTranscriptionModel
from yandex_model_provider.providers.transport import YandexTransport


class YandexProvider:
    """
    Yandex Cloud Provider

    Holds the folder id and the transport (API key, timeout, optional shared
    httpx client). Models are created per call and hold no mutable state.
    """

    def __init__(self, folder_id: str, transport: YandexTransport):
        self.folder_id = folder_id
        self.transport = transport

    def chat(self, model_id: str) -> YandexChatModel:
        """Chat model, e.g. "yandexgpt/latest" or "yandexgpt-lite/latest"."""
        return YandexChatModel(
            model_id, folder_id=self.folder_id, transport=self.transport
        )

    def embedding(self, model_id: str) -> YandexEmbeddingModel:
        """Embedding model, e.g. "text-search-doc/latest"."""
        return YandexEmbeddingModel(
            model_id, folder_id=self.folder_id, transport=self.transport
        )

    def image(self, model_id: str = "yandex-art/latest") -> YandexImageModel:
        return YandexImageModel(
            model_id, folder_id=self.folder_id, transport=self.transport
        )

    def transcription(self) -> YandexTranscriptionModel:
        return YandexTranscriptionModel(
            folder_id=self.folder_id, transport=self.transport
        )

    # Shorthand for chat()
    __call__ = chat


def create_yandex(
    folder_id: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> YandexProvider:
    """
    Create a provider

    Credentials not passed explicitly are read from configuration
    (YANDEX_FOLDER_ID, YANDEX_API_KEY).

    Args:
        folder_id: Cloud folder hosting the models
        api_key: API key
        timeout: Request timeout (seconds), defaults to configuration
        client: Shared httpx client, left open by the provider

    Returns:
        YandexProvider: Provider instance

    Raises:
        ValueError: Folder id or API key missing
    """
    settings = get_settings()
    folder_id = folder_id or settings.YANDEX_FOLDER_ID
    api_key = api_key or settings.YANDEX_API_KEY

    if not folder_id:
        raise ValueError("Yandex folder id is required (YANDEX_FOLDER_ID)")
    if not api_key:
        raise ValueError("Yandex API key is required (YANDEX_API_KEY)")

    return YandexProvider(
        folder_id=folder_id,
        transport=YandexTransport(api_key, timeout=timeout, client=client),
    )
