"""
Yandex Cloud model implementations and the HTTP transport they share.
"""

from yandex_model_provider.providers.base import (
    EmbeddingModel,
    ImageModel,
    LanguageModel,
    TranscriptionModel,
)
from yandex_model_provider.providers.chat import YandexChatModel
from yandex_model_provider.providers.embedding import YandexEmbeddingModel
from yandex_model_provider.providers.factory import YandexProvider, create_yandex
from yandex_model_provider.providers.image import YandexImageModel
from yandex_model_provider.providers.transcription import YandexTranscriptionModel
from yandex_model_provider.providers.transport import (
    TransportResponse,
    YandexTransport,
)

__all__ = [
    "LanguageModel",
    "EmbeddingModel",
    "ImageModel",
    "TranscriptionModel",
    "YandexChatModel",
    "YandexEmbeddingModel",
    "YandexImageModel",
    "YandexTranscriptionModel",
    "YandexTransport",
    "TransportResponse",
    "YandexProvider",
    "create_yandex",
]
