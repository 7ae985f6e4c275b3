"""
Yandex Cloud Model Provider

Exposes Yandex Cloud Foundation Models (YandexGPT chat, text embeddings,
YandexART images, SpeechKit recognition) through a vendor-neutral model
interface. Supports normal and streaming chat with tool calls.
"""

from .converters import (
    decode_response,
    encode_request,
    map_finish_status,
)

from .ir import (
    CallOptions,
    CallWarning,
    EmbeddingOptions,
    GenerateResult,
    ImageOptions,
    StreamPart,
    StreamResult,
    TranscriptionOptions,
    UnifiedMessage,
)

from .errors import OperationError, ProviderError, TransportError
from .providers import YandexProvider, create_yandex
from .stream import StreamTransducer

__version__ = "0.1.0"
__all__ = [
    # Provider
    "create_yandex",
    "YandexProvider",
    # Converters
    "encode_request",
    "decode_response",
    "map_finish_status",
    "StreamTransducer",
    # Unified types
    "UnifiedMessage",
    "CallOptions",
    "CallWarning",
    "EmbeddingOptions",
    "ImageOptions",
    "TranscriptionOptions",
    "GenerateResult",
    "StreamPart",
    "StreamResult",
    # Errors
    "ProviderError",
    "TransportError",
    "OperationError",
]
