"""
Converters Module

Converts between the unified model and the Yandex completion API format in
both directions.
"""

from typing import Any, List, Tuple

from ..ir import CallOptions, CallWarning
from ..schemas import YandexCompletionRequest

from .request import YandexChatEncoder
from .response import DecodedCompletion, YandexChatDecoder, usage_to_dict
from .finish_reason import map_finish_status
from .exceptions import (
    ConversionError,
    CapabilityNotSupportedError,
    UnsupportedContentError,
    ValidationError,
    StreamConversionError,
    MalformedChunkError,
)


_ENCODER = YandexChatEncoder()
_DECODER = YandexChatDecoder()


def encode_request(
    options: CallOptions,
    *,
    model_uri: str,
    stream: bool = False,
) -> Tuple[YandexCompletionRequest, List[CallWarning]]:
    """
    Convert unified call options to a completion request body.

    Args:
        options: Call options
        model_uri: Model URI, gpt://{folder}/{model}
        stream: Whether this is a streaming request

    Returns:
        (request body, warnings)

    Raises:
        UnsupportedContentError: Prompt holds content the API cannot express
    """
    return _ENCODER.encode_request(options, model_uri=model_uri, stream=stream)


def decode_response(payload: Any) -> DecodedCompletion:
    """
    Convert a completion response body to the unified model.

    Raises:
        ValidationError: Payload is not a completion response
    """
    return _DECODER.decode_response(payload)


__all__ = [
    "encode_request",
    "decode_response",
    "map_finish_status",
    "usage_to_dict",
    "YandexChatEncoder",
    "YandexChatDecoder",
    "DecodedCompletion",
    # Exceptions
    "ConversionError",
    "CapabilityNotSupportedError",
    "UnsupportedContentError",
    "ValidationError",
    "StreamConversionError",
    "MalformedChunkError",
]
