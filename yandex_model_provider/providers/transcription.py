"""
Yandex Transcription Model

Synchronous SpeechKit recognition: the audio is the request body, the
recognition options travel in the query string.
"""

import base64
import binascii
import logging
from typing import Optional
from urllib.parse import urlencode

import pydantic

from yandex_model_provider.config import get_settings
from yandex_model_provider.converters.exceptions import ValidationError
from yandex_model_provider.ir import (
    ResponseMetadata,
    TranscriptionOptions,
    TranscriptionResult,
)
from yandex_model_provider.providers.base import TranscriptionModel
from yandex_model_provider.providers.transport import YandexTransport
from yandex_model_provider.schemas import TranscriptionResponseModel

logger = logging.getLogger(__name__)

# Returned instead of an empty transcript ("no sound detected")
NO_SPEECH_PLACEHOLDER = "нет звуков"

DEFAULT_LANG = "auto"
DEFAULT_FORMAT = "oggopus"
DEFAULT_SAMPLE_RATE_HERTZ = 48000
DEFAULT_TOPIC = "general"


def build_query(options: TranscriptionOptions) -> dict[str, str]:
    """Recognition options as query parameters, defaults filled in."""
    return {
        "lang": options.lang or DEFAULT_LANG,
        "format": options.format or DEFAULT_FORMAT,
        "sampleRateHertz": str(options.sample_rate_hertz or DEFAULT_SAMPLE_RATE_HERTZ),
        "topic": options.topic or DEFAULT_TOPIC,
        "profanityFilter": "true" if options.profanity_filter else "false",
        "rawResults": "true" if options.raw_results else "false",
    }


def decode_audio(audio: bytes | str) -> bytes:
    """
    Return raw audio bytes; strings are base64 encoded audio.

    Raises:
        ValidationError: String is not valid base64
    """
    if isinstance(audio, str):
        try:
            return base64.b64decode(audio, validate=True)
        except binascii.Error as e:
            raise ValidationError(
                field="audio",
                message="Audio string is not valid base64",
                expected="bytes or base64 string",
            ) from e
    return bytes(audio)


class YandexTranscriptionModel(TranscriptionModel):
    """SpeechKit speech recognition model."""

    model_id = "stt:recognize"

    def __init__(
        self,
        *,
        folder_id: str,
        transport: YandexTransport,
        url: Optional[str] = None,
    ):
        self.folder_id = folder_id
        self.transport = transport
        self.url = url or get_settings().YANDEX_STT_URL

    async def transcribe(self, options: TranscriptionOptions) -> TranscriptionResult:
        params = build_query(options)
        audio = decode_audio(options.audio)

        response = await self.transport.post_bytes(
            self.url,
            audio,
            params=params,
            headers=options.headers,
            service="Yandex STT API",
            include_body_in_error=False,
        )

        try:
            data = TranscriptionResponseModel.model_validate(response.body)
        except pydantic.ValidationError as e:
            raise ValidationError(
                field="result",
                message=f"Invalid recognition response: {e.error_count()} error(s)",
                expected="{result}",
            ) from e

        text = data.result or NO_SPEECH_PLACEHOLDER
        logger.debug("Transcription done: chars=%d empty=%s", len(text), not data.result)

        return TranscriptionResult(
            text=text,
            warnings=[],
            request_body=urlencode(params),
            response=ResponseMetadata(
                model_id=self.model_id,
                headers=response.headers,
                body=response.body,
            ),
        )
