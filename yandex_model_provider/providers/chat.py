"""
Yandex Chat Model

Implements generate / stream on top of the completion endpoint.
"""

import logging
from typing import Any, AsyncGenerator, Mapping, Optional

from yandex_model_provider.config import get_settings
from yandex_model_provider.converters import (
    YandexChatDecoder,
    YandexChatEncoder,
    usage_to_dict,
)
from yandex_model_provider.ir import (
    CallOptions,
    GenerateResult,
    ResponseMetadata,
    StreamResult,
    Usage,
)
from yandex_model_provider.providers.base import LanguageModel
from yandex_model_provider.providers.transport import YandexTransport
from yandex_model_provider.stream import StreamTransducer

logger = logging.getLogger(__name__)


class YandexChatModel(LanguageModel):
    """
    YandexGPT chat model

    Request conversion happens before any network call, so a prompt the API
    cannot express fails without contacting the server.
    """

    def __init__(
        self,
        model_id: str,
        *,
        folder_id: str,
        transport: YandexTransport,
        url: Optional[str] = None,
        diff_text_snapshots: Optional[bool] = None,
    ):
        """
        Args:
            model_id: Model name, e.g. "yandexgpt/latest"
            folder_id: Cloud folder hosting the model
            transport: HTTP transport carrying the credentials
            url: Completion endpoint, defaults to configuration
            diff_text_snapshots: Stream text as differences between
                snapshots, defaults to configuration
        """
        settings = get_settings()
        self.model_id = model_id
        self.folder_id = folder_id
        self.transport = transport
        self.url = url or settings.YANDEX_COMPLETION_URL
        self.diff_text_snapshots = (
            settings.STREAM_DIFF_TEXT_SNAPSHOTS
            if diff_text_snapshots is None
            else diff_text_snapshots
        )
        self._encoder = YandexChatEncoder()
        self._decoder = YandexChatDecoder()

    @property
    def model_uri(self) -> str:
        return f"gpt://{self.folder_id}/{self.model_id}"

    async def generate(self, options: CallOptions) -> GenerateResult:
        body, warnings = self._encoder.encode_request(
            options, model_uri=self.model_uri, stream=False
        )
        response = await self.transport.post_json(
            self.url, body, headers=options.headers
        )
        decoded = self._decoder.decode_response(response.body)
        usage = decoded.usage or Usage()

        logger.debug(
            "Completion done: model=%s blocks=%d finish_reason=%s usage=%s",
            self.model_id,
            len(decoded.content),
            decoded.finish_reason.unified.value,
            usage_to_dict(usage),
        )

        return GenerateResult(
            content=decoded.content,
            finish_reason=decoded.finish_reason,
            usage=usage,
            warnings=warnings,
            request_body=dict(body),
            response=self._metadata(decoded.model_version, response.headers, response.body),
        )

    async def stream(self, options: CallOptions) -> StreamResult:
        body, warnings = self._encoder.encode_request(
            options, model_uri=self.model_uri, stream=True
        )
        source = self._open_stream(body, options.headers)
        # First item is the opened response; a failed status raises here.
        response = await source.__anext__()
        transducer = StreamTransducer(
            warnings,
            include_raw_chunks=options.include_raw_chunks,
            diff_text_snapshots=self.diff_text_snapshots,
        )
        return StreamResult(
            stream=transducer.transduce(source),
            request_body=dict(body),
            response=self._metadata(None, dict(response.headers), None),
            on_close=source.aclose,
        )

    async def _open_stream(
        self, body: Mapping[str, Any], headers: Optional[Mapping[str, Optional[str]]]
    ) -> AsyncGenerator[Any, None]:
        """
        Yield the opened response, then its body chunks.

        The response stays open for as long as the generator is suspended, and
        is closed when the generator finishes, is closed or is collected.
        """
        async with self.transport.open_stream(self.url, body, headers=headers) as response:
            yield response
            async for chunk in response.aiter_bytes():
                yield chunk

    def _metadata(
        self, model_version: Optional[str], headers: dict[str, str], body: Any
    ) -> ResponseMetadata:
        return ResponseMetadata(
            model_id=self.model_id,
            model_version=model_version,
            headers=headers,
            body=body,
        )
