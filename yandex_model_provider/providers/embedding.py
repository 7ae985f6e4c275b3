"""
Yandex Embedding Model

All values of a call are joined into one text and embedded together, so a
call always returns exactly one vector.
"""

import logging
from typing import Optional

import pydantic

from yandex_model_provider.config import get_settings
from yandex_model_provider.converters.exceptions import ValidationError
from yandex_model_provider.ir import EmbeddingOptions, EmbeddingResult, ResponseMetadata
from yandex_model_provider.providers.base import EmbeddingModel
from yandex_model_provider.providers.transport import YandexTransport
from yandex_model_provider.schemas import EmbeddingResponseModel, YandexEmbeddingRequest

logger = logging.getLogger(__name__)


class YandexEmbeddingModel(EmbeddingModel):
    """Text embedding model (text-search-doc, text-search-query)."""

    # The API has no batch endpoint
    max_embeddings_per_call: Optional[int] = None
    supports_parallel_calls = False

    def __init__(
        self,
        model_id: str,
        *,
        folder_id: str,
        transport: YandexTransport,
        url: Optional[str] = None,
    ):
        self.model_id = model_id
        self.folder_id = folder_id
        self.transport = transport
        self.url = url or get_settings().YANDEX_EMBEDDING_URL

    @property
    def model_uri(self) -> str:
        return f"emb://{self.folder_id}/{self.model_id}"

    async def embed(self, options: EmbeddingOptions) -> EmbeddingResult:
        body: YandexEmbeddingRequest = {
            "modelUri": self.model_uri,
            "text": " ".join(options.values),
        }
        response = await self.transport.post_json(
            self.url, body, headers=options.headers
        )

        try:
            data = EmbeddingResponseModel.model_validate(response.body)
        except pydantic.ValidationError as e:
            raise ValidationError(
                field="embedding",
                message=f"Invalid embedding response: {e.error_count()} error(s)",
                expected="{embedding, numTokens, modelVersion}",
            ) from e

        logger.debug(
            "Embedding done: model=%s dimensions=%d tokens=%d",
            self.model_id,
            len(data.embedding),
            data.num_tokens,
        )

        return EmbeddingResult(
            embeddings=[data.embedding],
            usage_tokens=data.num_tokens,
            warnings=[],
            response=ResponseMetadata(
                model_id=self.model_id,
                model_version=data.model_version,
                headers=response.headers,
                body=response.body,
            ),
        )
