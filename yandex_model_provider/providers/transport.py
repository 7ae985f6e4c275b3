"""
Yandex Cloud HTTP Transport

Issues the HTTP requests of all models: attaches the API key, merges caller
headers and surfaces non-success statuses as TransportError.
"""

import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping, Optional

import httpx

from yandex_model_provider.config import get_settings
from yandex_model_provider.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """
    Transport Response Data Class

    Encapsulates a successful response of the API.
    """

    # HTTP status code
    status_code: int
    # Response headers
    headers: dict[str, str] = field(default_factory=dict)
    # Response body (parsed JSON, or text when the body is not JSON)
    body: Any = None


class YandexTransport:
    """
    Yandex Cloud HTTP Transport

    Supports:
    - JSON requests (completion, embedding, image generation)
    - Streaming JSON requests (streaming completion)
    - GET of long-running operations
    - Binary uploads with query parameters (speech recognition)

    A shared ``httpx.AsyncClient`` may be injected; it is then left open.
    Otherwise every request opens and closes its own client.
    """

    def __init__(
        self,
        api_key: str,
        timeout: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self.api_key = api_key
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self._client = client

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    def _prepare_headers(
        self,
        headers: Optional[Mapping[str, Optional[str]]] = None,
        content_type: Optional[str] = "application/json",
    ) -> dict[str, str]:
        """
        Prepare request headers

        Adds the API key to the Authorization header, then merges caller
        headers (overwriting existing ones). Caller headers whose value is
        None are dropped.

        Args:
            headers: Caller headers
            content_type: Content-Type of the body, None for bodiless requests

        Returns:
            dict: Request headers (new dictionary)
        """
        new_headers = {"Authorization": f"Api-Key {self.api_key}"}
        if content_type:
            new_headers["Content-Type"] = content_type
        for key, value in (headers or {}).items():
            if value is not None:
                new_headers[key] = value
        return new_headers

    async def post_json(
        self,
        url: str,
        body: Mapping[str, Any],
        headers: Optional[Mapping[str, Optional[str]]] = None,
    ) -> TransportResponse:
        """
        POST a JSON body and return the parsed response.

        Raises:
            TransportError: Non-success status, timeout or connection error
        """
        prepared_headers = self._prepare_headers(headers)
        logger.debug(
            "Yandex Request: method=POST url=%s body=%s",
            url,
            json.dumps(body, ensure_ascii=False),
        )
        return await self._send("POST", url, headers=prepared_headers, json=body)

    async def get_json(
        self,
        url: str,
        headers: Optional[Mapping[str, Optional[str]]] = None,
    ) -> TransportResponse:
        """GET a JSON resource, e.g. a long-running operation."""
        prepared_headers = self._prepare_headers(headers, content_type=None)
        logger.debug("Yandex Request: method=GET url=%s", url)
        return await self._send("GET", url, headers=prepared_headers)

    async def post_bytes(
        self,
        url: str,
        content: bytes,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, Optional[str]]] = None,
        service: str = "Yandex API",
        include_body_in_error: bool = True,
    ) -> TransportResponse:
        """POST raw bytes as application/octet-stream."""
        prepared_headers = self._prepare_headers(
            headers, content_type="application/octet-stream"
        )
        logger.debug(
            "Yandex Request: method=POST url=%s params=%s bytes=%d",
            url,
            dict(params or {}),
            len(content),
        )
        return await self._send(
            "POST",
            url,
            headers=prepared_headers,
            content=content,
            params=params,
            service=service,
            include_body_in_error=include_body_in_error,
        )

    @asynccontextmanager
    async def open_stream(
        self,
        url: str,
        body: Mapping[str, Any],
        headers: Optional[Mapping[str, Optional[str]]] = None,
    ) -> AsyncIterator[httpx.Response]:
        """
        POST a JSON body and open the response for streaming.

        The status is checked on entry, so a failed request raises before the
        body is consumed. The response, and the client when owned, are closed
        on exit. httpx errors raised while the body is read inside the block
        are mapped like those of the request itself.

        Raises:
            TransportError: Non-success status, timeout or connection error
        """
        prepared_headers = self._prepare_headers(headers)
        logger.debug(
            "Yandex Stream Request: method=POST url=%s body=%s",
            url,
            json.dumps(body, ensure_ascii=False),
        )

        try:
            async with self._get_client() as client:
                async with client.stream(
                    "POST", url, headers=prepared_headers, json=body
                ) as response:
                    if not response.is_success:
                        await response.aread()
                        raise TransportError(
                            response.status_code, response.reason_phrase, response.text
                        )
                    yield response
        except httpx.TimeoutException as e:
            raise TransportError(504, "Gateway Timeout", f"Request timeout: {str(e)}") from e
        except httpx.RequestError as e:
            raise TransportError(502, "Bad Gateway", f"Request error: {str(e)}") from e

    async def _send(
        self,
        method: str,
        url: str,
        service: str = "Yandex API",
        include_body_in_error: bool = True,
        **kwargs: Any,
    ) -> TransportResponse:
        try:
            async with self._get_client() as client:
                response = await client.request(method=method, url=url, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(
                504, "Gateway Timeout", f"Request timeout: {str(e)}", service=service
            ) from e
        except httpx.RequestError as e:
            raise TransportError(
                502, "Bad Gateway", f"Request error: {str(e)}", service=service
            ) from e

        if not response.is_success:
            raise TransportError(
                response.status_code,
                response.reason_phrase,
                response.text if include_body_in_error else "",
                service=service,
            )

        response_body: Any = response.text
        try:
            response_body = response.json()
        except json.JSONDecodeError:
            pass

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response_body,
        )
