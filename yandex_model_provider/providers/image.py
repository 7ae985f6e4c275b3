"""
Yandex Image Model

YandexART generation is a long-running operation: the generation request
returns an operation id which is polled until the operation is done.
"""

import asyncio
import logging
from typing import Any, List, Optional, Tuple

import pydantic

from yandex_model_provider.config import get_settings
from yandex_model_provider.converters.exceptions import ValidationError
from yandex_model_provider.errors import OperationError
from yandex_model_provider.ir import CallWarning, ImageOptions, ImageResult, ResponseMetadata
from yandex_model_provider.providers.base import ImageModel
from yandex_model_provider.providers.transport import YandexTransport
from yandex_model_provider.schemas import OperationModel, YandexImageGenerationRequest

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPE = "image/png"


def parse_aspect_ratio(aspect_ratio: str) -> Optional[Tuple[int, int]]:
    """
    Parse a "W:H" aspect ratio.

    Returns:
        (width, height), or None when the value is not two positive integers
    """
    parts = aspect_ratio.split(":")
    if len(parts) != 2:
        return None
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if width <= 0 or height <= 0:
        return None
    return width, height


class YandexImageModel(ImageModel):
    """YandexART image model."""

    max_images_per_call = 1

    def __init__(
        self,
        model_id: str,
        *,
        folder_id: str,
        transport: YandexTransport,
        url: Optional[str] = None,
        operation_url: Optional[str] = None,
        poll_interval: Optional[float] = None,
        max_poll_attempts: Optional[int] = None,
    ):
        settings = get_settings()
        self.model_id = model_id
        self.folder_id = folder_id
        self.transport = transport
        self.url = url or settings.YANDEX_IMAGE_GENERATION_URL
        self.operation_url = (operation_url or settings.YANDEX_OPERATION_URL).rstrip("/")
        self.poll_interval = (
            settings.IMAGE_POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        )
        self.max_poll_attempts = max_poll_attempts or settings.IMAGE_POLL_MAX_ATTEMPTS

    @property
    def model_uri(self) -> str:
        return f"art://{self.folder_id}/{self.model_id}"

    def build_request(
        self, options: ImageOptions
    ) -> Tuple[YandexImageGenerationRequest, List[CallWarning]]:
        """
        Build the generation request body.

        Raises:
            ValueError: No prompt given
        """
        if not options.prompt:
            raise ValueError("Prompt is required")

        warnings: List[CallWarning] = []
        generation_options: dict[str, Any] = {"mimeType": IMAGE_MIME_TYPE}
        if options.seed is not None:
            generation_options["seed"] = options.seed
        if options.aspect_ratio:
            ratio = parse_aspect_ratio(options.aspect_ratio)
            if ratio is None:
                warnings.append(
                    CallWarning(
                        type="unsupported",
                        feature="aspectRatio",
                        details=f"Aspect ratio '{options.aspect_ratio}' is not in W:H form and was ignored",
                    )
                )
            else:
                generation_options["aspectRatio"] = {"width": ratio[0], "height": ratio[1]}

        body: YandexImageGenerationRequest = {
            "modelUri": self.model_uri,
            "messages": [{"text": options.prompt, "weight": 1}],
            "generationOptions": generation_options,
        }
        return body, warnings

    async def generate(self, options: ImageOptions) -> ImageResult:
        body, warnings = self.build_request(options)
        response = await self.transport.post_json(
            self.url, body, headers=options.headers
        )
        operation = self._parse_operation(response.body)
        logger.debug("Image generation started: operation=%s", operation.id)

        operation = await self.wait_for_operation(operation)

        if operation.response is None or not operation.response.image:
            raise OperationError("Image generation failed", operation_id=operation.id)

        return ImageResult(
            images=[operation.response.image],
            warnings=warnings,
            response=ResponseMetadata(
                model_id=self.model_id,
                model_version=operation.response.model_version,
                headers=response.headers,
            ),
        )

    async def wait_for_operation(self, operation: OperationModel) -> OperationModel:
        """
        Poll an operation until it is done.

        An error reported by any poll ends the wait, even before ``done``.

        Raises:
            OperationError: Operation failed or did not finish in time
        """
        self._check_operation(operation)
        attempts = 0
        while not operation.done:
            if attempts >= self.max_poll_attempts:
                raise OperationError(
                    f"Operation {operation.id} did not finish after {attempts} polls",
                    operation_id=operation.id,
                    code="operation_timeout",
                )
            await asyncio.sleep(self.poll_interval)
            attempts += 1
            response = await self.transport.get_json(
                f"{self.operation_url}/{operation.id}"
            )
            operation = self._parse_operation(response.body)
            self._check_operation(operation)

        logger.debug("Operation done: operation=%s polls=%d", operation.id, attempts)
        return operation

    @staticmethod
    def _check_operation(operation: OperationModel) -> None:
        if operation.error is not None:
            raise OperationError(
                operation.error.message,
                operation_id=operation.id,
                details={"code": operation.error.code, "details": operation.error.details},
            )

    @staticmethod
    def _parse_operation(payload: Any) -> OperationModel:
        try:
            return OperationModel.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(
                field="operation",
                message=f"Invalid operation: {e.error_count()} error(s)",
                expected="{id, done, response?, error?}",
            ) from e
