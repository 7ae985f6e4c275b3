"""
Unified Model Interfaces

Defines the abstract operations application code depends on, independent of
the backend that serves them.
"""

from abc import ABC, abstractmethod

from yandex_model_provider.ir import (
    CallOptions,
    EmbeddingOptions,
    EmbeddingResult,
    GenerateResult,
    ImageOptions,
    ImageResult,
    StreamResult,
    TranscriptionOptions,
    TranscriptionResult,
)

PROVIDER_NAME = "yandex-cloud"


class LanguageModel(ABC):
    """
    Chat Language Model Abstract Base Class

    Defines normal and streaming generation.
    """

    provider: str = PROVIDER_NAME
    model_id: str

    @abstractmethod
    async def generate(self, options: CallOptions) -> GenerateResult:
        """
        Generate a complete response

        Args:
            options: Prompt, tools and sampling options

        Returns:
            GenerateResult: Content, finish reason, usage and warnings
        """
        pass

    @abstractmethod
    async def stream(self, options: CallOptions) -> StreamResult:
        """
        Generate a response as a stream of unified parts

        Args:
            options: Prompt, tools and sampling options

        Returns:
            StreamResult: Async iterator of stream parts plus request body
        """
        pass


class EmbeddingModel(ABC):
    """Text embedding model."""

    provider: str = PROVIDER_NAME
    model_id: str

    @abstractmethod
    async def embed(self, options: EmbeddingOptions) -> EmbeddingResult:
        pass


class ImageModel(ABC):
    """Image generation model."""

    provider: str = PROVIDER_NAME
    model_id: str
    max_images_per_call: int = 1

    @abstractmethod
    async def generate(self, options: ImageOptions) -> ImageResult:
        pass


class TranscriptionModel(ABC):
    """Speech to text model."""

    provider: str = PROVIDER_NAME
    model_id: str

    @abstractmethod
    async def transcribe(self, options: TranscriptionOptions) -> TranscriptionResult:
        pass
