"""
Conversion Exceptions

Custom exceptions for errors raised while converting between the unified
model and the Yandex wire format.
"""

from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base exception for conversion errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error": "conversion_error",
            "message": self.message,
            "field": self.field,
            "details": self.details,
        }


class CapabilityNotSupportedError(ConversionError):
    """Raised when the Yandex API cannot express a required capability."""

    def __init__(
        self,
        capability: str,
        suggestion: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = f"Capability '{capability}' is not supported by Yandex Cloud"
        if suggestion:
            message += f". {suggestion}"
        super().__init__(message=message, field=capability, details=details)
        self.capability = capability
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "capability_not_supported"
        result["capability"] = self.capability
        result["suggestion"] = self.suggestion
        return result


class UnsupportedContentError(CapabilityNotSupportedError):
    """
    Raised for prompt content blocks the completion API cannot represent.

    Examples:
    - File parts
    - Reasoning parts
    - Tool approval responses

    Dropping such a block would change the conversation sent to the model, so
    the request is rejected before anything goes over the wire.
    """

    def __init__(
        self,
        content_type: str,
        message_index: Optional[int] = None,
        block_index: Optional[int] = None,
    ):
        super().__init__(
            capability=content_type,
            suggestion="Remove the content block from the prompt",
            details={"message_index": message_index, "block_index": block_index},
        )
        self.content_type = content_type
        self.message_index = message_index
        self.block_index = block_index

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "unsupported_content"
        result["content_type"] = self.content_type
        return result


class ValidationError(ConversionError):
    """
    Raised when input validation fails.

    Examples:
    - A tool result whose content is not valid JSON
    - A response body missing the ``result`` object
    """

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        expected: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        full_message = f"Validation error for '{field}': {message}"
        super().__init__(message=full_message, field=field, details=details)
        self.value = value
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "validation_error"
        result["value"] = repr(self.value) if self.value is not None else None
        result["expected"] = self.expected
        return result


class StreamConversionError(ConversionError):
    """
    Raised when stream conversion fails.

    Examples:
    - Chunk fed before the stream was started
    - Chunk fed after the stream finished
    """

    def __init__(
        self,
        message: str,
        chunk_index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details)
        self.chunk_index = chunk_index

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "stream_conversion_error"
        result["chunk_index"] = self.chunk_index
        return result


class MalformedChunkError(StreamConversionError):
    """Raised when a stream chunk is not a valid completion response."""

    def __init__(
        self,
        message: str,
        chunk_index: Optional[int] = None,
        raw_chunk: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            chunk_index=chunk_index,
            details={"raw_chunk": raw_chunk} if raw_chunk is not None else None,
        )
        self.raw_chunk = raw_chunk

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "malformed_chunk"
        return result
