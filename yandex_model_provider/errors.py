"""
Error Definitions

Defines the exceptions raised while talking to Yandex Cloud. Conversion
problems live in ``converters.exceptions``.
"""

from typing import Any, Optional


class ProviderError(Exception):
    """
    Provider Base Exception

    Base class for I/O failures, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "provider_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class TransportError(ProviderError):
    """
    Transport Error

    Raised when the API answers with a non-success status, or when the request
    could not be completed at all (timeouts and connection errors are reported
    as 504 and 502).
    """

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        body: str = "",
        service: str = "Yandex API",
    ):
        message = f"{service} error: {status_code} {status_text}".rstrip()
        if body:
            message = f"{message}: {body}"
        super().__init__(
            message=message,
            error_type="transport_error",
            code=str(status_code),
            details={"status_code": status_code, "status_text": status_text, "body": body},
        )
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class OperationError(ProviderError):
    """
    Long-running Operation Error

    Raised when an operation finishes with an error object, finishes without a
    result, or does not finish within the allowed number of polls.
    """

    def __init__(
        self,
        message: str,
        operation_id: Optional[str] = None,
        code: str = "operation_failed",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="operation_error",
            code=code,
            details=details,
        )
        self.operation_id = operation_id
