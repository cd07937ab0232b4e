"""
Custom exceptions for the xlsx-to-json SDK.
"""

from typing import Dict, Any, Optional


class ConversionError(Exception):
    """Base exception for conversion workflow errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(ConversionError):
    """Raised when configuration or service-reported structure is unusable."""

    pass


class NetworkError(ConversionError):
    """Raised when the service or file host cannot be reached."""

    pass


class RequestTimeoutError(NetworkError):
    """Raised when a request exceeds its timeout."""

    pass


class ServiceError(ConversionError):
    """Raised when a remote call answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        status_text: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.status_text = status_text


class ResponseFormatError(ConversionError):
    """Raised when a 2xx response does not have the expected JSON shape."""

    pass


class FileSizeError(ConversionError):
    """Raised when the downloaded file exceeds the size limit."""

    pass


class WorkflowError(ConversionError):
    """
    Single user-facing failure of a workflow run.

    Carries the stage that failed and, where the failure came from an HTTP
    response, its status code and text. The original exception is chained
    as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        stage: str,
        status_code: int = 0,
        status_text: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.stage = stage
        self.status_code = status_code
        self.status_text = status_text

    @classmethod
    def from_exception(cls, stage: str, error: Exception) -> "WorkflowError":
        if isinstance(error, ServiceError):
            return cls(
                error.message,
                stage,
                status_code=error.status_code,
                status_text=error.status_text,
                details=error.details,
            )
        if isinstance(error, ConversionError):
            return cls(
                error.message, stage, status_text="Unknown Error", details=error.details
            )
        return cls(str(error) or error.__class__.__name__, stage, status_text="Unknown Error")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "statusText": self.status_text,
            "stage": self.stage,
        }
