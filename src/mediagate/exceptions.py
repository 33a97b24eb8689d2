"""Structured exception types for the image gateway.

Each exception carries the error code and HTTP status code it maps to, so the
API layer handles the whole hierarchy with a single exception handler.

Usage:
    from mediagate.exceptions import ImageNotFoundException

    # In service layer
    if record is None:
        raise ImageNotFoundException(f"Image '{image_id}' not found")
"""

from typing import Any

from mediagate.models.errors import ErrorCode


class MediaGatewayException(Exception):
    """Base exception for the image gateway.

    Attributes:
        error_code: ErrorCode enum value for API responses
        status_code: HTTP status code to return
        message: Human-readable error message
        details: Optional diagnostic data, only shown to clients when enabled
    """

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationException(MediaGatewayException):
    """Raised when an upload is rejected before any remote I/O."""

    error_code = ErrorCode.MISSING_FILE
    status_code = 400


class MissingFileException(ValidationException):
    """Raised when no file part was supplied."""

    error_code = ErrorCode.MISSING_FILE


class EmptyFileException(ValidationException):
    """Raised when the uploaded file has no content."""

    error_code = ErrorCode.EMPTY_FILE


class FileTooLargeException(ValidationException):
    """Raised when the uploaded file exceeds the configured size limit."""

    error_code = ErrorCode.FILE_TOO_LARGE


class MissingCategoryException(ValidationException):
    """Raised when a category is required but was not supplied."""

    error_code = ErrorCode.MISSING_CATEGORY


class UnsupportedTypeException(ValidationException):
    """Raised when the content type is not an allowed image type."""

    error_code = ErrorCode.UNSUPPORTED_TYPE


class InvalidRequestException(ValidationException):
    """Raised when request fields cannot be parsed."""

    error_code = ErrorCode.INVALID_REQUEST


class ImageNotFoundException(MediaGatewayException):
    """Raised when an image id is not in the catalog."""

    error_code = ErrorCode.NOT_FOUND
    status_code = 404


class StoreUploadFailedException(MediaGatewayException):
    """Raised when the remote store rejects or fails an upload."""

    error_code = ErrorCode.STORE_UPLOAD_FAILED
    status_code = 500


class StoreDeleteFailedException(MediaGatewayException):
    """Raised when the remote store fails to delete an object."""

    error_code = ErrorCode.STORE_DELETE_FAILED
    status_code = 500


class RemoteStoreError(Exception):
    """Raised by remote store adapters on any failed call."""
