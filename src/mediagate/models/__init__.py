"""Domain models and error DTOs."""

from .errors import ErrorCode, ErrorResponse
from .image import ImageRecord, StoredObject

__all__ = ["ErrorCode", "ErrorResponse", "ImageRecord", "StoredObject"]
