"""Error response models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Error codes for API responses."""

    MISSING_FILE = "MISSING_FILE"
    EMPTY_FILE = "EMPTY_FILE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    MISSING_CATEGORY = "MISSING_CATEGORY"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    STORE_UPLOAD_FAILED = "STORE_UPLOAD_FAILED"
    STORE_DELETE_FAILED = "STORE_DELETE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Unified error response format."""

    detail: str = Field(..., description="Error description")
    code: str = Field(..., description="Error code")
    details: dict[str, Any] | None = Field(default=None, description="Extra diagnostic data")
