"""Error models for the generator API"""

from enum import Enum
from typing import Any, Optional
import uuid


class ErrorCode(str, Enum):
    """Error codes surfaced to API callers"""
    INVALID_INPUT = "INVALID_INPUT"
    GENERATION_FAILED = "GENERATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    STORAGE_ERROR = "STORAGE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ApplicationError(Exception):
    """Application error rendered as a JSON error body by the API layer"""
    def __init__(
        self,
        code: ErrorCode,
        message: str,
        retryable: bool = False,
        hint: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.error_id = str(uuid.uuid4())
        self.code = code
        self.message = message
        self.retryable = retryable
        self.hint = hint
        self.details = details
        super().__init__(self.message)

    def model_dump(self):
        """Return dict representation for API responses"""
        return {
            "error_id": self.error_id,
            "error": self.code.value,
            "message": self.message,
            "hint": self.hint,
            "retryable": self.retryable,
            "details": self.details,
        }

    @property
    def http_status(self) -> int:
        """Map error code to HTTP status"""
        mapping = {
            ErrorCode.INVALID_INPUT: 400,
            ErrorCode.NOT_FOUND: 404,
            ErrorCode.GENERATION_FAILED: 502,
            ErrorCode.STORAGE_ERROR: 500,
            ErrorCode.CONFIGURATION_ERROR: 500,
        }
        return mapping.get(self.code, 500)


class ModelCallError(Exception):
    """The model collaborator failed at the transport level (network, quota, malformed envelope, timeout)"""
    pass
