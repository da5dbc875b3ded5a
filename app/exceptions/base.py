from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    # General errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Video-related errors
    RESOLUTION_FAILED = "RESOLUTION_FAILED"
    MALFORMED_METADATA = "MALFORMED_METADATA"

    # Image-related errors
    INVALID_IMAGE = "INVALID_IMAGE"
    IMAGE_CONVERSION_FAILED = "IMAGE_CONVERSION_FAILED"


class AppException(Exception):
    """Base exception class for the application"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response"""
        result = {
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
            "message": self.message
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidRequestException(AppException):
    """Raised when a request is missing required input"""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(
            code=ErrorCode.INVALID_REQUEST,
            message=message,
            status_code=400
        )
