from .base import AppException, ErrorCode


class ResolutionFailedException(AppException):
    """Raised when the resolver process could not be launched or failed"""

    def __init__(self, url: str = "", reason: str = ""):
        details = {"url": url}
        message = "Failed to fetch metadata"
        if reason:
            details["reason"] = reason
            message = f"{message}: {reason}"

        super().__init__(
            code=ErrorCode.RESOLUTION_FAILED,
            message=message,
            status_code=500,
            details=details
        )


class MalformedMetadataException(AppException):
    """Raised when the resolver output could not be parsed"""

    def __init__(self, url: str = "", reason: str = ""):
        details = {"url": url}
        if reason:
            details["reason"] = reason

        super().__init__(
            code=ErrorCode.MALFORMED_METADATA,
            message="Failed to parse metadata",
            status_code=500,
            details=details
        )
