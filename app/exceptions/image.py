from .base import AppException, ErrorCode


class InvalidImageException(AppException):
    """Raised when the upload is missing or is not a decodable image"""

    def __init__(self, message: str = "Invalid image format"):
        super().__init__(
            code=ErrorCode.INVALID_IMAGE,
            message=message,
            status_code=400
        )


class ImageConversionFailedException(AppException):
    """Raised when writing one of the converted copies fails"""

    def __init__(self, filename: str = "", reason: str = ""):
        details = {"filename": filename}
        if reason:
            details["reason"] = reason

        super().__init__(
            code=ErrorCode.IMAGE_CONVERSION_FAILED,
            message="Image conversion failed",
            status_code=500,
            details=details
        )
