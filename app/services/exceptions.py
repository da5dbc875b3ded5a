"""Custom exception hierarchy for the service layer"""
from typing import Optional


class ServiceError(Exception):
    """Base exception for all service-related errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ResolutionFailed(ServiceError):
    """Raised when the external resolver cannot produce metadata for a URL"""
    def __init__(self, diagnostic: str = "", returncode: Optional[int] = None):
        diagnostic = (diagnostic or "").strip() or "resolver produced no diagnostic output"
        if returncode is not None:
            message = f"Resolver exited with status {returncode}: {diagnostic}"
        else:
            message = f"Resolver failed: {diagnostic}"
        super().__init__(message, "RESOLUTION_FAILED")
        self.diagnostic = diagnostic
        self.returncode = returncode


class MalformedMetadata(ServiceError):
    """Raised when the resolver output is not a valid JSON document"""
    def __init__(self, message: str = "Resolver output is not valid JSON"):
        super().__init__(message, "MALFORMED_METADATA")


class ImageDecodeError(ServiceError):
    """Raised when an uploaded file cannot be decoded as an image"""
    def __init__(self, message: str = "Invalid image format"):
        super().__init__(message, "IMAGE_DECODE_ERROR")


class ImageEncodeError(ServiceError):
    """Raised when writing a converted copy of an image fails"""
    def __init__(self, image_format: str, reason: str = ""):
        message = f"Image conversion to '{image_format}' failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "IMAGE_ENCODE_ERROR")
        self.image_format = image_format
