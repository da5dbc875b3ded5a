import io
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from app.core.config import settings
from app.core.models import ConvertedImage
from app.exceptions.image import InvalidImageException, ImageConversionFailedException
from .exceptions import ImageDecodeError, ImageEncodeError

logger = logging.getLogger(__name__)

# Output format -> Pillow encoder name
PILLOW_FORMATS: Dict[str, str] = {
    "png": "PNG",
    "jpeg": "JPEG",
    "webp": "WEBP",
    "ico": "ICO",
}


class ImageConversionService:
    """
    Converts an uploaded image into each configured output format.

    Formats are written one after another into the upload directory, named
    after the upload's stem with the format as extension.
    """

    def __init__(
        self,
        upload_dir: Optional[str] = None,
        url_prefix: Optional[str] = None,
        formats: Optional[Sequence[str]] = None,
        jpeg_quality: Optional[int] = None,
        webp_quality: Optional[int] = None,
    ):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.url_prefix = (url_prefix or settings.upload_url_prefix).rstrip("/")
        self.formats = [f.lower() for f in (formats or settings.image_output_formats)]
        self.jpeg_quality = jpeg_quality if jpeg_quality is not None else settings.jpeg_quality
        self.webp_quality = webp_quality if webp_quality is not None else settings.webp_quality

        unknown = [f for f in self.formats if f not in PILLOW_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported output formats: {', '.join(unknown)}")

    def convert(self, filename: Optional[str], data: bytes) -> List[ConvertedImage]:
        """
        Decode an uploaded image and write one copy per output format.

        Args:
            filename: Original client filename, only its stem is used
            data: The uploaded file content

        Returns:
            One ConvertedImage per format, in configured order

        Raises:
            InvalidImageException: If the data is not a decodable image
            ImageConversionFailedException: If any copy cannot be written
        """
        stem = safe_stem(filename)
        logger.info(f"Converting image '{stem}' to {', '.join(self.formats)}")

        try:
            image = decode_image(data)
        except ImageDecodeError as e:
            logger.warning(f"Rejected upload '{filename}': {e.message}")
            raise InvalidImageException(e.message) from e

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create upload directory {self.upload_dir}: {e}")
            raise ImageConversionFailedException(filename=stem, reason=str(e)) from e

        converted = []
        for image_format in self.formats:
            try:
                converted.append(self._write(image, stem, image_format))
            except ImageEncodeError as e:
                logger.error(f"Conversion of '{stem}' failed: {e.message}")
                raise ImageConversionFailedException(filename=stem, reason=e.message) from e

        logger.info(f"Image '{stem}' converted into {len(converted)} formats")
        return converted

    def _write(self, image: Image.Image, stem: str, image_format: str) -> ConvertedImage:
        name = f"{stem}.{image_format}"
        output_path = self.upload_dir / name

        params = {}
        if image_format == "jpeg":
            params["quality"] = self.jpeg_quality
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
        elif image_format == "webp":
            params["quality"] = self.webp_quality
        if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
            image = image.convert("RGBA")

        try:
            image.save(output_path, format=PILLOW_FORMATS[image_format], **params)
            size = os.path.getsize(output_path)
        except (OSError, ValueError, KeyError) as e:
            raise ImageEncodeError(image_format, str(e)) from e

        return ConvertedImage(url=f"{self.url_prefix}/{name}", size=size)


def decode_image(data: bytes) -> Image.Image:
    if not data:
        raise ImageDecodeError("Failed to read image")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError("Invalid image format") from e
    return image


def safe_stem(filename: Optional[str]) -> str:
    """Basename of the upload without its extension, never empty"""
    base = os.path.basename((filename or "").replace("\\", "/"))
    stem = os.path.splitext(base)[0].strip()
    if not stem or stem in (".", ".."):
        return "image"
    return stem
