from typing import Any, Dict, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.models import conversion_response
from app.exceptions.image import InvalidImageException
from app.services.image_service import ImageConversionService
from app.config.logging_config import get_logger

logger = get_logger(__name__)


class ConvertController:

    @staticmethod
    async def convert_image(service: ImageConversionService, upload: Optional[UploadFile]) -> Dict[str, Any]:
        if upload is None:
            raise InvalidImageException("Failed to read image")

        logger.info(f"Received image for conversion: {upload.filename}")
        data = await upload.read()
        images = await run_in_threadpool(service.convert, upload.filename, data)
        return conversion_response(images)
