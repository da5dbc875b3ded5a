from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.controllers.convert_controller import ConvertController
from app.dependencies.service_deps import get_image_service
from app.services.image_service import ImageConversionService

router = APIRouter()


@router.post("/convert")
async def convert(
    image: Optional[UploadFile] = File(None),
    service: ImageConversionService = Depends(get_image_service),
):
    """Convert an uploaded image into every configured output format"""
    return await ConvertController.convert_image(service, image)
