from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from app.controllers.download_controller import DownloadController
from app.core.config import Settings
from app.dependencies.service_deps import get_metadata_service, get_settings
from app.services.metadata_service import VideoMetadataService

router = APIRouter()


@router.get("/download")
async def download(
    request: Request,
    url: Optional[str] = Query(None, description="URL of the video to resolve"),
    service: VideoMetadataService = Depends(get_metadata_service),
    settings: Settings = Depends(get_settings),
):
    """Resolve playable stream links and basic metadata for a video URL"""
    return await DownloadController.get_video_metadata(
        service,
        url,
        request=request,
        cancel_on_disconnect=settings.resolver_cancel_on_disconnect,
    )
