from fastapi import APIRouter, Depends
from yt_dlp.version import __version__ as yt_dlp_version

from app.dependencies.service_deps import get_container
from app.services.cache_service import CacheInterface
from app.services.container import ServiceContainer

router = APIRouter()


@router.get("/")
def health(container: ServiceContainer = Depends(get_container)):
    return {
        "message": "Media Toolkit Server is running!",
        "resolver": f"yt-dlp {yt_dlp_version}",
        "cached_entries": len(container.get_service(CacheInterface)),
    }
