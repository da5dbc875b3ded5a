from fastapi import Request

from app.core.config import Settings
from app.services.container import ServiceContainer
from app.services.metadata_service import VideoMetadataService
from app.services.image_service import ImageConversionService


def get_container(request: Request) -> ServiceContainer:
    """Dependency: the container created for this application"""
    return request.app.state.container


def get_settings(request: Request) -> Settings:
    return request.app.state.container.settings


def get_metadata_service(request: Request) -> VideoMetadataService:
    return get_container(request).get_metadata_service()


def get_image_service(request: Request) -> ImageConversionService:
    return get_container(request).get_image_service()
