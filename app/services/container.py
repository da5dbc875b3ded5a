from typing import Dict, Optional, Type, TypeVar
from app.core.config import Settings, settings as default_settings
from .resolver import YtDlpResolver, ResolverInterface
from .normalizer import MetadataNormalizer, MetadataNormalizerInterface
from .cache_service import MetadataCache, CacheInterface
from .metadata_service import VideoMetadataService
from .image_service import ImageConversionService

T = TypeVar('T')


class ServiceContainer:
    """
    Container for managing service dependencies with dependency injection.

    The container owns the metadata cache, so each container (one per
    application) has its own cache rather than sharing a module global.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        overrides: Optional[Dict[Type, object]] = None
    ):
        self.settings = settings or default_settings
        self._services: Dict[Type, object] = dict(overrides or {})

        # Register services in dependency order
        self._register_services()

    def _register(self, interface: Type, factory) -> None:
        if interface not in self._services:
            self._services[interface] = factory()

    def _register_services(self) -> None:
        """Register all services with proper dependency injection"""
        s = self.settings

        self._register(ResolverInterface, lambda: YtDlpResolver(
            command=s.resolver_command,
            timeout=s.resolver_timeout
        ))
        self._register(MetadataNormalizerInterface, MetadataNormalizer)
        self._register(CacheInterface, MetadataCache)

        # Main service that depends on others
        self._register(VideoMetadataService, lambda: VideoMetadataService(
            self._services[ResolverInterface],
            self._services[MetadataNormalizerInterface],
            self._services[CacheInterface]
        ))

        self._register(ImageConversionService, lambda: ImageConversionService(
            upload_dir=s.upload_dir,
            url_prefix=s.upload_url_prefix,
            formats=s.image_output_formats,
            jpeg_quality=s.jpeg_quality,
            webp_quality=s.webp_quality
        ))

    def get_metadata_service(self) -> VideoMetadataService:
        """Get the video metadata service instance"""
        return self._services[VideoMetadataService]  # type: ignore

    def get_image_service(self) -> ImageConversionService:
        """Get the image conversion service instance"""
        return self._services[ImageConversionService]  # type: ignore

    def get_service(self, interface: Type[T]) -> T:
        """Generic method to retrieve a service by its interface"""
        service = self._services.get(interface)
        if service is None:
            raise ValueError(f"Service for interface {interface.__name__} not found")
        return service  # type: ignore
