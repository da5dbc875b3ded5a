import logging
from threading import Event
from typing import Optional
from .resolver import ResolverInterface
from .normalizer import MetadataNormalizerInterface
from .cache_service import CacheInterface
from .exceptions import ResolutionFailed, MalformedMetadata
from app.core.models import VideoMetadata
from app.exceptions.base import InvalidRequestException
from app.exceptions.video import ResolutionFailedException, MalformedMetadataException

logger = logging.getLogger(__name__)


class VideoMetadataService:
    """
    Coordinates one metadata request: cache lookup, then on a miss resolve,
    normalize and populate the cache.

    Concurrent misses for the same URL are not coalesced; each one runs the
    resolver and the last store wins.
    """

    def __init__(
        self,
        resolver: ResolverInterface,
        normalizer: MetadataNormalizerInterface,
        cache: CacheInterface
    ):
        self.resolver = resolver
        self.normalizer = normalizer
        self.cache = cache

    def get_metadata(self, url: Optional[str], cancel_event: Optional[Event] = None) -> VideoMetadata:
        """
        Get normalized metadata for a video URL, from the cache when possible.

        Blocks while the resolver runs, so callers in async code should run it
        on a worker thread.

        Args:
            url: The source URL of the video
            cancel_event: Forwarded to the resolver to stop an in-flight run

        Returns:
            The VideoMetadata for the URL

        Raises:
            InvalidRequestException: If the URL is missing or empty
            ResolutionFailedException: If the resolver failed
            MalformedMetadataException: If the resolver output was not JSON
        """
        if not url:
            logger.warning("Empty URL parameter provided")
            raise InvalidRequestException("Missing video URL")

        cached, found = self.cache.lookup(url)
        if found:
            logger.info(f"Metadata retrieved from cache for URL: {url}")
            return cached

        logger.info(f"Metadata not in cache, resolving URL: {url}")
        try:
            raw = self.resolver.resolve(url, cancel_event=cancel_event)
            metadata = self.normalizer.normalize(raw)
        except ResolutionFailed as e:
            logger.error(f"Resolution failed for URL {url}: {e.message}")
            raise ResolutionFailedException(url=url, reason=e.diagnostic) from e
        except MalformedMetadata as e:
            logger.error(f"Malformed resolver output for URL {url}: {e.message}")
            raise MalformedMetadataException(url=url, reason=e.message) from e

        self.cache.store(url, metadata)
        logger.info(f"Metadata resolved and cached for URL: {url}")
        return metadata
