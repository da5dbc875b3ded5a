from typing import Dict, Any, List, Tuple
from dataclasses import dataclass, field

DEFAULT_TITLE = "Unknown Title"
DEFAULT_THUMBNAIL = "No Thumbnail"
DEFAULT_DURATION = 0
DEFAULT_CATEGORY = "Uncategorized"


@dataclass(frozen=True)
class VideoLink:
    """A single playable stream returned by the resolver"""
    stream_url: str
    quality_label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"link": self.stream_url, "quality": self.quality_label}


@dataclass(frozen=True)
class VideoMetadata:
    """
    Normalized metadata for a video resource.

    Every field always carries a value; anything missing from the resolver
    output is replaced by one of the DEFAULT_* sentinels. Instances are frozen
    so a cached value can be shared by any number of concurrent readers.
    """
    title: str = DEFAULT_TITLE
    thumbnail: str = DEFAULT_THUMBNAIL
    duration_seconds: int = DEFAULT_DURATION
    category: str = DEFAULT_CATEGORY
    links: Tuple[VideoLink, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the metadata to its JSON wire representation"""
        return {
            "title": self.title,
            "thumbnail": self.thumbnail,
            "duration": self.duration_seconds,
            "category": self.category,
            "links": [link.to_dict() for link in self.links],
        }


@dataclass(frozen=True)
class ConvertedImage:
    """One converted copy of an uploaded image"""
    url: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "size": self.size}


def conversion_response(images: List[ConvertedImage]) -> Dict[str, Any]:
    return {
        "message": "Image uploaded and converted",
        "images": [image.to_dict() for image in images],
    }
