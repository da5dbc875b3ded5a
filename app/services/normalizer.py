"""
Normalization of raw resolver output into VideoMetadata.

The resolver prints a loosely typed JSON object. Each field of the result is
projected out of the decoded tree independently: a missing field or one with
an unexpected type falls back to its sentinel without affecting the others.
Only a document that is not valid JSON at all is an error.
"""
import json
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from app.core.models import (
    DEFAULT_CATEGORY,
    DEFAULT_DURATION,
    DEFAULT_THUMBNAIL,
    DEFAULT_TITLE,
    VideoLink,
    VideoMetadata,
)
from .exceptions import MalformedMetadata

logger = logging.getLogger(__name__)


def parse_metadata(raw: Union[bytes, str]) -> Any:
    """
    Decode raw resolver output into a JSON tree.

    Raises:
        MalformedMetadata: If the output is not valid JSON
    """
    try:
        return json.loads(raw)
    except (ValueError, TypeError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedMetadata(f"Resolver output is not valid JSON: {e}") from e


def _string_field(tree: Dict[str, Any], key: str, default: str) -> str:
    value = tree.get(key)
    return value if isinstance(value, str) else default


def _duration_field(tree: Dict[str, Any]) -> int:
    value = tree.get("duration")
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_DURATION
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_DURATION
    return max(int(value), 0)


def _category_field(tree: Dict[str, Any]) -> str:
    categories = tree.get("categories")
    if isinstance(categories, list) and categories and isinstance(categories[0], str):
        return categories[0]
    return DEFAULT_CATEGORY


def _links_field(tree: Dict[str, Any]) -> List[VideoLink]:
    formats = tree.get("formats")
    if not isinstance(formats, list):
        return []

    links = []
    for entry in formats:
        if not isinstance(entry, dict):
            continue
        url = entry.get("url")
        label = entry.get("format")
        if isinstance(url, str) and isinstance(label, str):
            links.append(VideoLink(stream_url=url, quality_label=label))
    return links


def normalize_metadata(tree: Any) -> VideoMetadata:
    """
    Map a decoded resolver document to VideoMetadata.

    Total over any JSON value: a document that is not an object is treated as
    an empty one, so every field takes its default.
    """
    if not isinstance(tree, dict):
        tree = {}

    return VideoMetadata(
        title=_string_field(tree, "title", DEFAULT_TITLE),
        thumbnail=_string_field(tree, "thumbnail", DEFAULT_THUMBNAIL),
        duration_seconds=_duration_field(tree),
        category=_category_field(tree),
        links=tuple(_links_field(tree)),
    )


class MetadataNormalizerInterface(ABC):
    """Interface for turning raw resolver output into VideoMetadata"""

    @abstractmethod
    def normalize(self, raw: Union[bytes, str]) -> VideoMetadata:
        pass


class MetadataNormalizer(MetadataNormalizerInterface):
    """Parses resolver output and normalizes it"""

    def normalize(self, raw: Union[bytes, str]) -> VideoMetadata:
        tree = parse_metadata(raw)
        if not isinstance(tree, dict):
            logger.warning(f"Resolver output is a JSON {type(tree).__name__}, not an object; using defaults")
        metadata = normalize_metadata(tree)
        logger.debug(f"Normalized metadata '{metadata.title}' with {len(metadata.links)} links")
        return metadata
