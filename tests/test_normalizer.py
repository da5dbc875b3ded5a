import json

import pytest

from app.core.models import VideoLink, VideoMetadata
from app.services.exceptions import MalformedMetadata
from app.services.normalizer import MetadataNormalizer, normalize_metadata, parse_metadata

DEFAULTS = VideoMetadata(
    title="Unknown Title",
    thumbnail="No Thumbnail",
    duration_seconds=0,
    category="Uncategorized",
    links=(),
)


class TestNormalizeMetadata:
    """Unit tests for the field-by-field normalization"""

    def test_empty_document_uses_every_default(self):
        assert normalize_metadata({}) == DEFAULTS

    def test_non_object_document_uses_every_default(self):
        for tree in ([], "title", 42, None, [{"title": "x"}]):
            assert normalize_metadata(tree) == DEFAULTS

    def test_cat_video_scenario(self):
        # Arrange
        raw = (
            '{"title":"Cat Video","duration":125.7,"categories":["Pets"],'
            '"formats":[{"url":"http://x/1","format":"360p"},{"url":"http://x/2"}]}'
        )

        # Act
        result = normalize_metadata(parse_metadata(raw))

        # Assert
        assert result == VideoMetadata(
            title="Cat Video",
            thumbnail="No Thumbnail",
            duration_seconds=125,
            category="Pets",
            links=(VideoLink(stream_url="http://x/1", quality_label="360p"),),
        )

    @pytest.mark.parametrize("title", [None, 12, ["a"], {"t": 1}, True])
    def test_non_string_title_defaults(self, title):
        assert normalize_metadata({"title": title}).title == "Unknown Title"

    def test_non_string_thumbnail_defaults(self):
        assert normalize_metadata({"thumbnail": 3}).thumbnail == "No Thumbnail"
        assert normalize_metadata({"thumbnail": "http://img/1.jpg"}).thumbnail == "http://img/1.jpg"

    @pytest.mark.parametrize("duration, expected", [
        (125.7, 125),
        (59.999, 59),
        (30, 30),
        (0, 0),
        (-5.5, 0),
        ("125", 0),
        (None, 0),
        (True, 0),
        (float("nan"), 0),
        (float("inf"), 0),
    ])
    def test_duration_truncated_or_defaulted(self, duration, expected):
        assert normalize_metadata({"duration": duration}).duration_seconds == expected

    def test_empty_categories_defaults(self):
        assert normalize_metadata({"categories": []}).category == "Uncategorized"

    @pytest.mark.parametrize("categories", [[1, "Music"], [None], "Music", {"0": "Music"}])
    def test_unusable_categories_default(self, categories):
        assert normalize_metadata({"categories": categories}).category == "Uncategorized"

    def test_first_category_is_used(self):
        assert normalize_metadata({"categories": ["Music", "Pets"]}).category == "Music"

    def test_formats_missing_fields_are_skipped_in_order(self):
        # Arrange
        formats = [
            {"url": "http://x/a", "format": "720p"},
            {"format": "480p"},
            {"url": "http://x/b"},
            "not an object",
            {"url": 7, "format": "240p"},
            {"url": "http://x/c", "format": None},
            {"url": "http://x/d", "format": "1080p", "ext": "mp4"},
            {"url": "http://x/a", "format": "720p"},
        ]

        # Act
        links = normalize_metadata({"formats": formats}).links

        # Assert - original order kept, duplicates kept
        assert [(l.stream_url, l.quality_label) for l in links] == [
            ("http://x/a", "720p"),
            ("http://x/d", "1080p"),
            ("http://x/a", "720p"),
        ]

    def test_non_list_formats_yield_no_links(self):
        assert normalize_metadata({"formats": {"url": "http://x/1", "format": "360p"}}).links == ()

    def test_one_bad_field_does_not_affect_others(self):
        result = normalize_metadata({
            "title": 1,
            "thumbnail": "http://img",
            "duration": "long",
            "categories": ["News"],
            "formats": None,
        })

        assert result == VideoMetadata(
            title="Unknown Title",
            thumbnail="http://img",
            duration_seconds=0,
            category="News",
            links=(),
        )


class TestParseMetadata:

    def test_accepts_bytes(self):
        assert parse_metadata(b'{"title": "x"}') == {"title": "x"}

    @pytest.mark.parametrize("raw", [b"", b"not json", b'{"title": ', b"\xff\xfe\xfa"])
    def test_invalid_json_raises(self, raw):
        with pytest.raises(MalformedMetadata):
            parse_metadata(raw)


class TestMetadataNormalizer:

    def setup_method(self):
        self.normalizer = MetadataNormalizer()

    def test_normalize_raw_output(self):
        raw = json.dumps({"title": "Clip", "thumbnail": "http://t", "duration": 10}).encode()

        result = self.normalizer.normalize(raw)

        assert result.title == "Clip"
        assert result.thumbnail == "http://t"
        assert result.duration_seconds == 10
        assert result.links == ()

    def test_malformed_output_propagates(self):
        with pytest.raises(MalformedMetadata):
            self.normalizer.normalize(b"<html>error page</html>")

    def test_wire_form(self):
        result = self.normalizer.normalize(
            b'{"title":"Cat Video","formats":[{"url":"http://x/1","format":"360p"}]}'
        )

        assert result.to_dict() == {
            "title": "Cat Video",
            "thumbnail": "No Thumbnail",
            "duration": 0,
            "category": "Uncategorized",
            "links": [{"link": "http://x/1", "quality": "360p"}],
        }
