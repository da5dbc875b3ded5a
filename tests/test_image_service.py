import io
import os

import pytest
from PIL import Image

from app.exceptions.image import InvalidImageException, ImageConversionFailedException
from app.services.image_service import ImageConversionService, safe_stem


class TestImageConversionService:
    """Unit tests for ImageConversionService"""

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.upload_dir = tmp_path / "uploads"
        self.service = ImageConversionService(
            upload_dir=str(self.upload_dir),
            url_prefix="/uploads",
            formats=["png", "jpeg", "webp", "ico"],
        )

    def test_converts_to_every_format(self, png_bytes):
        # Act
        images = self.service.convert("holiday.photo.png", png_bytes)

        # Assert
        assert [image.url for image in images] == [
            "/uploads/holiday.photo.png",
            "/uploads/holiday.photo.jpeg",
            "/uploads/holiday.photo.webp",
            "/uploads/holiday.photo.ico",
        ]
        for image in images:
            path = self.upload_dir / image.url.rsplit("/", 1)[-1]
            assert path.exists()
            assert image.size == os.path.getsize(path) > 0

    def test_outputs_decode_in_their_format(self, png_bytes):
        self.service.convert("cat.png", png_bytes)

        for ext, pillow_format in [("png", "PNG"), ("jpeg", "JPEG"), ("webp", "WEBP"), ("ico", "ICO")]:
            with Image.open(self.upload_dir / f"cat.{ext}") as image:
                assert image.format == pillow_format

    def test_jpeg_drops_alpha(self, png_bytes):
        self.service.convert("alpha.png", png_bytes)

        with Image.open(self.upload_dir / "alpha.jpeg") as image:
            assert image.mode == "RGB"

    def test_cmyk_source_is_converted(self):
        buffer = io.BytesIO()
        Image.new("CMYK", (16, 16), (0, 128, 128, 0)).save(buffer, format="JPEG")

        images = self.service.convert("print.jpg", buffer.getvalue())

        assert len(images) == 4

    @pytest.mark.parametrize("data", [b"", b"definitely not an image"])
    def test_invalid_image_rejected(self, data):
        with pytest.raises(InvalidImageException) as exc_info:
            self.service.convert("broken.png", data)

        assert exc_info.value.status_code == 400
        assert not self.upload_dir.exists() or list(self.upload_dir.iterdir()) == []

    def test_write_failure_reported(self, png_bytes, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where a directory should be")
        service = ImageConversionService(upload_dir=str(blocker / "uploads"), formats=["png"])

        with pytest.raises(ImageConversionFailedException):
            service.convert("cat.png", png_bytes)

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            ImageConversionService(formats=["png", "bmp2"])


@pytest.mark.parametrize("filename, expected", [
    ("cat.png", "cat"),
    ("archive.tar.gz", "archive.tar"),
    ("../../etc/passwd", "passwd"),
    ("C:\\Users\\me\\pic.jpg", "pic"),
    ("", "image"),
    (None, "image"),
    ("..", "image"),
])
def test_safe_stem(filename, expected):
    assert safe_stem(filename) == expected
