import io

import numpy as np
import pytest
from PIL import Image
from photo_retoucher.io.image_loader import ImageInfo, describe_image, load_image
from photo_retoucher.io.image_saver import encode_jpeg, save_jpeg
from photo_retoucher.utils.errors import FileIOError, InvalidParameterError


@pytest.fixture
def png_path(tmp_path):
    """A 40x30 RGB PNG on disk."""
    arr = np.zeros((30, 40, 3), dtype=np.uint8)
    arr[..., 0] = 180
    arr[..., 1] = 120
    path = tmp_path / "photo.png"
    Image.fromarray(arr, "RGB").save(path)
    return path


class TestLoadImage:
    """Tests for image decoding."""

    def test_loads_rgba(self, png_path):
        image = load_image(str(png_path))
        assert image.shape == (30, 40, 4)
        assert image.dtype == np.uint8
        assert np.all(image[..., 3] == 255)
        assert np.all(image[..., 0] == 180)

    def test_accepts_path_objects(self, png_path):
        assert load_image(png_path).shape == (30, 40, 4)

    def test_keeps_existing_alpha(self, tmp_path):
        arr = np.full((5, 5, 4), 90, dtype=np.uint8)
        path = tmp_path / "alpha.png"
        Image.fromarray(arr, "RGBA").save(path)
        assert np.all(load_image(path)[..., 3] == 90)

    def test_applies_exif_orientation(self, tmp_path):
        arr = np.zeros((10, 20, 3), dtype=np.uint8)
        img = Image.fromarray(arr, "RGB")
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90 CW
        path = tmp_path / "rotated.jpg"
        img.save(path, exif=exif.tobytes())
        assert load_image(path).shape[:2] == (20, 10)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileIOError):
            load_image(str(tmp_path / "missing.jpg"))

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(FileIOError) as excinfo:
            load_image(str(path))
        assert excinfo.value.user_message == "Please select an image file"

    def test_invalid_path(self):
        with pytest.raises(FileIOError):
            load_image("")


class TestImageInfo:
    """Tests for the loaded-image summary."""

    def test_describe(self, png_path):
        info = describe_image(str(png_path), load_image(png_path))
        assert (info.width, info.height) == (40, 30)
        assert (info.export_width, info.export_height) == (40, 30)
        assert info.format == "PNG"
        assert info.file_size == png_path.stat().st_size

    def test_size_labels(self):
        assert ImageInfo(1, 1, 1, 1, 2048, "JPEG").file_size_label == "2.0 KB"
        assert ImageInfo(1, 1, 1, 1, 3 * 1024 * 1024, "JPEG").file_size_label == "3.00 MB"


class TestSaveJpeg:
    """Tests for JPEG export."""

    def test_encode_drops_alpha(self, noisy_rgba):
        data = encode_jpeg(noisy_rgba)
        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"
            assert img.size == (120, 80)

    def test_quality_affects_size(self, noisy_rgba):
        assert len(encode_jpeg(noisy_rgba, 30)) < len(encode_jpeg(noisy_rgba, 95))

    def test_save_creates_directories(self, tmp_path, noisy_rgba):
        path = tmp_path / "out" / "nested" / "result.jpg"
        size = save_jpeg(noisy_rgba, str(path))
        assert path.is_file()
        assert size == path.stat().st_size

    def test_invalid_quality_type(self, noisy_rgba):
        with pytest.raises(InvalidParameterError):
            encode_jpeg(noisy_rgba, "high")

    def test_empty_image(self):
        with pytest.raises(InvalidParameterError):
            encode_jpeg(np.zeros((0, 0, 4), dtype=np.uint8))

    def test_unwritable_destination(self, tmp_path, noisy_rgba):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(FileIOError):
            save_jpeg(noisy_rgba, str(blocker / "result.jpg"))
