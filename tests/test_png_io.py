import pytest
from PIL import Image

from carbonk.png_io import OriginLocation, load_png, save_png

PIXELS = [
    (255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255),
    (10, 20, 30, 40), (50, 60, 70, 80), (90, 100, 110, 120),
]


@pytest.mark.parametrize("origin", list(OriginLocation))
def test_round_trip(tmp_path, origin):
    path = tmp_path / "img.png"
    save_png(path, (3, 2), PIXELS, origin)
    size, data = load_png(path, origin)
    assert size == (3, 2)
    assert data == PIXELS


def test_origin_flips_rows(tmp_path):
    path = tmp_path / "img.png"
    save_png(path, (3, 2), PIXELS, OriginLocation.UPPER_LEFT)
    _, data = load_png(path, OriginLocation.LOWER_LEFT)
    assert data == PIXELS[3:] + PIXELS[:3]


def test_upper_left_matches_file_top_row(tmp_path):
    path = tmp_path / "img.png"
    save_png(path, (3, 2), PIXELS, OriginLocation.UPPER_LEFT)
    with Image.open(path) as image:
        assert image.getpixel((0, 0)) == PIXELS[0]


def test_grayscale_is_expanded_to_rgba(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (2, 2), 77).save(path)
    size, data = load_png(path, OriginLocation.UPPER_LEFT)
    assert size == (2, 2)
    assert all(p == (77, 77, 77, 255) for p in data)


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError, match="Failed to open"):
        load_png(tmp_path / "missing.png", OriginLocation.UPPER_LEFT)


def test_garbage_file_raises(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not an image")
    with pytest.raises(ValueError, match="Failed to read"):
        load_png(path, OriginLocation.UPPER_LEFT)


def test_wrong_pixel_count_raises(tmp_path):
    with pytest.raises(ValueError):
        save_png(tmp_path / "x.png", (3, 3), PIXELS, OriginLocation.UPPER_LEFT)