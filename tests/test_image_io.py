import cv2
import numpy as np
import pytest

from errors import ImageDecodeError, ImageEncodeError, SpheremapError
from image_io import decode, encode_bmp, to_rgba
from texture import pack_color, pack_rgba


def test_decode_missing_file(tmp_path):
    path = str(tmp_path / "nope.png")
    with pytest.raises(ImageDecodeError, match="no such file") as info:
        decode(path)
    assert info.value.path == path
    assert isinstance(info.value, SpheremapError)


def test_decode_garbage_file(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"this is not a png")
    with pytest.raises(ImageDecodeError, match="not a readable image"):
        decode(str(path))


def test_decode_bgr_png_as_rgba(tmp_path):
    path = str(tmp_path / "color.png")
    bgr = np.zeros((3, 2, 3), dtype=np.uint8)
    bgr[:] = (10, 20, 30)  # B, G, R
    assert cv2.imwrite(path, bgr)

    rgba = decode(path)
    assert rgba.shape == (3, 2, 4)
    assert rgba.dtype == np.uint8
    assert tuple(rgba[0, 0]) == (30, 20, 10, 255)


def test_decode_keeps_alpha(tmp_path):
    path = str(tmp_path / "alpha.png")
    bgra = np.zeros((2, 2, 4), dtype=np.uint8)
    bgra[:] = (1, 2, 3, 128)
    assert cv2.imwrite(path, bgra)
    assert tuple(decode(path)[1, 1]) == (3, 2, 1, 128)


def test_to_rgba_gray_and_16_bit():
    gray = np.full((2, 2), 77, dtype=np.uint8)
    assert tuple(to_rgba(gray)[0, 0]) == (77, 77, 77, 255)

    deep = np.full((1, 1, 3), 0xAB00, dtype=np.uint16)
    assert tuple(to_rgba(deep)[0, 0]) == (0xAB, 0xAB, 0xAB, 255)


def test_to_rgba_rejects_float_images():
    with pytest.raises(ImageDecodeError, match="unsupported pixel depth"):
        to_rgba(np.zeros((2, 2, 3), dtype=np.float32))


def test_to_rgba_rejects_odd_channel_counts():
    with pytest.raises(ImageDecodeError, match="unsupported image shape"):
        to_rgba(np.zeros((2, 2, 2), dtype=np.uint8))


def test_encode_bmp_writes_readable_image(tmp_path):
    path = str(tmp_path / "out.bmp")
    rgba = np.zeros((2, 3, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    rgba[0, 0, :3] = (200, 100, 50)
    rgba[1, 2, :3] = (1, 2, 3)

    encode_bmp(path, 3, 2, pack_rgba(rgba).reshape(-1))

    with open(path, "rb") as f:
        assert f.read(2) == b"BM"
    back = decode(path)
    assert back.shape == (2, 3, 4)
    np.testing.assert_array_equal(back[..., :3], rgba[..., :3])


def test_encode_bmp_checks_buffer_size(tmp_path):
    with pytest.raises(ImageEncodeError, match="expected 4"):
        encode_bmp(str(tmp_path / "out.bmp"), 2, 2, np.zeros(3, dtype=np.uint32))


def test_encode_bmp_reports_unwritable_path(tmp_path):
    path = str(tmp_path / "missing_dir" / "out.bmp")
    with pytest.raises(ImageEncodeError):
        encode_bmp(path, 1, 1, np.array([pack_color(1, 2, 3)], dtype=np.uint32))
