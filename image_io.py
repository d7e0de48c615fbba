# image_io.py

# Thin wrapper around OpenCV. The rest of the tool only ever sees RGBA uint8
# arrays and packed texel buffers, never OpenCV's BGR channel order.

import os

import cv2
import numpy as np
from numpy.typing import NDArray

from errors import ImageDecodeError, ImageEncodeError
from texture import PACKED_DTYPE, unpack_rgba

def to_rgba(image: np.ndarray, path: str = "<memory>") -> NDArray[np.uint8]:
    """Convert whatever cv2.imread handed back into (H, W, 4) RGBA uint8."""
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise ImageDecodeError(path, f"unsupported pixel depth {image.dtype}")

    if image.ndim == 3 and image.shape[2] == 1:
        image = image[..., 0]

    if image.ndim == 2:
        rgba = cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    elif image.ndim == 3 and image.shape[2] == 3:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    elif image.ndim == 3 and image.shape[2] == 4:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    else:
        raise ImageDecodeError(path, f"unsupported image shape {image.shape}")
    return np.ascontiguousarray(rgba)

def decode(path: str) -> NDArray[np.uint8]:
    """Read an image file as (H, W, 4) RGBA uint8."""
    if not os.path.isfile(path):
        raise ImageDecodeError(path, "no such file")
    image = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageDecodeError(path, "not a readable image")
    return to_rgba(image, path)

def encode_bmp(path: str, width: int, height: int, packed: np.ndarray) -> None:
    """Write `width` x `height` packed RGBA texels (row major) as a 32-bit BMP."""
    pixels = np.asarray(packed, dtype=PACKED_DTYPE)
    if pixels.size != width * height:
        raise ImageEncodeError(path, f"buffer holds {pixels.size} texels, expected {width * height}")

    bgra = cv2.cvtColor(unpack_rgba(pixels.reshape(height, width)), cv2.COLOR_RGBA2BGRA)
    try:
        written = cv2.imwrite(path, bgra)
    except cv2.error as e:
        raise ImageEncodeError(path, str(e)) from e
    if not written:
        raise ImageEncodeError(path)
