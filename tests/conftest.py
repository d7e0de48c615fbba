import numpy as np
import pytest

from config import global_config
from cubemap import Cubemap, CubeFace
from profiler import Profiler
from texture import Texture, pack_color

# One flat color per face, in CubeFace order
FACE_COLORS = {
    CubeFace.POS_X: (255, 0, 0, 255),
    CubeFace.NEG_X: (0, 255, 0, 255),
    CubeFace.POS_Y: (0, 0, 255, 255),
    CubeFace.NEG_Y: (255, 255, 0, 255),
    CubeFace.POS_Z: (0, 255, 255, 255),
    CubeFace.NEG_Z: (255, 0, 255, 255),
}


def indexed_face(face: int, width: int, height: int) -> np.ndarray:
    """RGBA image where every texel is unique: R=x, G=y, B=face."""
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[..., 0] = np.arange(width, dtype=np.uint8)[np.newaxis, :]
    image[..., 1] = np.arange(height, dtype=np.uint8)[:, np.newaxis]
    image[..., 2] = face
    image[..., 3] = 255
    return image


def indexed_texel(face: int, x: int, y: int) -> int:
    return pack_color(x, y, face, 255)


@pytest.fixture(autouse=True)
def fresh_state():
    """Every test starts from default config and an empty profiler."""
    global_config.reset_defaults()
    Profiler.reset()
    yield
    global_config.reset_defaults()
    Profiler.reset()


@pytest.fixture
def solid_cubemap():
    """Six 2x2 faces, one flat color each."""
    return Cubemap([Texture.solid(2, 2, FACE_COLORS[face]) for face in CubeFace])


@pytest.fixture
def indexed_cubemap():
    """Six faces of different sizes where every texel can be told apart."""
    sizes = [(4, 4), (4, 4), (8, 8), (8, 8), (16, 16), (5, 3)]
    return Cubemap.from_faces([indexed_face(face, w, h) for face, (w, h) in zip(CubeFace, sizes)])
