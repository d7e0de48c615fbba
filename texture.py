# texture.py

import numpy as np
from numpy.typing import NDArray

PACKED_DTYPE = np.dtype('<u4')
"""One texel as a 32-bit value. Little endian so that the bytes in memory are
R, G, B, A (R in the lowest byte), same as the decoded RGBA buffer."""

def pack_color(r: int, g: int, b: int, a: int = 255) -> int:
    return (r & 0xFF) | ((g & 0xFF) << 8) | ((b & 0xFF) << 16) | ((a & 0xFF) << 24)

def unpack_color(packed: int) -> tuple[int, int, int, int]:
    return (packed & 0xFF, (packed >> 8) & 0xFF, (packed >> 16) & 0xFF, (packed >> 24) & 0xFF)

def pack_rgba(rgba: NDArray[np.uint8]) -> NDArray[np.uint32]:
    """(H, W, 4) uint8 -> (H, W) packed texels. Shares memory when it can."""
    rgba = np.ascontiguousarray(rgba, dtype=np.uint8)
    return rgba.view(PACKED_DTYPE)[..., 0]

def unpack_rgba(packed: NDArray[np.uint32]) -> NDArray[np.uint8]:
    """(H, W) packed texels -> (H, W, 4) uint8."""
    packed = np.ascontiguousarray(packed, dtype=PACKED_DTYPE)
    return packed.reshape(packed.shape + (1,)).view(np.uint8)

def sample(texture: "Texture", uv: np.ndarray, symmetric_clamp: bool = True) -> NDArray[np.uint32]:
    """Nearest neighbour lookup of packed texels.
    `uv` has shape (..., 2) holding (s, t) in [0, 1]. Coordinates are
    truncated toward zero and clamped to the last texel. With
    `symmetric_clamp` off, only the upper bound is clamped and a negative
    index is a contract violation."""
    u = uv[..., 0]
    v = uv[..., 1]
    if symmetric_clamp:
        u = np.clip(u, 0.0, 1.0)
        v = np.clip(v, 0.0, 1.0)
    tex_x = np.minimum((u * texture.width).astype(np.int64), texture.width - 1)
    tex_y = np.minimum((v * texture.height).astype(np.int64), texture.height - 1)
    assert np.all(tex_x >= 0) and np.all(tex_y >= 0), "negative texel coordinate"
    return texture.packed[tex_y, tex_x]

class Texture:
    def __init__(self, image: np.ndarray):
        if image.ndim != 3 or image.shape[2] != 4:
            raise ValueError(f"expected an (H, W, 4) RGBA image, got shape {image.shape}")
        if image.shape[0] == 0 or image.shape[1] == 0:
            raise ValueError("texture has no texels")
        self.image: NDArray[np.uint8]  # shape: (height, width, 4)
        self.image = np.array(image, dtype=np.uint8, order='C')  # own copy
        self.image.flags.writeable = False
        self.packed: NDArray[np.uint32] = pack_rgba(self.image)
        """Same memory as `image`, one 32-bit value per texel. shape: (height, width)"""
        self.width: int = self.image.shape[1]
        self.height: int = self.image.shape[0]

    @classmethod
    def solid(cls, width: int, height: int, color: tuple[int, int, int, int]) -> "Texture":
        image = np.empty((height, width, 4), dtype=np.uint8)
        image[:] = color
        return cls(image)

    def read_texel(self, x: int, y: int) -> int:
        assert 0 <= x < self.width, f"x={x} outside [0, {self.width})"
        assert 0 <= y < self.height, f"y={y} outside [0, {self.height})"
        return int(self.packed[y, x])

    def __repr__(self) -> str:
        return f"Texture({self.width}x{self.height})"
