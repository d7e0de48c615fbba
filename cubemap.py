# cubemap.py

from enum import IntEnum
from typing import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from config import global_config
from errors import CubemapLoadError, ImageDecodeError
from image_io import decode
from profiler import Profiler
from texture import Texture, sample

class CubeFace(IntEnum):
    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

NUM_FACES = len(CubeFace)

FACE_LABELS = ("+X", "-X", "+Y", "-Y", "+Z", "-Z")

def face_filename(prefix: str, extension: str, face: CubeFace) -> str:
    return f"{prefix}_{global_config.face_suffixes.val[face]}.{extension}"

class Cubemap:
    """Six face textures plus the math to find which face (and where on it) a
    direction lands.

    Directions follow the usual cubemap convention: the major axis picks the
    face and the two remaining components, divided by the major one, give the
    position on that face."""

    def __init__(self, faces: Sequence[Texture]):
        if len(faces) != NUM_FACES:
            raise ValueError(f"a cubemap needs {NUM_FACES} faces, got {len(faces)}")
        self.faces: tuple[Texture, ...] = tuple(faces)
        """Indexed by CubeFace."""

    @classmethod
    def from_faces(cls, faces: Sequence["Texture | np.ndarray"]) -> "Cubemap":
        """Build from in-memory textures or (H, W, 4) RGBA arrays, in CubeFace order."""
        return cls([f if isinstance(f, Texture) else Texture(f) for f in faces])

    @classmethod
    @Profiler.timed("load_cubemap")
    def load(cls, prefix: str, extension: str,
             decoder: Callable[[str], np.ndarray] = decode) -> "Cubemap":
        """Load `{prefix}_right.{extension}` and the five other faces.
        Stops at the first face that fails so nothing is ever sampled from a
        half loaded cubemap."""
        faces = []
        for face in CubeFace:
            path = face_filename(prefix, extension, face)
            try:
                faces.append(Texture(decoder(path)))
            except ImageDecodeError as e:
                raise CubemapLoadError(FACE_LABELS[face], path, e.reason) from e
            except ValueError as e:
                raise CubemapLoadError(FACE_LABELS[face], path, str(e)) from e
        return cls(faces)

    def read_texel(self, face: CubeFace, x: int, y: int) -> int:
        assert 0 <= face < NUM_FACES, f"invalid face {face}"
        return self.faces[face].read_texel(x, y)

    def compute_tex_coords(self, x: float, y: float, z: float) -> tuple[CubeFace, float, float]:
        v = (x, y, z)
        a = (abs(x), abs(y), abs(z))

        # Ties go to the lower axis
        if a[0] >= a[1] and a[0] >= a[2]:
            major_axis = 0
        elif a[1] >= a[0] and a[1] >= a[2]:
            major_axis = 1
        else:
            major_axis = 2

        m = a[major_axis]
        assert m > 0.0, "direction must be nonzero"

        face = CubeFace(major_axis * 2 + (1 if v[major_axis] < 0.0 else 0))
        if face == CubeFace.POS_X:
            raw_s, raw_t = -z, -y
        elif face == CubeFace.NEG_X:
            raw_s, raw_t = z, -y
        elif face == CubeFace.POS_Y:
            raw_s, raw_t = x, z
        elif face == CubeFace.NEG_Y:
            raw_s, raw_t = x, -z
        elif face == CubeFace.POS_Z:
            raw_s, raw_t = x, -y
        else:
            raw_s, raw_t = -x, -y

        return face, 0.5 * (raw_s / m + 1.0), 0.5 * (raw_t / m + 1.0)

    def sample_face(self, face: CubeFace, s: float, t: float) -> int:
        face_img = self.faces[face]

        # Point sampling
        if global_config.symmetric_clamp.val:
            s = min(max(s, 0.0), 1.0)
            t = min(max(t, 0.0), 1.0)
        x = min(int(s * face_img.width), face_img.width - 1)
        y = min(int(t * face_img.height), face_img.height - 1)
        return self.read_texel(face, x, y)

    # ========== Whole-array versions ==========
    # Same rules as above, applied to every direction at once. These are what
    # the generator uses; the scalar ones above are the reference.

    def compute_tex_coords_array(self, directions: np.ndarray) -> tuple[NDArray[np.int64], NDArray[np.float64], NDArray[np.float64]]:
        """`directions` has shape (..., 3). Returns face indices, s and t, each
        shaped like `directions[..., 0]`."""
        d = np.asarray(directions, dtype=np.float64)
        x, y, z = d[..., 0], d[..., 1], d[..., 2]
        ax, ay, az = np.abs(x), np.abs(y), np.abs(z)

        is_x = (ax >= ay) & (ax >= az)
        is_y = ~is_x & (ay >= az)
        major_axis = np.where(is_x, 0, np.where(is_y, 1, 2))
        major_val = np.where(is_x, x, np.where(is_y, y, z))
        m = np.abs(major_val)
        assert np.all(m > 0.0), "direction must be nonzero"

        faces = major_axis * 2 + (major_val < 0.0)
        raw_s = np.select(
            [faces == CubeFace.POS_X, faces == CubeFace.NEG_X, faces == CubeFace.NEG_Z],
            [-z, z, -x],
            default=x,  # both Y faces and +Z
        )
        raw_t = np.select(
            [faces == CubeFace.POS_Y, faces == CubeFace.NEG_Y],
            [z, -z],
            default=-y,  # both X faces and both Z faces
        )
        return faces.astype(np.int64), 0.5 * (raw_s / m + 1.0), 0.5 * (raw_t / m + 1.0)

    def sample_faces(self, faces: np.ndarray, s: np.ndarray, t: np.ndarray) -> NDArray[np.uint32]:
        """Packed texels for each (face, s, t), shaped like `faces`."""
        faces = np.asarray(faces)
        assert np.all((faces >= 0) & (faces < NUM_FACES)), "invalid face index"
        out = np.zeros(faces.shape, dtype=self.faces[0].packed.dtype)
        uv = np.stack((np.asarray(s, dtype=np.float64), np.asarray(t, dtype=np.float64)), axis=-1)
        for face in CubeFace:
            mask = faces == face
            if np.any(mask):
                out[mask] = sample(self.faces[face], uv[mask], global_config.symmetric_clamp.val)
        return out

    def __repr__(self) -> str:
        sizes = ", ".join(f"{FACE_LABELS[f]}={self.faces[f].width}x{self.faces[f].height}" for f in CubeFace)
        return f"Cubemap({sizes})"
