# spheremap.py

# Reverse mapping from the output spheremap image to cubemap directions.
# Each output pixel (s, t) in the unit square is turned into a direction by
# inverting the parabolic sphere map parameterization:
#
#   q     = s - s^2 + t - t^2
#   rev_p = 16q - 4
#   dir   = (sqrt(rev_p)(2s - 1), -sqrt(rev_p)(2t - 1), 8q - 3)
#
# Pixels outside the inscribed disk (rev_p < 0) all point straight back
# (0, 0, -1), which fills the corners with the -Z face instead of leaving
# them empty.

import math

import numpy as np
from numpy.typing import NDArray

from cubemap import Cubemap
from profiler import Profiler
from texture import PACKED_DTYPE

BACK_POLE = (0.0, 0.0, -1.0)

def unlerp(val: int, size: int) -> float:
    """Center of pixel `val` in [0, 1]."""
    return (val + 0.5) / size

def parabolic_direction(s: float, t: float) -> tuple[float, float, float]:
    q = s - s * s + t - t * t
    rev_p = 16.0 * q - 4.0
    if rev_p < 0.0:
        return BACK_POLE
    r = math.sqrt(rev_p)
    return (r * (2.0 * s - 1.0), -r * (2.0 * t - 1.0), 8.0 * q - 3.0)

def pixel_direction(x: int, y: int, output_size: int) -> tuple[float, float, float]:
    return parabolic_direction(unlerp(x, output_size), unlerp(y, output_size))

def _check_output_size(output_size: int):
    if isinstance(output_size, bool) or not isinstance(output_size, (int, np.integer)):
        raise ValueError(f"output size must be an integer, got {output_size!r}")
    if output_size <= 0:
        raise ValueError(f"output size must be positive, got {output_size}")

def spheremap_directions(output_size: int) -> NDArray[np.float64]:
    """Directions for every output pixel, shape (output_size, output_size, 3),
    indexed [y, x]."""
    _check_output_size(output_size)
    centers = (np.arange(output_size, dtype=np.float64) + 0.5) / output_size
    s, t = np.meshgrid(centers, centers)  # s varies along x (columns), t along y (rows)

    q = s - s * s + t - t * t
    rev_p = 16.0 * q - 4.0
    inside = rev_p >= 0.0
    r = np.sqrt(np.where(inside, rev_p, 0.0))

    directions = np.empty((output_size, output_size, 3), dtype=np.float64)
    directions[..., 0] = np.where(inside, r * (2.0 * s - 1.0), BACK_POLE[0])
    directions[..., 1] = np.where(inside, -r * (2.0 * t - 1.0), BACK_POLE[1])
    directions[..., 2] = np.where(inside, 8.0 * q - 3.0, BACK_POLE[2])
    return directions

@Profiler.timed("generate")
def generate(cubemap: Cubemap, output_size: int) -> NDArray[np.uint32]:
    """Render the spheremap. Returns output_size * output_size packed texels
    in row-major order (index y * output_size + x)."""
    directions = spheremap_directions(output_size)
    faces, s, t = cubemap.compute_tex_coords_array(directions)
    texels = cubemap.sample_faces(faces, s, t)
    return np.ascontiguousarray(texels, dtype=PACKED_DTYPE).reshape(-1)
