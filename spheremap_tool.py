#!/usr/bin/python
# spheremap_tool.py

# Turns six cube face images into a single spheremap bitmap.
#
#   spheremap-tool <filename_prefix> <extension> <output_size>
#
# reads <prefix>_right.<ext>, _left, _top, _bottom, _front and _back and
# writes <prefix>_spheremap.bmp (output_size x output_size, 32-bit).
#
# The run is split into three stages (load -> generate -> write) so each one
# can be driven on its own with in-memory images.

import sys
from typing import Callable, Optional, Sequence

import numpy as np

from config import global_config
from cubemap import FACE_LABELS, Cubemap, CubeFace
from errors import SpheremapError
from image_io import decode, encode_bmp
from profiler import Profiler
from spheremap import generate

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2

USAGE = "usage: spheremap-tool <filename_prefix> <extension> <output_size>"

Decoder = Callable[[str], np.ndarray]
Encoder = Callable[[str, int, int, np.ndarray], None]

def output_filename(prefix: str) -> str:
    return f"{prefix}{global_config.output_suffix.val}.{global_config.output_extension.val}"

def parse_output_size(text: str) -> int:
    size = int(text)  # ValueError on junk
    if size <= 0:
        raise ValueError(f"output size must be positive, got {size}")
    return size

# ========== Stages ==========

def load_stage(prefix: str, extension: str, decoder: Decoder = decode) -> Cubemap:
    return Cubemap.load(prefix, extension, decoder=decoder)

def generate_stage(cubemap: Cubemap, output_size: int) -> np.ndarray:
    return generate(cubemap, output_size)

@Profiler.timed("write_spheremap")
def write_stage(path: str, output_size: int, buffer: np.ndarray, encoder: Encoder = encode_bmp) -> None:
    encoder(path, output_size, output_size, buffer)

def run(prefix: str, extension: str, output_size: int,
        decoder: Decoder = decode, encoder: Encoder = encode_bmp) -> str:
    """Full pipeline. Returns the path of the written spheremap."""
    cubemap = load_stage(prefix, extension, decoder)
    print("Loaded cubemap: " + ", ".join(
        f"{FACE_LABELS[f]} {cubemap.faces[f].width}x{cubemap.faces[f].height}" for f in CubeFace),
        file=sys.stderr)

    buffer = generate_stage(cubemap, output_size)
    del cubemap  # faces are not needed past this point

    path = output_filename(prefix)
    write_stage(path, output_size, buffer, encoder)
    print(f"Wrote {output_size}x{output_size} spheremap to {path}", file=sys.stderr)
    return path

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    prefix, extension, size_text = args
    try:
        output_size = parse_output_size(size_text)
    except ValueError:
        print(f"invalid output size {size_text!r}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    try:
        run(prefix, extension, output_size)
    except SpheremapError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        if global_config.report_timings.val:
            Profiler.profile_accumulate_report()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
