# errors.py

# Everything that can go wrong with the *input or output files* lives here.
# Bugs in the mapping math are not errors, they are failed asserts.


class SpheremapError(Exception):
    """Base class for recoverable spheremap tool failures."""


class ImageDecodeError(SpheremapError):
    """An image file could not be read or converted to RGBA."""

    def __init__(self, path: str, reason: str = "could not decode image"):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class CubemapLoadError(ImageDecodeError):
    """One of the six cube faces failed to load. Names the face and the file."""

    def __init__(self, face_name: str, path: str, reason: str = "could not decode image"):
        self.face_name = face_name
        super().__init__(path, reason)
        # Rebuild the message so the face shows up first
        self.args = (f"failed to load {face_name} face from {path}: {reason}",)


class ImageEncodeError(SpheremapError):
    """The output image could not be written."""

    def __init__(self, path: str, reason: str = "could not encode image"):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
