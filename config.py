# config.py

from typing import Generic, TypeVar

T = TypeVar('T')

class ConfigEntry(Generic[T]):
    def __init__(self, default_val: T, name=None, mutable=True):
        self._mutable = True  # Allow the first assignment
        if name == None:
            name = f"UnnamedConfigEntry_{id(self)}"
        self.name = name
        self.default = default_val
        self.val = default_val
        self._mutable = mutable

    @property
    def val(self) -> T:
        return self._val

    @val.setter
    def val(self, new_val: T):
        if not self._mutable:
            raise AttributeError(f"{self.name} is immutable")
        self._val = new_val

    @property
    def mutable(self) -> bool:
        return self._mutable

class Config:
    def __init__(self):
        # === File naming ===
        # These are fixed by the cubemap naming convention. Changing them would
        # break every existing set of face images, so they are locked.
        # Order matches CubeFace: +X, -X, +Y, -Y, +Z, -Z
        FACE_SUFFIXES = ("right", "left", "top", "bottom", "front", "back")
        self.face_suffixes = ConfigEntry(FACE_SUFFIXES, name="face_suffixes", mutable=False)
        self.output_suffix = ConfigEntry("_spheremap", name="output_suffix", mutable=False)
        self.output_extension = ConfigEntry("bmp", name="output_extension", mutable=False)

        # === Sampling ===
        # Clamp s,t into [0,1] before picking a texel. Turning this off gives the
        # old upper-bound-only clamp (negative coordinates then trip the
        # read_texel contract).
        self.symmetric_clamp = ConfigEntry(True, name="symmetric_clamp")

        # === Diagnostics ===
        self.report_timings = ConfigEntry(False, name="report_timings")  # print the profiler report after a run

    def entries(self) -> dict[str, ConfigEntry]:
        return {key: val for key, val in vars(self).items() if isinstance(val, ConfigEntry)}

    def reset_defaults(self):
        """Resets all configs to their default values."""
        self.__init__()



# Global instance
global_config = Config()
