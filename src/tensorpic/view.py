from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


def format_dims(shape: tuple[int, ...]) -> str:
    """Space-separated dimensions, e.g. ``(1, 3, 2, 4)`` -> ``"1 3 2 4"``."""
    return " ".join(str(d) for d in shape)


class UnsupportedFormat(ValueError):
    """A buffer that cannot be rendered. ``str()`` is the warning to log."""


class UnsupportedShape(UnsupportedFormat):
    def __init__(self, kind: str, shape: tuple[int, ...]):
        self.kind = kind
        self.shape = tuple(shape)
        super().__init__(f"cannot log {kind} with shape [{format_dims(self.shape)}]")


class UnsupportedElementKind(UnsupportedFormat):
    def __init__(self, kind: str, type_name: str):
        self.kind = kind
        self.type_name = type_name
        super().__init__(f"cannot log {kind} of type {type_name}")


class ChannelOutOfRange(UnsupportedFormat):
    def __init__(self, channel: int, channels: int):
        self.channel = channel
        self.channels = channels
        super().__init__(f"cannot log channel {channel} (buffer has {channels} channels)")


class ElementKind(enum.Enum):
    NORMALIZED_FLOAT = "normalized-float"
    UNSIGNED_BYTE = "unsigned-byte"

    @classmethod
    def from_dtype(cls, dtype: np.dtype, kind: str) -> "ElementKind":
        """Map a numpy dtype onto the allow-list, raising for anything else."""
        dtype = np.dtype(dtype)
        if dtype.kind == "f":
            return cls.NORMALIZED_FLOAT
        if dtype == np.uint8:
            return cls.UNSIGNED_BYTE
        raise UnsupportedElementKind(kind, dtype.name)

    @property
    def divisor(self) -> float:
        return 255.0 if self is ElementKind.UNSIGNED_BYTE else 1.0


@dataclass(frozen=True)
class View:
    """Canonical read-only view of a numeric buffer.

    ``shape`` is the source shape as reported in the header. ``pixels`` is the
    same data rearranged to ``(height, width, channels)`` without copying;
    planar and interleaved sources differ only in its strides.
    """

    shape: tuple[int, ...]
    element_kind: ElementKind
    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.ndim != 3:
            raise ValueError(f"pixels must be (height, width, channels), got {self.pixels.shape}")

    @classmethod
    def empty(cls, element_kind: ElementKind) -> "View":
        return cls(shape=(), element_kind=element_kind, pixels=np.empty((0, 0, 1), dtype=np.float32))

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def is_empty(self) -> bool:
        return self.pixels.size == 0

    def sample(self, row: int, col: int, channel: int) -> float:
        """Normalized sample at one position; unsigned bytes are divided by 255."""
        return float(self.pixels[row, col, channel]) / self.element_kind.divisor

    def to_array(self) -> np.ndarray:
        """All samples as a fresh float64 ``(height, width, channels)`` array."""
        return self.pixels.astype(np.float64) / self.element_kind.divisor

    def select_channel(self, channel: int) -> "View":
        if not 0 <= channel < self.channels:
            raise ChannelOutOfRange(channel, self.channels)
        return View(
            shape=self.shape,
            element_kind=self.element_kind,
            pixels=self.pixels[:, :, channel : channel + 1],
        )
