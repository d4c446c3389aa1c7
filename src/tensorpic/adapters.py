"""Adapters from source buffers to :class:`~tensorpic.view.View`.

Each source kind gets one function. Representation differences (batch
dimensions, planar vs interleaved channels, byte vs float samples) are
resolved here and nowhere else.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from tensorpic.view import ElementKind, UnsupportedElementKind, UnsupportedShape, View

# Pillow modes that are rendered as-is; everything else is converted first
_NATIVE_MODES = {"L", "LA", "RGB", "RGBA", "F"}
_INTEGER_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N"}


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr = arr.view()
    arr.flags.writeable = False
    return arr


def _as_array(source, kind: str) -> np.ndarray:
    """Read a source as a numpy array; ragged nesting is an unsupported element type."""
    try:
        return np.asarray(source)
    except ValueError as e:
        raise UnsupportedElementKind(kind, "object") from e


def _fold_leading(arr: np.ndarray, max_ndim: int = 3) -> np.ndarray:
    """Drop leading singleton dimensions until at most ``max_ndim`` remain."""
    while arr.ndim > max_ndim and arr.shape[0] == 1:
        arr = arr[0]
    return arr


def from_tensor(tensor, kind: str = "tensor") -> View:
    """View of a ``[batch, height, width, channels]`` tensor with batch 1."""
    arr = _as_array(tensor, kind)
    element_kind = ElementKind.from_dtype(arr.dtype, kind)
    if arr.size == 0:
        return View.empty(element_kind)
    if arr.ndim != 4 or arr.shape[0] != 1:
        raise UnsupportedShape(kind, arr.shape)
    return View(shape=arr.shape, element_kind=element_kind, pixels=_read_only(arr[0]))


def from_buffer(buffer, planar: bool = False, kind: str = "buffer") -> View:
    """View of a generic 1-D, 2-D or 3-D array.

    Rank 3 is read as ``[height, width, channels]`` unless ``planar`` is set, in
    which case it is ``[channels, height, width]``. Leading singleton
    dimensions beyond three are folded away.
    """
    arr = _as_array(buffer, kind)
    element_kind = ElementKind.from_dtype(arr.dtype, kind)
    if arr.size == 0:
        return View.empty(element_kind)

    folded = _fold_leading(arr)
    if folded.ndim == 1:
        pixels = folded[np.newaxis, :, np.newaxis]
    elif folded.ndim == 2:
        pixels = folded[:, :, np.newaxis]
    elif folded.ndim == 3:
        pixels = folded.transpose(1, 2, 0) if planar else folded
    else:
        raise UnsupportedShape(kind, arr.shape)
    return View(shape=arr.shape, element_kind=element_kind, pixels=_read_only(pixels))


def from_mat(mat, kind: str = "mat") -> View:
    """View of an OpenCV-style matrix: ``[rows, cols]`` or interleaved ``[rows, cols, channels]``."""
    arr = _as_array(mat, kind)
    element_kind = ElementKind.from_dtype(arr.dtype, kind)
    if arr.size == 0:
        return View.empty(element_kind)
    if arr.ndim == 2:
        arr = arr[:, :, np.newaxis]
    elif arr.ndim != 3:
        raise UnsupportedShape(kind, arr.shape)
    return View(shape=arr.shape, element_kind=element_kind, pixels=_read_only(arr))


def from_image(image: Image.Image, kind: str = "image") -> View:
    """View of a Pillow image, reported as ``[height, width, channels]``."""
    if image.mode in _INTEGER_MODES:
        raise UnsupportedElementKind(kind, np.asarray(image).dtype.name)
    if image.mode not in _NATIVE_MODES:
        if image.mode == "1":
            image = image.convert("L")
        elif image.mode in ("P", "PA") and ("transparency" in image.info or image.mode == "PA"):
            image = image.convert("RGBA")
        else:
            image = image.convert("RGB")

    arr = np.asarray(image)
    element_kind = ElementKind.from_dtype(arr.dtype, kind)
    if arr.size == 0:
        return View.empty(element_kind)
    if arr.ndim == 2:
        arr = arr[:, :, np.newaxis]
    return View(shape=arr.shape, element_kind=element_kind, pixels=_read_only(arr))
