"""Log numeric buffers as ASCII art or truecolor blocks.

Each ``log_*`` function renders one buffer into a single INFO record. Inputs
that cannot be rendered (unsupported shape, element type or channel index)
produce a single WARNING record instead; these functions never raise for
malformed buffers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PIL import Image

from tensorpic.adapters import from_buffer, from_image, from_mat, from_tensor
from tensorpic.renderer import RenderOptions, render
from tensorpic.terminal import TerminalCaps
from tensorpic.view import UnsupportedFormat, View

logger = logging.getLogger(__name__)


def _log(
    adapt: Callable[[], View],
    name: str,
    channel: int | None,
    caps: TerminalCaps | None,
    options: RenderOptions | None,
    log: logging.Logger | None,
) -> None:
    log = log or logger
    # Capability is read once per call, before any work
    if caps is None:
        caps = TerminalCaps.detect()
    try:
        text = render(adapt(), name, channel=channel, caps=caps, options=options)
    except UnsupportedFormat as e:
        log.warning("%s", e)
        return
    log.info("%s", text)


def log_view(
    view: View,
    name: str = "buffer",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    _log(lambda: view, name, None, caps, options, log)


def log_view_channel(
    view: View,
    channel: int,
    name: str = "buffer",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    _log(lambda: view, name, channel, caps, options, log)


def log_tensor(
    tensor,
    name: str = "tensor",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log a ``[1, height, width, channels]`` tensor."""
    _log(lambda: from_tensor(tensor), name, None, caps, options, log)


def log_tensor_channel(
    tensor,
    channel: int,
    name: str = "tensor",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log one channel of a ``[1, height, width, channels]`` tensor."""
    _log(lambda: from_tensor(tensor), name, channel, caps, options, log)


def log_image(
    image: Image.Image,
    name: str = "image",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    _log(lambda: from_image(image), name, None, caps, options, log)


def log_image_channel(
    image: Image.Image,
    channel: int,
    name: str = "image",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    _log(lambda: from_image(image), name, channel, caps, options, log)


def log_mat(
    mat,
    name: str = "mat",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log an OpenCV-style ``[rows, cols, channels]`` matrix."""
    _log(lambda: from_mat(mat), name, None, caps, options, log)


def log_mat_channel(
    mat,
    channel: int,
    name: str = "mat",
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    _log(lambda: from_mat(mat), name, channel, caps, options, log)


def log_buffer(
    buffer,
    name: str = "buffer",
    planar: bool = False,
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log a 1-D, 2-D or 3-D array; ``planar`` reads rank 3 as channels-first."""
    _log(lambda: from_buffer(buffer, planar=planar), name, None, caps, options, log)


def log_buffer_channel(
    buffer,
    channel: int,
    name: str = "buffer",
    planar: bool = False,
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
    log: logging.Logger | None = None,
) -> None:
    _log(lambda: from_buffer(buffer, planar=planar), name, channel, caps, options, log)
