from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tensorpic.charsets import (
    BORDER_BOTTOM_LEFT,
    BORDER_HORIZONTAL,
    BORDER_TOP_LEFT,
    BORDER_VERTICAL,
    DENSITY_RAMP,
    EMPTY_MARKER,
    LOWER_HALF_BLOCK,
    UPPER_HALF_BLOCK,
)
from tensorpic.intensity import to_glyphs, to_intensity, to_rgb
from tensorpic.sampling import downsample
from tensorpic.terminal import TerminalCaps
from tensorpic.view import View, format_dims


@dataclass(frozen=True)
class RenderOptions:
    max_rows: int = 60  # terminal lines, not source rows
    max_cols: int = 120
    ramp: str = DENSITY_RAMP
    empty_marker: str = EMPTY_MARKER

    def __post_init__(self):
        if self.max_rows < 1 or self.max_cols < 1:
            raise ValueError(f"Bounds must be positive, got {self.max_rows}x{self.max_cols}")
        if len(self.ramp) < 2:
            raise ValueError(f"Ramp needs at least two glyphs, got {self.ramp!r}")


def _format_colour(colours: np.ndarray) -> list[str]:
    """Pack pairs of colour rows into half-block lines with ANSI truecolor escapes.

    The upper row becomes the background and the lower row the foreground of
    a lower half block. A trailing unpaired row uses an upper half block.
    """
    rows, cols, _ = colours.shape
    out = []
    for r in range(0, rows, 2):
        parts = []
        for c in range(cols):
            tr, tg, tb = (int(v) for v in colours[r, c])
            if r + 1 < rows:
                br, bg, bb = (int(v) for v in colours[r + 1, c])
                parts.append(f"\033[48;2;{tr};{tg};{tb}m\033[38;2;{br};{bg};{bb}m{LOWER_HALF_BLOCK}")
            else:
                parts.append(f"\033[38;2;{tr};{tg};{tb}m{UPPER_HALF_BLOCK}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return out


def header(view: View, name: str, channel: int | None = None) -> str:
    text = f"{BORDER_VERTICAL} {name}[{format_dims(view.shape)}]"
    if channel is not None:
        text += f", channel {channel}"
    return text


def render(
    view: View,
    name: str,
    channel: int | None = None,
    caps: TerminalCaps | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Render a view as a header line followed by glyph or colour lines.

    Raises ChannelOutOfRange when ``channel`` does not exist in the view.
    """
    if caps is None:
        caps = TerminalCaps.detect()
    if options is None:
        options = RenderOptions()

    title = header(view, name, channel)
    if view.is_empty:
        body = [options.empty_marker]
        cols = len(options.empty_marker)
    elif channel is not None:
        grid = downsample(view.select_channel(channel), options.max_rows, options.max_cols)
        body = to_glyphs(grid[:, :, 0], options.ramp)
        cols = grid.shape[1]
    elif caps.truecolor and view.channels > 1:
        grid = downsample(view, 2 * options.max_rows, options.max_cols)
        body = _format_colour(to_rgb(grid))
        cols = grid.shape[1]
    else:
        grid = downsample(view, options.max_rows, options.max_cols)
        body = to_glyphs(to_intensity(grid), options.ramp)
        cols = grid.shape[1]

    lines = [title, *body]
    if caps.truecolor:
        rule = BORDER_HORIZONTAL * max(len(title), cols)
        lines = [BORDER_TOP_LEFT + rule, *lines, BORDER_BOTTOM_LEFT + rule]
    return "\n".join(lines)
