import numpy as np

from tensorpic.charsets import DENSITY_RAMP


def glyph_indices(values: np.ndarray, ramp_length: int) -> np.ndarray:
    """Quantize normalized values to ramp positions ``floor(v * (n - 1))``, clamped."""
    values = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
    indices = np.floor(values * (ramp_length - 1))
    return np.clip(indices, 0, ramp_length - 1).astype(np.intp)


def to_glyphs(values: np.ndarray, ramp: str = DENSITY_RAMP) -> list[str]:
    """Map a (rows, cols) array of intensities to one string per row."""
    ramp_arr = np.array(list(ramp))
    indices = glyph_indices(values, len(ramp))
    return ["".join(row) for row in ramp_arr[indices]]


def to_intensity(grid: np.ndarray) -> np.ndarray:
    """Collapse (rows, cols, channels) to (rows, cols) by averaging all channels."""
    return grid.mean(axis=-1)


def to_rgb(grid: np.ndarray) -> np.ndarray:
    """Map (rows, cols, channels) samples to (rows, cols, 3) uint8 colours.

    One channel is grey, two are red/green with no blue, three are RGB. Any
    channels after the third are averaged into an opacity that scales the
    first three, i.e. the colour is composited over black.
    """
    channels = grid.shape[-1]
    if channels == 1:
        rgb = np.repeat(grid, 3, axis=-1)
    elif channels == 2:
        rgb = np.concatenate([grid, np.zeros_like(grid[..., :1])], axis=-1)
    elif channels == 3:
        rgb = grid
    else:
        opacity = grid[..., 3:].mean(axis=-1, keepdims=True)
        rgb = grid[..., :3] * opacity
    rgb = np.nan_to_num(rgb, nan=0.0)
    return (np.clip(rgb, 0.0, 1.0) * 255).astype(np.uint8)
