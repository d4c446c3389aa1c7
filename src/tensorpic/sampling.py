import numpy as np

from tensorpic.view import View


def block_edges(size: int, parts: int) -> np.ndarray:
    """Boundaries splitting ``size`` cells into ``parts`` near-equal blocks.

    Block ``i`` spans ``[i * size // parts, (i + 1) * size // parts)``, so every
    cell lands in exactly one block and block sizes differ by at most one.
    """
    return np.arange(parts + 1) * size // parts


def downsample(view: View, max_rows: int, max_cols: int) -> np.ndarray:
    """Block-average a view to at most ``max_rows`` x ``max_cols`` cells.

    Returns a float64 array of shape ``(rows, cols, channels)``. Views already
    within bounds come back sample for sample; nothing is ever upsampled.
    """
    if max_rows < 1 or max_cols < 1:
        raise ValueError(f"Bounds must be positive, got {max_rows}x{max_cols}")

    pixels = view.to_array()
    height, width, _ = pixels.shape
    if height == 0 or width == 0:
        return pixels

    rows = min(height, max_rows)
    cols = min(width, max_cols)
    row_edges = block_edges(height, rows)
    col_edges = block_edges(width, cols)

    # Sum each block in a fixed order (rows first, then columns)
    sums = np.add.reduceat(pixels, row_edges[:-1], axis=0)
    sums = np.add.reduceat(sums, col_edges[:-1], axis=1)
    counts = np.diff(row_edges)[:, None] * np.diff(col_edges)[None, :]
    return sums / counts[:, :, None]
