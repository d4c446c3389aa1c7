import numpy as np
import pytest

from tensorpic.terminal import TerminalCaps


def make_tensor(width, height, channels, dtype=np.float32):
    """Gradient tensor of shape (1, height, width, channels).

    Channel 0 rises left to right, channel 1 top to bottom, channel 2 along
    the diagonal, and any further channels along the anti-diagonal.
    """
    x = (np.arange(width) + 0.5)[None, :]
    y = (np.arange(height) + 0.5)[:, None]
    x, y = np.broadcast_arrays(x, y)
    planes = [x / width, y / height, (x + y) / (width + height)]
    planes += [(x + height - y) / (width + height)] * max(0, channels - 3)
    data = np.stack(planes[:channels], axis=-1)
    if np.dtype(dtype).kind != "f":
        data = data * 255
    return data.astype(dtype)[np.newaxis]


@pytest.fixture(autouse=True)
def no_truecolor_env(monkeypatch):
    """Keep rendering independent of the terminal running the tests."""
    monkeypatch.setenv("COLORTERM", "invalid")


@pytest.fixture
def mono():
    return TerminalCaps(truecolor=False)


@pytest.fixture
def truecolor():
    return TerminalCaps(truecolor=True)
