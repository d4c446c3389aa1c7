from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

COLORTERM = "COLORTERM"
TRUECOLOR_TOKENS = ("truecolor", "24bit")


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


@dataclass(frozen=True)
class TerminalCaps:
    truecolor: bool = False

    @classmethod
    def detect(cls, environ: Mapping[str, str] | None = None) -> "TerminalCaps":
        """Read ``COLORTERM`` now; unset, empty or unknown values mean monochrome."""
        if environ is None:
            environ = os.environ
        value = environ.get(COLORTERM, "").lower()
        return cls(truecolor=any(token in value for token in TRUECOLOR_TOKENS))
