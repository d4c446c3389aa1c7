import argparse
import sys
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from tensorpic.adapters import from_buffer, from_image
from tensorpic.renderer import RenderOptions, render
from tensorpic.terminal import TerminalCaps, get_terminal_size
from tensorpic.view import UnsupportedFormat


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a numpy array or image as ASCII art")
    parser.add_argument("path", help="Path to a .npy array or an image file")
    parser.add_argument("-c", "--channel", type=int, default=None, help="Render only this channel")
    parser.add_argument("-n", "--name", default=None, help="Display name (default: file stem)")
    parser.add_argument("--rows", type=int, default=None, help="Maximum output lines (default: terminal height)")
    parser.add_argument("--cols", type=int, default=None, help="Maximum output columns (default: terminal width)")
    parser.add_argument(
        "--planar", action="store_true", default=False, help="Read 3-D arrays as [channels, height, width]"
    )
    colour = parser.add_mutually_exclusive_group()
    colour.add_argument("--colour", dest="colour", action="store_true", default=None, help="Force truecolor output")
    colour.add_argument("--no-colour", dest="colour", action="store_false", help="Force monochrome output")
    args = parser.parse_args(argv)

    columns, lines = get_terminal_size()
    options = RenderOptions(
        max_rows=args.rows if args.rows is not None else max(1, lines - 3),
        max_cols=args.cols if args.cols is not None else columns,
    )
    caps = TerminalCaps.detect() if args.colour is None else TerminalCaps(truecolor=args.colour)

    path = Path(args.path)
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        if path.suffix == ".npy":
            try:
                array = np.load(path)
            except ValueError:
                print(f"Cannot read array: {path}", file=sys.stderr)
                sys.exit(1)
            view = from_buffer(array, planar=args.planar)
        else:
            view = from_image(Image.open(path))
        text = render(view, args.name or path.stem, channel=args.channel, caps=caps, options=options)
    except UnidentifiedImageError:
        print(f"Not an image or .npy file: {path}", file=sys.stderr)
        sys.exit(1)
    except UnsupportedFormat as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    print(text)
