# python/wisp_icons/cli.py
# Command-line entry point: synthesize a crystal icon and write it as PNG
# RELEVANT FILES: python/wisp_icons/__main__.py, python/wisp_icons/config.py, tests/test_cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ._validate import png_path, size_wh
from .config import load_crystal_config
from .png import encode_png
from .synth import synthesize

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wisp-icons",
        description="Generate a procedural crystal icon as a PNG file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 256x256 playlist icon
  wisp-icons cover.png

  # Reproducible wide banner with fewer layers
  wisp-icons banner.png --width 640 --height 160 --seed 7 --layers 6
        """,
    )
    parser.add_argument("out", type=Path, help="Output .png path")
    parser.add_argument("--size", type=int, default=256, help="Square size when width/height are not given")
    parser.add_argument("--width", type=int, default=None, help="Image width")
    parser.add_argument("--height", type=int, default=None, help="Image height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    parser.add_argument("--config", type=Path, default=None, help="JSON file with crystal parameters")
    parser.add_argument("--layers", type=int, default=None, help="Number of facet layers")
    parser.add_argument("--points", type=int, default=None, help="Points per facet layer")
    parser.add_argument("--margin", type=int, default=None, help="Off-canvas margin for facet points")
    parser.add_argument("--compress-level", type=int, default=6, choices=range(0, 10),
                        metavar="0-9", help="zlib compression level")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(levelname)s: %(message)s')

    width = args.width if args.width is not None else args.size
    height = args.height if args.height is not None else args.size
    try:
        width, height = size_wh(width, height)
        out = png_path(args.out)
        cfg = load_crystal_config(
            args.config,
            overrides={"layers": args.layers, "points_per_layer": args.points, "margin": args.margin},
        )
    except (ValueError, TypeError, OSError) as exc:
        parser.error(str(exc))

    pixels = synthesize(width, height, seed=args.seed, config=cfg)
    data = encode_png(pixels, width, height, compress_level=args.compress_level)
    Path(out).write_bytes(data)
    logger.info("Wrote %s (%dx%d, %d bytes)", out, width, height, len(data))
    return 0


if __name__ == "__main__":
    sys.exit(main())
