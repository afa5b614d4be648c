# python/wisp_icons/__init__.py
# Public API for procedural playlist icons: crystal synthesis and PNG encoding
# RELEVANT FILES: python/wisp_icons/synth.py, python/wisp_icons/png.py, tests/test_api.py
from ._validate import EncodingError, InvalidDimensionError
from .colors import hsl_to_rgb
from .config import CrystalConfig, load_crystal_config
from .icons import (
    generate_icon,
    icon_reference,
    new_playlist_id,
    replace_playlist_icon,
    write_playlist_icon,
)
from .png import PNG_SIGNATURE, crc32, encode_png, png_to_numpy, read_ihdr
from .raster import fill_triangle
from .synth import synthesize

__version__ = "0.0.1a1"

__all__ = [
    "CrystalConfig",
    "EncodingError",
    "InvalidDimensionError",
    "PNG_SIGNATURE",
    "__version__",
    "crc32",
    "encode_png",
    "fill_triangle",
    "generate_icon",
    "hsl_to_rgb",
    "icon_reference",
    "load_crystal_config",
    "new_playlist_id",
    "png_to_numpy",
    "read_ihdr",
    "replace_playlist_icon",
    "synthesize",
    "write_playlist_icon",
]
