# python/wisp_icons/_validate.py
# Argument validation shared by the synthesizer, encoder and CLI
# RELEVANT FILES: python/wisp_icons/synth.py, python/wisp_icons/png.py, tests/test_validate.py
from __future__ import annotations
from pathlib import Path
from typing import Tuple


class InvalidDimensionError(ValueError):
    """Raised when an image width or height is not a positive integer."""


class EncodingError(ValueError):
    """Raised when a pixel buffer or PNG stream does not match its declared layout."""


def _as_int(name: str, v) -> int:
    if isinstance(v, bool):
        raise InvalidDimensionError(f"{name} must be an integer, got bool")
    try:
        i = int(v)
    except Exception as e:
        raise InvalidDimensionError(f"{name} must be an integer, got {type(v).__name__}") from e
    if isinstance(v, float) and not v.is_integer():
        raise InvalidDimensionError(f"{name} must be an integer, got {v!r}")
    return i

def size_wh(width, height) -> Tuple[int, int]:
    w = _as_int("width", width)
    h = _as_int("height", height)
    if w <= 0 or h <= 0:
        raise InvalidDimensionError("width and height must be > 0")
    return w, h

def png_path(p: str | Path) -> str:
    s = str(p)
    if not s.lower().endswith(".png"):
        raise ValueError("path must end with .png")
    parent = Path(s).resolve().parent
    if not parent.exists():
        raise ValueError(f"directory does not exist: {parent}")
    return s
