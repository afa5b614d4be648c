"""Playlist cover icons: generate, store and replace ``<id>.png`` files.

The playlist store keeps only a relative reference such as
``./icons/1733412345678.png``; this module owns the files behind it.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Optional, Union

from .config import ConfigSource
from .png import encode_png
from .synth import synthesize

logger = logging.getLogger(__name__)

DEFAULT_ICON_SIZE = 256

PathLike = Union[str, Path]


def new_playlist_id() -> int:
    """Millisecond wall-clock timestamp used as a playlist id."""
    return int(time.time() * 1000)


def icon_filename(playlist_id) -> str:
    return f"{playlist_id}.png"


def icon_reference(playlist_id, icons_dir: PathLike) -> str:
    """Relative path stored on the playlist record, e.g. ``./icons/42.png``."""
    return f"./{Path(icons_dir).name}/{icon_filename(playlist_id)}"


def generate_icon(
    size: int = DEFAULT_ICON_SIZE,
    *,
    seed: Optional[int] = None,
    config: ConfigSource = None,
) -> bytes:
    """Synthesize a square crystal icon and return it as PNG bytes."""
    pixels = synthesize(size, size, seed=seed, config=config)
    return encode_png(pixels, size, size)


def write_playlist_icon(
    icons_dir: PathLike,
    playlist_id,
    *,
    size: int = DEFAULT_ICON_SIZE,
    seed: Optional[int] = None,
    config: ConfigSource = None,
) -> str:
    """Generate a fresh icon for ``playlist_id`` inside ``icons_dir``.

    The directory is created when missing. Returns the relative reference to
    store on the playlist record.
    """
    directory = Path(icons_dir)
    data = generate_icon(size, seed=seed, config=config)
    target = directory / icon_filename(playlist_id)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError:
        logger.error("Error saving icon %s", target, exc_info=True)
        raise
    logger.info("Wrote %dx%d icon %s (%d bytes)", size, size, target, len(data))
    return icon_reference(playlist_id, directory)


def replace_playlist_icon(icons_dir: PathLike, playlist_id, source: PathLike) -> str:
    """Copy a user-chosen image over the icon of ``playlist_id``.

    The copy always lands at ``<id>.png`` regardless of the source format.
    """
    directory = Path(icons_dir)
    target = directory / icon_filename(playlist_id)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(str(source), str(target))
    except OSError:
        logger.error("Error saving new icon %s", target, exc_info=True)
        raise
    logger.info("Icon updated successfully: %s", target)
    return icon_reference(playlist_id, directory)
