# python/wisp_icons/png.py
# Minimal RGBA PNG writer (signature, IHDR, IDAT, IEND) plus chunk reader for verification
# Exists so icons can be encoded without an imaging library on the write path
# RELEVANT FILES: python/wisp_icons/synth.py, python/wisp_icons/icons.py, tests/test_png.py
from __future__ import annotations

import io
import struct
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

import numpy as np

from ._validate import EncodingError, size_wh

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_BIT_DEPTH = 8
_COLOR_TYPE_RGBA = 6


@dataclass(frozen=True)
class PngChunk:
    type: bytes
    data: bytes
    crc: int


@dataclass(frozen=True)
class PngHeader:
    width: int
    height: int
    bit_depth: int
    color_type: int
    compression: int
    filter_method: int
    interlace: int


def crc32(data: bytes) -> int:
    """Calculate the PNG/zlib CRC32 of ``data``."""
    return zlib.crc32(data) & 0xFFFFFFFF


def write_chunk(chunk_type: bytes, data: bytes) -> bytes:
    """Serialize one chunk: length, type, payload, CRC over type + payload."""
    if len(chunk_type) != 4:
        raise EncodingError(f"chunk type must be 4 bytes, got {chunk_type!r}")
    body = bytes(chunk_type) + bytes(data)
    return struct.pack(">I", len(data)) + body + struct.pack(">I", crc32(body))


def _flat_pixels(pixels) -> np.ndarray:
    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise EncodingError(f"pixel buffer must be uint8, got {pixels.dtype}")
        return np.ascontiguousarray(pixels).reshape(-1)
    try:
        view = memoryview(pixels)
    except TypeError as exc:
        raise EncodingError(f"unsupported pixel buffer type: {type(pixels).__name__}") from exc
    if view.itemsize != 1:
        raise EncodingError(f"pixel buffer items must be single bytes, got format {view.format!r}")
    try:
        return np.frombuffer(view, dtype=np.uint8)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"pixel buffer must be contiguous: {exc}") from exc


def encode_png(pixels, width: int, height: int, *, compress_level: int = 6) -> bytes:
    """Encode an RGBA pixel buffer as a PNG byte stream.

    Args:
        pixels: uint8 numpy array (any shape) or bytes-like, row-major RGBA
        width: Image width in pixels
        height: Image height in pixels
        compress_level: zlib level 0-9 (-1 for the zlib default)

    Returns:
        PNG file contents: signature, IHDR, a single IDAT and IEND.

    Raises:
        InvalidDimensionError: if width or height is not a positive integer
        EncodingError: if the buffer length is not width * height * 4
    """
    w, h = size_wh(width, height)
    flat = _flat_pixels(pixels)
    expected = w * h * 4
    if flat.size != expected:
        raise EncodingError(f"pixel buffer size mismatch: got {flat.size} expected {expected}")

    ihdr = struct.pack(">IIBBBBB", w, h, _BIT_DEPTH, _COLOR_TYPE_RGBA, 0, 0, 0)

    # Filter type 0 (none) before every scanline
    raw = np.empty((h, w * 4 + 1), dtype=np.uint8)
    raw[:, 0] = 0
    raw[:, 1:] = flat.reshape(h, w * 4)
    idat = zlib.compress(raw.tobytes(), compress_level)

    return b"".join((
        PNG_SIGNATURE,
        write_chunk(b"IHDR", ihdr),
        write_chunk(b"IDAT", idat),
        write_chunk(b"IEND", b""),
    ))


def iter_chunks(data: bytes) -> Iterator[PngChunk]:
    """Walk the chunks of a PNG stream, checking the signature and every CRC."""
    if data[:8] != PNG_SIGNATURE:
        raise EncodingError("missing PNG signature")
    pos = 8
    end = len(data)
    while pos < end:
        if pos + 8 > end:
            raise EncodingError(f"truncated chunk header at offset {pos}")
        (length,) = struct.unpack(">I", data[pos:pos + 4])
        chunk_type = bytes(data[pos + 4:pos + 8])
        body_end = pos + 8 + length
        if body_end + 4 > end:
            raise EncodingError(f"truncated {chunk_type!r} chunk at offset {pos}")
        payload = bytes(data[pos + 8:body_end])
        (crc,) = struct.unpack(">I", data[body_end:body_end + 4])
        if crc != crc32(chunk_type + payload):
            raise EncodingError(f"CRC mismatch in {chunk_type!r} chunk at offset {pos}")
        yield PngChunk(chunk_type, payload, crc)
        pos = body_end + 4
        if chunk_type == b"IEND":
            return


def read_ihdr(data: bytes) -> PngHeader:
    """Return the IHDR fields of a PNG stream."""
    for chunk in iter_chunks(data):
        if chunk.type != b"IHDR":
            break
        if len(chunk.data) != 13:
            raise EncodingError(f"IHDR payload must be 13 bytes, got {len(chunk.data)}")
        return PngHeader(*struct.unpack(">IIBBBBB", chunk.data))
    raise EncodingError("first chunk is not IHDR")


def png_to_numpy(source: Union[bytes, str, Path]) -> np.ndarray:
    """Decode PNG bytes or a PNG file into an RGBA (H, W, 4) uint8 array."""
    try:
        from PIL import Image
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("Pillow is required for png_to_numpy()") from exc

    if isinstance(source, (bytes, bytearray, memoryview)):
        img = Image.open(io.BytesIO(bytes(source)))
    else:
        img = Image.open(str(source))
    # Convert to RGBA for consistency
    if img.mode != 'RGBA':
        img = img.convert('RGBA')
    return np.array(img, dtype=np.uint8)
