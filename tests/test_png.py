"""PNG encoder: container structure, checksums and decodability."""

import struct
import zlib

import numpy as np
import pytest

from wisp_icons import EncodingError, InvalidDimensionError, synthesize
from wisp_icons.png import (
    PNG_SIGNATURE,
    crc32,
    encode_png,
    iter_chunks,
    png_to_numpy,
    read_ihdr,
    write_chunk,
)


def _gradient(width, height):
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., 0] = np.arange(width, dtype=np.uint8)[None, :]
    arr[..., 1] = np.arange(height, dtype=np.uint8)[:, None]
    arr[..., 2] = 128
    arr[..., 3] = 255
    return arr


def test_signature_bytes():
    assert PNG_SIGNATURE == bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


def test_iend_crc_constant():
    assert crc32(b"IEND") == 0xAE426082
    assert write_chunk(b"IEND", b"") == bytes.fromhex("0000000049454e44ae426082")


def test_chunk_crc_covers_type_and_payload():
    chunk = write_chunk(b"tEXt", b"hello")
    (length,) = struct.unpack(">I", chunk[:4])
    (crc,) = struct.unpack(">I", chunk[-4:])
    assert length == 5
    assert chunk[4:8] == b"tEXt"
    assert crc == zlib.crc32(b"tEXthello") & 0xFFFFFFFF


def test_write_chunk_rejects_bad_type():
    with pytest.raises(EncodingError):
        write_chunk(b"IDA", b"")


@pytest.mark.parametrize("width,height", [(1, 1), (7, 3), (3, 7), (33, 17)])
def test_header_fields(width, height):
    data = encode_png(_gradient(width, height), width, height)
    assert data[:8] == PNG_SIGNATURE
    header = read_ihdr(data)
    assert (header.width, header.height) == (width, height)
    assert header.bit_depth == 8
    assert header.color_type == 6
    assert (header.compression, header.filter_method, header.interlace) == (0, 0, 0)


def test_chunk_order():
    data = encode_png(_gradient(5, 4), 5, 4)
    assert [c.type for c in iter_chunks(data)] == [b"IHDR", b"IDAT", b"IEND"]


def test_idat_holds_unfiltered_scanlines():
    pixels = _gradient(6, 5)
    data = encode_png(pixels, 6, 5)
    idat = next(c for c in iter_chunks(data) if c.type == b"IDAT")
    raw = np.frombuffer(zlib.decompress(idat.data), dtype=np.uint8).reshape(5, 6 * 4 + 1)
    assert np.all(raw[:, 0] == 0)
    assert np.array_equal(raw[:, 1:], pixels.reshape(5, -1))


def test_bytes_buffer_accepted():
    pixels = _gradient(4, 4)
    assert encode_png(pixels.tobytes(), 4, 4) == encode_png(pixels, 4, 4)
    assert encode_png(bytearray(pixels.tobytes()), 4, 4) == encode_png(pixels, 4, 4)


def test_does_not_mutate_input():
    pixels = _gradient(8, 8)
    before = pixels.copy()
    encode_png(pixels, 8, 8)
    assert np.array_equal(pixels, before)


def test_length_mismatch():
    with pytest.raises(EncodingError):
        encode_png(np.zeros(4 * 4 * 4 - 1, dtype=np.uint8), 4, 4)
    with pytest.raises(EncodingError):
        encode_png(b"\x00" * 12, 2, 2)


def test_wrong_dtype():
    with pytest.raises(EncodingError):
        encode_png(np.zeros((2, 2, 4), dtype=np.float32), 2, 2)


def test_invalid_dimensions():
    with pytest.raises(InvalidDimensionError):
        encode_png(b"", 0, 0)


def test_corrupted_crc_detected():
    data = bytearray(encode_png(_gradient(3, 3), 3, 3))
    data[-13] ^= 0xFF  # last byte of the IDAT CRC, just before the 12-byte IEND
    with pytest.raises(EncodingError):
        list(iter_chunks(bytes(data)))


def test_not_a_png():
    with pytest.raises(EncodingError):
        read_ihdr(b"GIF89a....")


def test_truncated_stream():
    data = encode_png(_gradient(3, 3), 3, 3)
    with pytest.raises(EncodingError):
        list(iter_chunks(data[:40]))


@pytest.mark.pillow
def test_roundtrip_with_pillow():
    pytest.importorskip("PIL")
    pixels = synthesize(40, 30, seed=21)
    decoded = png_to_numpy(encode_png(pixels, 40, 30))
    assert decoded.shape == (30, 40, 4)
    assert np.all(decoded[..., 3] == 255)
    assert np.array_equal(decoded, pixels)


@pytest.mark.pillow
def test_two_runs_decode_to_same_dimensions(tmp_path):
    pytest.importorskip("PIL")
    for i in range(2):
        path = tmp_path / f"run{i}.png"
        path.write_bytes(encode_png(synthesize(24, 16), 24, 16))
        decoded = png_to_numpy(path)
        assert decoded.shape == (16, 24, 4)
        assert decoded.reshape(-1).size == 24 * 16 * 4


def test_wide_strip_beyond_8k():
    data = encode_png(np.zeros((1, 9000, 4), dtype=np.uint8), 9000, 1)
    header = read_ihdr(data)
    assert (header.width, header.height) == (9000, 1)


@pytest.mark.parametrize("pixels", [4, 4.0, None, [0, 0, 0, 255], [0, 0, 0, 300]])
def test_non_buffer_inputs_rejected(pixels):
    with pytest.raises(EncodingError):
        encode_png(pixels, 1, 1)


def test_wide_item_buffer_rejected():
    import array

    with pytest.raises(EncodingError):
        encode_png(array.array("I", [0xFF000000]), 1, 1)


def test_memoryview_accepted():
    pixels = _gradient(2, 2)
    assert encode_png(memoryview(pixels.tobytes()), 2, 2) == encode_png(pixels, 2, 2)
