#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/bmp.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""
24-bit uncompressed BMP encoding of framebuffers.

Layout written (all little-endian):

    offset  size  field
    0       2     'BM'
    2       4     file size
    6       4     reserved (0)
    10      4     pixel data offset (54)
    14      4     info header size (40)
    18      4     width (int32)
    22      4     height (int32, positive: rows stored bottom-to-top)
    26      2     planes (1)
    28      2     bits per pixel (24)
    30      4     compression (0)
    34      4     image size (0)
    38      8     pixels per meter x, y (0)
    46      8     palette colors used / important (0)
    54      ...   pixel rows, bottom row first, bytes B, G, R

Rows are NOT padded to a multiple of 4 bytes unless ``pad_rows`` is set,
so the file size is always 54 + width * height * 3 by default. Readers
that insist on padding will shear images whose width * 3 is not a
multiple of 4.
"""

import logging
import struct
from pathlib import Path

import numpy as np

from .errors import BmpFormatError

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE

_HEADER = struct.Struct('<2sIIIIiiHHIIiiII')


def _as_frame(pixels) -> np.ndarray:
    frame = np.asarray(pixels)
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"expected a (height, width, 3) RGB array, got shape {frame.shape}")
    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise ValueError("cannot encode an empty frame")
    if frame.dtype != np.uint8:
        frame = frame.astype(np.uint8)
    return frame


def encode_bmp(pixels, pad_rows: bool = False) -> bytes:
    """Encode an RGB (height, width, 3) uint8 frame as BMP file bytes."""
    frame = _as_frame(pixels)
    height, width = frame.shape[:2]

    # bottom-to-top, RGB -> BGR
    rows = frame[::-1, :, ::-1].reshape(height, width * 3)
    if pad_rows:
        padding = (-(width * 3)) % 4
        if padding:
            padded = np.zeros((height, width * 3 + padding), dtype=np.uint8)
            padded[:, :width * 3] = rows
            rows = padded
    data = rows.tobytes()

    file_size = PIXEL_DATA_OFFSET + len(data)
    header = _HEADER.pack(
        b'BM', file_size, 0, PIXEL_DATA_OFFSET,
        INFO_HEADER_SIZE, width, height, 1, 24, 0, 0, 0, 0, 0, 0)
    return header + data


def write_bmp(path, pixels, pad_rows: bool = False) -> Path:
    """Write a frame to ``path``. I/O failures propagate as OSError."""
    path = Path(path)
    payload = encode_bmp(pixels, pad_rows=pad_rows)
    path.write_bytes(payload)
    logger.debug("wrote %s (%d bytes)", path, len(payload))
    return path


def decode_bmp(data: bytes) -> np.ndarray:
    """
    Decode 24-bit uncompressed BMP bytes back into an RGB (height, width, 3)
    uint8 array. Accepts both padded and unpadded rows and top-down
    (negative height) files.
    """
    if len(data) < PIXEL_DATA_OFFSET:
        raise BmpFormatError(f"truncated header: {len(data)} bytes")
    (magic, _file_size, _reserved, offset, info_size, width, height,
     planes, bpp, compression, *_rest) = _HEADER.unpack_from(data)
    if magic != b'BM':
        raise BmpFormatError(f"bad magic {magic!r}")
    if info_size < INFO_HEADER_SIZE or planes != 1:
        raise BmpFormatError("unsupported info header")
    if bpp != 24 or compression != 0:
        raise BmpFormatError(f"only 24-bit uncompressed BMP is supported (bpp={bpp}, "
                             f"compression={compression})")
    if width <= 0 or height == 0:
        raise BmpFormatError(f"bad dimensions {width}x{height}")

    top_down = height < 0
    height = abs(height)
    available = len(data) - offset
    stride = width * 3
    padded_stride = stride + (-stride) % 4
    if available == height * stride:
        row_len = stride
    elif available >= height * padded_stride:
        row_len = padded_stride
    else:
        raise BmpFormatError(
            f"pixel data too short: {available} bytes for {width}x{height}")

    raw = np.frombuffer(data, dtype=np.uint8, count=height * row_len, offset=offset)
    rows = raw.reshape(height, row_len)[:, :stride].reshape(height, width, 3)
    if not top_down:
        rows = rows[::-1]
    return np.ascontiguousarray(rows[:, :, ::-1])


def read_bmp(path) -> np.ndarray:
    return decode_bmp(Path(path).read_bytes())
