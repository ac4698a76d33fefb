# bitmap.py
# -----------------------------------------------------------------------------
# Uncompressed 24-bit BMP (BITMAPFILEHEADER + BITMAPINFOHEADER, 54 bytes).
# Every header field is packed little-endian at its own offset, so nothing
# depends on in-memory struct layout.
#
# Row order: the pixel buffer is top-down (row 0 = top of the maze); BMP with
# a positive height is bottom-up, so rows are written last-to-first.
# Row padding: every row is padded to 4 bytes. For width*3 % 4 == 0 this adds
# nothing and sizes match width*height*3 exactly.
# -----------------------------------------------------------------------------
import struct
from typing import Dict

import numpy as np

from mazebmp.config import BMP_PPM

BMP_MAGIC       = b"BM"
FILE_HEADER_LEN = 14
INFO_HEADER_LEN = 40
HEADER_LEN      = FILE_HEADER_LEN + INFO_HEADER_LEN  # 54
BITS_PER_PIXEL  = 24

# (offset, struct format, field)
HEADER_FIELDS = (
    (0,  "<2s", "magic"),
    (2,  "<I",  "file_size"),
    (6,  "<H",  "reserved1"),
    (8,  "<H",  "reserved2"),
    (10, "<I",  "data_offset"),
    (14, "<I",  "header_size"),
    (18, "<I",  "width"),
    (22, "<I",  "height"),
    (26, "<H",  "planes"),
    (28, "<H",  "bits_per_pixel"),
    (30, "<I",  "compression"),
    (34, "<I",  "image_size"),
    (38, "<I",  "x_ppm"),
    (42, "<I",  "y_ppm"),
    (46, "<I",  "colors_used"),
    (50, "<I",  "colors_important"),
)


def row_stride(width: int) -> int:
    return (width * 3 + 3) & ~3

def build_bmp_header(width: int, height: int) -> bytes:
    if width < 1 or height < 1:
        raise ValueError(f"Bitmap must be at least 1x1, got {width}x{height}.")
    image_size = row_stride(width) * height
    if HEADER_LEN + image_size > 0xFFFFFFFF:
        raise ValueError(f"{width}x{height} bitmap exceeds the 4 GiB BMP size limit.")
    values = {
        "magic": BMP_MAGIC,
        "file_size": HEADER_LEN + image_size,
        "reserved1": 0,
        "reserved2": 0,
        "data_offset": HEADER_LEN,
        "header_size": INFO_HEADER_LEN,
        "width": width,
        "height": height,
        "planes": 1,
        "bits_per_pixel": BITS_PER_PIXEL,
        "compression": 0,
        "image_size": image_size,
        "x_ppm": BMP_PPM,
        "y_ppm": BMP_PPM,
        "colors_used": 0,
        "colors_important": 0,
    }
    buf = bytearray(HEADER_LEN)
    for offset, fmt, name in HEADER_FIELDS:
        struct.pack_into(fmt, buf, offset, values[name])
    return bytes(buf)

def parse_bmp_header(data: bytes) -> Dict[str, object]:
    if len(data) < HEADER_LEN:
        raise ValueError(f"Need {HEADER_LEN} header bytes, got {len(data)}.")
    header = {name: struct.unpack_from(fmt, data, offset)[0] for offset, fmt, name in HEADER_FIELDS}
    if header["magic"] != BMP_MAGIC:
        raise ValueError(f"Not a BMP file (magic {header['magic']!r}).")
    return header

def _check_pixels(pixels: np.ndarray):
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected (H, W, 3) pixel buffer, got shape {pixels.shape}.")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 pixels, got {pixels.dtype}.")

def encode_bmp(pixels: np.ndarray) -> bytes:
    """(H, W, 3) uint8 B,G,R buffer -> complete BMP file bytes."""
    _check_pixels(pixels)
    H, W = pixels.shape[:2]
    stride = row_stride(W)
    rows = np.zeros((H, stride), dtype=np.uint8)
    rows[:, :W * 3] = pixels[::-1].reshape(H, W * 3)
    return build_bmp_header(W, H) + rows.tobytes()

def decode_bmp(data: bytes) -> np.ndarray:
    """Inverse of encode_bmp for 24-bit uncompressed files; returns a top-down (H, W, 3) buffer."""
    header = parse_bmp_header(data)
    if header["bits_per_pixel"] != BITS_PER_PIXEL or header["compression"] != 0:
        raise ValueError("Only uncompressed 24-bit bitmaps are supported.")
    W, H = header["width"], header["height"]
    stride = row_stride(W)
    offset = header["data_offset"]
    body = np.frombuffer(data, dtype=np.uint8, count=stride * H, offset=offset)
    rows = body.reshape(H, stride)[:, :W * 3]
    return rows.reshape(H, W, 3)[::-1].copy()

def save_bmp(path: str, pixels: np.ndarray) -> int:
    """Write pixels to `path`. Returns bytes written; OSError propagates."""
    data = encode_bmp(pixels)
    with open(path, "wb") as f:
        f.write(data)
    return len(data)
