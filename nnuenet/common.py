"""Constants and little-endian serialization helpers shared by the network code."""

from __future__ import annotations

from typing import BinaryIO, Iterable

import numpy as np

# Version tag stored at the start of every network file.
VERSION = 0x7AF32F20

# Scaling used when turning the network output into an evaluation.
OUTPUT_SCALE = 16
WEIGHT_SCALE_BITS = 6

CACHE_LINE_SIZE = 64
MAX_SIMD_WIDTH = 32

# Type of an input feature after conversion, and of feature indices.
TRANSFORMED_FEATURE_TYPE = np.uint8
INDEX_TYPE = np.uint32


class NetworkFormatError(ValueError):
    """Raised when serialized network data is truncated or malformed."""


def ceil_to_multiple(n: int, base: int) -> int:
    """Round ``n`` up to the nearest multiple of ``base``."""
    return (n + base - 1) // base * base


def _little_endian(dtype) -> np.dtype:
    resolved = np.dtype(dtype)
    if resolved.kind not in "iu":
        raise TypeError(f"expected an integer dtype, got {resolved}")
    return resolved.newbyteorder("<")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise NetworkFormatError(f"unexpected end of data: wanted {size} bytes, got {got}")
    return data


def read_little_endian(stream: BinaryIO, dtype) -> int:
    """Read one little-endian integer of the given numpy dtype from ``stream``."""
    le = _little_endian(dtype)
    data = _read_exact(stream, le.itemsize)
    return int.from_bytes(data, "little", signed=le.kind == "i")


def write_little_endian(stream: BinaryIO, value: int, dtype) -> None:
    """Write ``value`` as a little-endian integer of the given dtype.

    Values outside the dtype's range wrap around, as an unsigned conversion would.
    """
    le = _little_endian(dtype)
    mask = (1 << (8 * le.itemsize)) - 1
    stream.write((int(value) & mask).to_bytes(le.itemsize, "little"))


def read_array(stream: BinaryIO, dtype, count: int) -> np.ndarray:
    """Read ``count`` little-endian integers into a native-order numpy array."""
    le = _little_endian(dtype)
    data = _read_exact(stream, le.itemsize * count)
    return np.frombuffer(data, dtype=le).astype(np.dtype(dtype))


def write_array(stream: BinaryIO, values: Iterable[int], dtype) -> None:
    """Write a sequence of integers in little-endian order."""
    le = _little_endian(dtype)
    stream.write(np.asarray(values).astype(le).tobytes())