"""Input slice and clipped ReLU layers of the evaluation network."""

from __future__ import annotations

from typing import BinaryIO

import numpy as np

from .common import (
    CACHE_LINE_SIZE,
    MAX_SIMD_WIDTH,
    TRANSFORMED_FEATURE_TYPE,
    WEIGHT_SCALE_BITS,
    ceil_to_multiple,
)

_HASH_MASK = 0xFFFFFFFF


class InputSlice:
    """Input layer exposing a window of the transformed features."""

    output_type = TRANSFORMED_FEATURE_TYPE
    buffer_size = 0

    def __init__(self, output_dimensions: int, offset: int = 0) -> None:
        if offset % MAX_SIMD_WIDTH != 0:
            raise ValueError(f"offset must be a multiple of {MAX_SIMD_WIDTH}, got {offset}")
        if output_dimensions <= 0:
            raise ValueError("output_dimensions must be positive")
        self.output_dimensions = output_dimensions
        self.offset = offset

    def get_hash_value(self) -> int:
        """Hash value embedded in the network file."""
        return (0xEC42E90D ^ (self.output_dimensions ^ (self.offset << 10))) & _HASH_MASK

    def read_parameters(self, stream: BinaryIO) -> None:
        """This layer has no parameters."""

    def write_parameters(self, stream: BinaryIO) -> None:
        """This layer has no parameters."""

    def propagate(self, transformed_features) -> np.ndarray:
        """Return the slice of features this layer feeds forward."""
        features = np.asarray(transformed_features, dtype=self.output_type)
        end = self.offset + self.output_dimensions
        if features.size < end:
            raise ValueError(f"expected at least {end} features, got {features.size}")
        return features[self.offset:end]


class ClippedReLU:
    """Scales 32-bit inputs down and clamps them into the range 0..127."""

    output_type = np.uint8

    def __init__(self, previous_layer) -> None:
        if np.dtype(previous_layer.output_type) != np.dtype(np.int32):
            raise TypeError("ClippedReLU requires a previous layer producing int32 output")
        self.previous_layer = previous_layer
        self.input_dimensions = previous_layer.output_dimensions
        self.output_dimensions = self.input_dimensions
        self.self_buffer_size = ceil_to_multiple(
            self.output_dimensions * np.dtype(self.output_type).itemsize, CACHE_LINE_SIZE
        )
        self.buffer_size = previous_layer.buffer_size + self.self_buffer_size

    def get_hash_value(self) -> int:
        """Hash value embedded in the network file."""
        return (0x538D24C7 + self.previous_layer.get_hash_value()) & _HASH_MASK

    def read_parameters(self, stream: BinaryIO) -> None:
        self.previous_layer.read_parameters(stream)

    def write_parameters(self, stream: BinaryIO) -> None:
        self.previous_layer.write_parameters(stream)

    def propagate(self, transformed_features) -> np.ndarray:
        values = np.asarray(
            self.previous_layer.propagate(transformed_features), dtype=np.int32
        )
        shifted = values >> WEIGHT_SCALE_BITS
        return np.clip(shifted, 0, 127).astype(self.output_type)