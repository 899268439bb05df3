"""Fully connected (affine) layer of the evaluation network."""

from __future__ import annotations

from typing import BinaryIO

import numpy as np

from .common import (
    CACHE_LINE_SIZE,
    MAX_SIMD_WIDTH,
    ceil_to_multiple,
    read_array,
    write_array,
)

_HASH_MASK = 0xFFFFFFFF


class AffineTransform:
    """Computes ``biases + weights @ input`` over 8-bit inputs with 32-bit output.

    Weights are stored one row per output, each row padded to a multiple of
    the maximum SIMD width; the padding columns never contribute to the output.
    """

    output_type = np.int32
    bias_type = np.int32
    weight_type = np.int8

    def __init__(self, previous_layer, output_dimensions: int) -> None:
        if np.dtype(previous_layer.output_type) != np.dtype(np.uint8):
            raise TypeError("AffineTransform requires a previous layer producing uint8 output")
        if output_dimensions <= 0:
            raise ValueError("output_dimensions must be positive")
        self.previous_layer = previous_layer
        self.input_dimensions = previous_layer.output_dimensions
        self.output_dimensions = output_dimensions
        self.padded_input_dimensions = ceil_to_multiple(self.input_dimensions, MAX_SIMD_WIDTH)
        self.self_buffer_size = ceil_to_multiple(
            output_dimensions * np.dtype(self.output_type).itemsize, CACHE_LINE_SIZE
        )
        self.buffer_size = previous_layer.buffer_size + self.self_buffer_size
        self.biases = np.zeros(output_dimensions, dtype=self.bias_type)
        self.weights = np.zeros(
            (output_dimensions, self.padded_input_dimensions), dtype=self.weight_type
        )

    def get_hash_value(self) -> int:
        """Hash value embedded in the network file."""
        previous = self.previous_layer.get_hash_value() & _HASH_MASK
        value = (0xCC03DAE4 + self.output_dimensions) & _HASH_MASK
        value ^= previous >> 1
        value ^= (previous << 31) & _HASH_MASK
        return value

    def read_parameters(self, stream: BinaryIO) -> None:
        """Read the previous layer's parameters, then biases and weights."""
        self.previous_layer.read_parameters(stream)
        self.biases = read_array(stream, self.bias_type, self.output_dimensions)
        count = self.output_dimensions * self.padded_input_dimensions
        self.weights = read_array(stream, self.weight_type, count).reshape(
            self.output_dimensions, self.padded_input_dimensions
        )

    def write_parameters(self, stream: BinaryIO) -> None:
        """Write the previous layer's parameters, then biases and weights."""
        self.previous_layer.write_parameters(stream)
        write_array(stream, self.biases, self.bias_type)
        write_array(stream, np.asarray(self.weights).ravel(), self.weight_type)

    def propagate(self, transformed_features) -> np.ndarray:
        """Run the forward pass from the transformed features up to this layer."""
        inputs = np.asarray(
            self.previous_layer.propagate(transformed_features), dtype=np.int64
        )
        if inputs.size != self.input_dimensions:
            raise ValueError(
                f"expected {self.input_dimensions} inputs, got {inputs.size}"
            )
        weights = np.asarray(self.weights, dtype=np.int64)[:, : self.input_dimensions]
        sums = weights @ inputs + np.asarray(self.biases, dtype=np.int64)
        return sums.astype(self.output_type)