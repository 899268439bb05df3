"""Integer neural network layers, their serialization, and move-ordering history tables."""

__version__ = "0.1.0"

__all__ = [
    "affine",
    "common",
    "layers",
    "stats",
]