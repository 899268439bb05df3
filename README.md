# nnuenet

`nnuenet` provides integer neural network layers of the kind used in NNUE
chess evaluation, the little-endian serialization that their parameter files
use, and the bounded history tables that a chess search uses to order moves.

## Modules

- `nnuenet.common`: the format constants (`VERSION`, `OUTPUT_SCALE`,
  `WEIGHT_SCALE_BITS`, `CACHE_LINE_SIZE`, `MAX_SIMD_WIDTH`), `ceil_to_multiple`,
  `read_little_endian` / `write_little_endian` for single integers,
  `read_array` / `write_array` for integer arrays, and `NetworkFormatError`,
  which is raised when a stream ends before the expected data.
- `nnuenet.layers`:
  - `InputSlice(output_dimensions, offset=0)` passes a window of the uint8
    input features forward. The offset must be a multiple of 32.
  - `ClippedReLU(previous_layer)` shifts int32 values right by
    `WEIGHT_SCALE_BITS` and clamps them to 0..127 as uint8.
- `nnuenet.affine`: `AffineTransform(previous_layer, output_dimensions)` computes
  `biases + weights @ inputs` with int8 weights, int32 biases and int32 output.
  It pads each weight row to a multiple of 32 columns.
- `nnuenet.stats`: `StatsTable`, the factories `butterfly_history()`,
  `low_ply_history()`, `capture_piece_to_history()` and `piece_to_history()`,
  plus `ExtMove` and `partial_insertion_sort`.

Every layer has the same set of methods:

- `get_hash_value()` returns the 32-bit hash that identifies the layer stack.
- `read_parameters(stream)` and `write_parameters(stream)` go through the
  previous layer first, then this layer's own parameters.
- `propagate(transformed_features)` runs the forward pass.

## Installation

```
pip install .
```

## Usage

Build a small layer stack, save its parameters and run it:

```python
import io
import numpy as np

from nnuenet.layers import InputSlice, ClippedReLU
from nnuenet.affine import AffineTransform

inputs = InputSlice(64)
hidden = ClippedReLU(AffineTransform(inputs, 16))
output = AffineTransform(hidden, 1)

buffer = io.BytesIO()
output.write_parameters(buffer)
buffer.seek(0)
output.read_parameters(buffer)

features = np.zeros(64, dtype=np.uint8)
print(output.propagate(features))   # int32 array of length 1
print(hex(output.get_hash_value()))
```

`read_parameters` raises `NetworkFormatError` if the stream is too short.

History tables follow the bounded update rule
`entry += bonus - entry * |bonus| / limit`, with division rounding toward
zero. That rule keeps every entry within `[-limit, limit]`:

```python
from nnuenet.stats import ExtMove, butterfly_history, partial_insertion_sort

history = butterfly_history()
history.update((0, 12 * 64 + 28), 500)   # returns 500
history[0, 12 * 64 + 28]                  # 500

moves = [ExtMove(1, 10), ExtMove(2, 300), ExtMove(3, -50), ExtMove(4, 120)]
partial_insertion_sort(moves, 100)
# moves scoring at least 100 come first, in descending order: 2, 4, ...
```

`update` raises `ValueError` for a bonus outside `[-limit, limit]` and
`IndexError` for an index outside the table.

## What this package does not do

It has no chess board or position representation. It has no input feature set
that turns pieces into feature indices. It has no feature transformer or
accumulator. It cannot read a complete network file with its header, and it
does not produce an evaluation score for a position. The layers and tables
here are building blocks that a caller combines with those parts.

## Running the tests

```
pip install .[test]
pytest
```