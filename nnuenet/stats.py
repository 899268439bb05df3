"""History statistics tables and move ordering helpers used by the move picker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSequence, Sequence

import numpy as np

COLOR_NB = 2
SQUARE_NB = 64
PIECE_NB = 16
PIECE_TYPE_NB = 8

# Number of plies near the root tracked by the low-ply history.
MAX_LPH = 4

# A limit of zero marks a table whose entries are never updated with a bonus.
NOT_USED = 0

BUTTERFLY_LIMIT = 13365
LOW_PLY_LIMIT = 10692
CAPTURE_LIMIT = 10692
PIECE_TO_LIMIT = 29952

_ENTRY_TYPE = np.int16
_ENTRY_INFO = np.iinfo(_ENTRY_TYPE)


@dataclass
class ExtMove:
    """A move together with the score used to order it."""

    move: int
    value: int = 0

    def __lt__(self, other: "ExtMove") -> bool:
        return self.value < other.value

    def __int__(self) -> int:
        return self.move


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class StatsTable:
    """An N-dimensional table of 16-bit history scores.

    Scores are nudged with :meth:`update`, which keeps every entry within
    ``[-limit, limit]`` by damping the bonus as the entry grows.
    """

    def __init__(self, shape, limit: int, fill_value: int = 0) -> None:
        shape = tuple(int(dim) for dim in (shape if isinstance(shape, (tuple, list)) else (shape,)))
        if not shape or any(dim <= 0 for dim in shape):
            raise ValueError(f"invalid table shape: {shape}")
        if limit < 0 or limit > _ENTRY_INFO.max:
            raise ValueError(f"limit {limit} does not fit a 16-bit entry")
        self.limit = int(limit)
        self._data = np.zeros(shape, dtype=_ENTRY_TYPE)
        self.fill(fill_value)

    @property
    def shape(self) -> tuple:
        return self._data.shape

    def _check_value(self, value: int) -> int:
        value = int(value)
        if not _ENTRY_INFO.min <= value <= _ENTRY_INFO.max:
            raise ValueError(f"value {value} does not fit a 16-bit entry")
        return value

    def _check_index(self, index) -> tuple:
        if not isinstance(index, tuple):
            index = (index,)
        if len(index) != self._data.ndim:
            raise IndexError(
                f"expected {self._data.ndim} indices, got {len(index)}"
            )
        for i, dim in zip(index, self._data.shape):
            if not 0 <= int(i) < dim:
                raise IndexError(f"index {i} out of range for dimension {dim}")
        return tuple(int(i) for i in index)

    def fill(self, value: int) -> None:
        """Set every entry to ``value``."""
        self._data.fill(self._check_value(value))

    def update(self, index, bonus: int) -> int:
        """Apply a history bonus to one entry and return the new value."""
        if self.limit == NOT_USED:
            raise ValueError("this table does not take bonus updates")
        bonus = int(bonus)
        if abs(bonus) > self.limit:
            raise ValueError(f"bonus {bonus} outside [-{self.limit}, {self.limit}]")
        index = self._check_index(index)
        entry = int(self._data[index])
        entry += bonus - _trunc_div(entry * abs(bonus), self.limit)
        self._data[index] = self._check_value(entry)
        return entry

    def __getitem__(self, index):
        result = self._data[index]
        if np.ndim(result) == 0:
            return int(result)
        return result.copy()

    def __setitem__(self, index, value) -> None:
        if np.ndim(value) == 0:
            self._data[index] = self._check_value(value)
        else:
            values = np.asarray(value)
            if values.size and (values.min() < _ENTRY_INFO.min or values.max() > _ENTRY_INFO.max):
                raise ValueError("values do not fit 16-bit entries")
            self._data[index] = values.astype(_ENTRY_TYPE)


def partial_insertion_sort(moves: MutableSequence[ExtMove], limit: int) -> None:
    """Sort moves in place in descending order of value, down to ``limit``.

    Moves scoring at least ``limit`` end up at the front in descending order;
    the order of the remaining moves is left unspecified.
    """
    sorted_end = 0
    for p in range(1, len(moves)):
        if moves[p].value >= limit:
            tmp = moves[p]
            sorted_end += 1
            moves[p] = moves[sorted_end]
            q = sorted_end
            while q != 0 and moves[q - 1].value < tmp.value:
                moves[q] = moves[q - 1]
                q -= 1
            moves[q] = tmp


def butterfly_history() -> StatsTable:
    """Quiet-move history indexed by ``[color][from_to]``."""
    return StatsTable((COLOR_NB, SQUARE_NB * SQUARE_NB), BUTTERFLY_LIMIT)


def low_ply_history() -> StatsTable:
    """Quiet-move history near the root indexed by ``[ply][from_to]``."""
    return StatsTable((MAX_LPH, SQUARE_NB * SQUARE_NB), LOW_PLY_LIMIT)


def capture_piece_to_history() -> StatsTable:
    """Capture history indexed by ``[piece][to][captured piece type]``."""
    return StatsTable((PIECE_NB, SQUARE_NB, PIECE_TYPE_NB), CAPTURE_LIMIT)


def piece_to_history() -> StatsTable:
    """History indexed by ``[piece][to]``."""
    return StatsTable((PIECE_NB, SQUARE_NB), PIECE_TO_LIMIT)


def _moves_of(ext_moves: Sequence[ExtMove]) -> list[int]:
    return [m.move for m in ext_moves]