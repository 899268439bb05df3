import random

import pytest

from nnuenet.stats import (
    ExtMove,
    StatsTable,
    butterfly_history,
    capture_piece_to_history,
    low_ply_history,
    partial_insertion_sort,
    piece_to_history,
)


def test_factory_shapes_and_limits():
    assert butterfly_history().shape == (2, 4096)
    assert butterfly_history().limit == 13365
    assert low_ply_history().shape == (4, 4096)
    assert low_ply_history().limit == 10692
    assert capture_piece_to_history().shape == (16, 64, 8)
    assert capture_piece_to_history().limit == 10692
    assert piece_to_history().shape == (16, 64)
    assert piece_to_history().limit == 29952


def test_new_table_is_filled():
    table = StatsTable((3, 4), 100, 7)
    assert table[2, 3] == 7
    assert table[0, 0] == 7


def test_fill_and_setitem():
    table = piece_to_history()
    table.fill(-5)
    assert table[15, 63] == -5
    table[3, 4] = 42
    assert table[3, 4] == 42
    assert table[3, 5] == -5


def test_first_update_from_zero_equals_bonus():
    table = butterfly_history()
    assert table.update((0, 10), 100) == 100
    assert table[0, 10] == 100


def test_update_at_limit_stays_at_limit():
    table = piece_to_history()
    table[1, 1] = 29952
    assert table.update((1, 1), 29952) == 29952
    table[1, 2] = -29952
    assert table.update((1, 2), -29952) == -29952


def test_updates_stay_within_limit():
    table = low_ply_history()
    rng = random.Random(1)
    for _ in range(2000):
        bonus = rng.randint(-table.limit, table.limit)
        value = table.update((1, 77), bonus)
        assert abs(value) <= table.limit
    assert abs(table[1, 77]) <= table.limit


def test_positive_bonus_never_decreases_entry():
    table = capture_piece_to_history()
    previous = table[2, 3, 4]
    for _ in range(50):
        current = table.update((2, 3, 4), 500)
        assert current >= previous
        previous = current


def test_bonus_beyond_limit_rejected():
    table = butterfly_history()
    with pytest.raises(ValueError):
        table.update((0, 0), 13366)
    with pytest.raises(ValueError):
        table.update((0, 0), -13366)


def test_unused_limit_rejects_updates():
    table = StatsTable((2,), 0)
    with pytest.raises(ValueError):
        table.update((0,), 0)


def test_bad_index_rejected():
    table = piece_to_history()
    with pytest.raises(IndexError):
        table.update((16, 0), 1)
    with pytest.raises(IndexError):
        table.update((0,), 1)


def test_value_out_of_range_rejected():
    table = piece_to_history()
    with pytest.raises(ValueError):
        table[0, 0] = 40000
    with pytest.raises(ValueError):
        table.fill(-40000)


def test_limit_must_fit_entry():
    with pytest.raises(ValueError):
        StatsTable((2,), 40000)


def test_extmove_ordering_by_value():
    assert ExtMove(5, 1) < ExtMove(3, 2)
    assert not ExtMove(5, 2) < ExtMove(3, 2)
    assert max([ExtMove(1, 3), ExtMove(2, 9), ExtMove(3, 4)]).move == 2


def test_partial_insertion_sort_descending_above_limit():
    rng = random.Random(7)
    values = [rng.randint(-1000, 1000) for _ in range(40)]
    moves = [ExtMove(i, v) for i, v in enumerate(values)]
    limit = 0
    partial_insertion_sort(moves, limit)
    above = sorted((v for v in values[1:] if v >= limit), reverse=True)
    head = [m.value for m in moves[: len(above)]]
    # the first element is treated as already sorted
    expected = sorted(above + ([values[0]] if values[0] >= limit else []), reverse=True)
    assert head == expected[: len(head)]
    assert sorted(m.move for m in moves) == list(range(40))


def test_partial_insertion_sort_full_sort_with_low_limit():
    moves = [ExtMove(i, v) for i, v in enumerate([3, -2, 8, 0, 5])]
    partial_insertion_sort(moves, -10**9)
    assert [m.value for m in moves] == [8, 5, 3, 0, -2]


def test_partial_insertion_sort_empty_and_single():
    empty = []
    partial_insertion_sort(empty, 0)
    assert empty == []
    single = [ExtMove(9, -4)]
    partial_insertion_sort(single, 0)
    assert single == [ExtMove(9, -4)]


def test_partial_insertion_sort_promotes_good_move():
    moves = [ExtMove(1, -10), ExtMove(2, 5)]
    partial_insertion_sort(moves, 0)
    assert [m.move for m in moves] == [2, 1]