"""Tests for OrderedSelectionSet."""

import pytest

from inetgen.random_stream import RandomStream
from inetgen.selection import OrderedSelectionSet


def test_initial_state() -> None:
    s = OrderedSelectionSet(3, 7)
    assert s.size() == 5
    assert s.pseudo_size() == 5
    assert list(s) == [3, 4, 5, 6, 7]
    assert len(s) == 5


def test_choose_at_removes_positional_value() -> None:
    s = OrderedSelectionSet(1, 5)
    assert s.choose_at(2) == 2
    assert list(s) == [1, 3, 4, 5]
    assert s.choose_at(2) == 3
    assert s.choose_at(3) == 5
    assert list(s) == [1, 4]
    assert s.size() == 2
    assert s.pseudo_size() == 2


@pytest.mark.parametrize("position", [0, -1, 6, 100])
def test_choose_at_out_of_range_returns_none_without_mutation(position: int) -> None:
    s = OrderedSelectionSet(1, 5)
    assert s.choose_at(position) is None
    assert s.size() == 5
    assert s.pseudo_size() == 5


def test_remove_value_absent_still_decrements_pseudo_size() -> None:
    s = OrderedSelectionSet(10, 14)
    s.remove_value(12)
    assert 12 not in s
    assert s.size() == 4
    assert s.pseudo_size() == 4

    s.remove_value(12)  # already gone
    s.remove_value(99)  # never present
    assert s.size() == 4
    assert s.pseudo_size() == 2


def test_pseudo_size_clamps_at_zero() -> None:
    s = OrderedSelectionSet(1, 1)
    for _ in range(3):
        s.remove_value(42)
    assert s.pseudo_size() == 0
    assert s.size() == 1


def test_empty_range() -> None:
    s = OrderedSelectionSet(5, 4)
    assert s.size() == 0
    assert s.pseudo_size() == 0
    assert s.choose_at(1) is None
    assert list(s) == []


def test_contains() -> None:
    s = OrderedSelectionSet(1, 3)
    s.remove_value(2)
    assert 1 in s
    assert 2 not in s
    assert 4 not in s
    assert "1" not in s


def test_random_draws_exhaust_range_without_repeats() -> None:
    """Drawing size() times yields every value exactly once."""
    rng = RandomStream(77)
    s = OrderedSelectionSet(100, 356)
    drawn = []
    while s.size():
        drawn.append(s.choose_at(rng.next(1, s.size())))
    assert sorted(drawn) == list(range(100, 357))
    assert s.choose_at(1) is None


def test_matches_sorted_list_model() -> None:
    """Mixed operations agree with a plain sorted-list model."""
    rng = RandomStream(4242)
    s = OrderedSelectionSet(1, 200)
    model = list(range(1, 201))
    for step in range(300):
        if step % 3 == 0:
            value = rng.next(1, 220)
            s.remove_value(value)
            if value in model:
                model.remove(value)
        else:
            position = rng.next(0, len(model) + 1)
            expected = model.pop(position - 1) if 1 <= position <= len(model) else None
            assert s.choose_at(position) == expected
        assert list(s) == model
        assert s.size() == len(model)


def test_large_range_is_created_lazily() -> None:
    s = OrderedSelectionSet(1, 10**12)
    assert s.size() == 10**12
    assert s.choose_at(10**12) == 10**12
    assert s.choose_at(1) == 1
    s.remove_value(2)
    assert s.choose_at(1) == 3
    assert s.choose_at(5 * 10**11) == 5 * 10**11 + 3
    assert s.size() == 10**12 - 5
    assert s.pseudo_size() == 10**12 - 5
