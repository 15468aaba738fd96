"""
Unit tests for studio/ordering.py — drag-and-drop splice and renumbering.
"""
from dataclasses import dataclass

import pytest

from linkinbio.studio.ordering import array_move, plan_explicit_order, plan_reorder, renumber


@dataclass
class Item:
    id: str
    sort_order: int


def _items(*ids: str) -> list:
    return [Item(item_id, index) for index, item_id in enumerate(ids)]


# ---------------------------------------------------------------------------
# array_move
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("src, dst, expected", [
    (3, 0, ["D", "A", "B", "C"]),
    (0, 3, ["B", "C", "D", "A"]),
    (1, 2, ["A", "C", "B", "D"]),
    (2, 2, ["A", "B", "C", "D"]),
    (0, 99, ["B", "C", "D", "A"]),
])
def test_array_move(src: int, dst: int, expected: list) -> None:
    original = ["A", "B", "C", "D"]
    assert array_move(original, src, dst) == expected
    assert original == ["A", "B", "C", "D"], "input must not be mutated"


def test_array_move_empty_and_out_of_range() -> None:
    assert array_move([], 0, 0) == []
    with pytest.raises(IndexError):
        array_move(["A"], 5, 0)


# ---------------------------------------------------------------------------
# plan_reorder
# ---------------------------------------------------------------------------

def test_plan_reorder_moves_last_to_first() -> None:
    moved, updates = plan_reorder(_items("A", "B", "C", "D"), active_id="D", over_id="A")
    assert [item.id for item in moved] == ["D", "A", "B", "C"]
    assert updates == [("D", 0), ("A", 1), ("B", 2), ("C", 3)]


def test_plan_reorder_only_touches_changed_positions() -> None:
    _, updates = plan_reorder(_items("A", "B", "C", "D"), active_id="B", over_id="C")
    assert updates == [("C", 1), ("B", 2)]


@pytest.mark.parametrize("active, over", [("A", "A"), ("X", "A"), ("A", "X")])
def test_plan_reorder_noop(active: str, over: str) -> None:
    items = _items("A", "B", "C")
    moved, updates = plan_reorder(items, active, over)
    assert [item.id for item in moved] == ["A", "B", "C"]
    assert updates == []


def test_renumber_fixes_gaps_and_duplicates() -> None:
    items = [Item("A", 0), Item("B", 0), Item("C", 7)]
    assert renumber(items) == [("B", 1), ("C", 2)]


# ---------------------------------------------------------------------------
# plan_explicit_order
# ---------------------------------------------------------------------------

def test_plan_explicit_order() -> None:
    updates = plan_explicit_order(_items("A", "B", "C"), ["C", "A", "B"])
    assert updates == [("C", 0), ("A", 1), ("B", 2)]


@pytest.mark.parametrize("ordered, message", [
    (["A", "A", "B"], "orderedIds contains duplicates"),
    (["A", "B", "C", "Z"], "orderedIds contains unknown ids: Z"),
    (["A", "B"], "orderedIds is missing ids: C"),
])
def test_plan_explicit_order_rejects_non_permutations(ordered: list, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        plan_explicit_order(_items("A", "B", "C"), ordered)
