"""
ordering.py — sort-order arithmetic for links and blocks.

Items are displayed in ascending sort_order. A drag gesture moves one item
(splice: remove, then reinsert at the drop index); afterwards every item whose
position differs from its stored sort_order gets sort_order := position.

  array_move(["A","B","C","D"], 3, 0)   → ["D","A","B","C"]
  plan_reorder(items, active="D", over="A")
      → moved list + [("D",0), ("A",1), ("B",2), ("C",3)] minus unchanged entries

Read side order is (sort_order, created_at, id) so equal sort_order values
still come back in a stable, documented order.
"""
from typing import Any, Dict, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """Return a copy of items with the element at from_index reinserted at to_index."""
    moved = list(items)
    if not moved:
        return moved
    if not (0 <= from_index < len(moved)):
        raise IndexError(f"from_index {from_index} out of range for {len(moved)} items")
    to_index = max(0, min(to_index, len(moved) - 1))
    element = moved.pop(from_index)
    moved.insert(to_index, element)
    return moved


def renumber(items: Sequence[Any]) -> List[Tuple[str, int]]:
    """(id, new_sort_order) for every item whose position differs from its sort_order."""
    return [
        (item.id, index)
        for index, item in enumerate(items)
        if item.sort_order != index
    ]


def plan_reorder(
    items: Sequence[Any],
    active_id: str,
    over_id: str,
) -> Tuple[List[Any], List[Tuple[str, int]]]:
    """
    Plan a drag of active_id onto the slot of over_id.

    items must already be in display order and expose .id and .sort_order.
    Returns the moved list and the sort_order updates it requires. A drop on
    itself, or an unknown id, yields no updates.
    """
    ids = [item.id for item in items]
    if active_id == over_id or active_id not in ids or over_id not in ids:
        return list(items), []
    moved = array_move(items, ids.index(active_id), ids.index(over_id))
    return moved, renumber(moved)


def plan_explicit_order(
    current: Sequence[Any],
    ordered_ids: Sequence[str],
) -> List[Tuple[str, int]]:
    """
    Updates that make sort_order equal to each id's position in ordered_ids.

    ordered_ids must name every item in current exactly once.

    Raises:
        ValueError: duplicate ids, unknown ids, or missing ids.
    """
    if len(set(ordered_ids)) != len(ordered_ids):
        raise ValueError("orderedIds contains duplicates")
    by_id: Dict[str, Any] = {item.id: item for item in current}
    unknown = [item_id for item_id in ordered_ids if item_id not in by_id]
    if unknown:
        raise ValueError(f"orderedIds contains unknown ids: {', '.join(unknown)}")
    missing = [item_id for item_id in by_id if item_id not in set(ordered_ids)]
    if missing:
        raise ValueError(f"orderedIds is missing ids: {', '.join(missing)}")
    return renumber([by_id[item_id] for item_id in ordered_ids])
