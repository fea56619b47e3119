
from typing import List, Optional, Sequence

SORT_ORDER_PREFIX = "sort_order_"


def sort_order_key(context: str) -> str:
    return f"{SORT_ORDER_PREFIX}{context}"


def merge_sort_order(saved: Optional[Sequence[str]], default_ids: Sequence[str]) -> List[str]:
    """
    Apply a saved order to the current set of ids.

    Saved ids that still exist keep their saved order; ids the saved order
    doesn't know about are appended in their default order.
    """
    if not isinstance(saved, (list, tuple)):
        return list(default_ids)
    known = set(default_ids)
    seen = set()
    merged = []
    for item in saved:
        if item in known and item not in seen:
            merged.append(item)
            seen.add(item)
    merged.extend(item for item in default_ids if item not in seen)
    return merged


def move_item(ids: Sequence[str], old_index: int, new_index: int) -> List[str]:
    """Move one element, shifting the ones in between (drag-and-drop semantics)."""
    items = list(ids)
    if not items:
        return items
    if not 0 <= old_index < len(items):
        raise IndexError(f"old_index {old_index} out of range")
    new_index = max(0, min(new_index, len(items) - 1))
    items.insert(new_index, items.pop(old_index))
    return items
