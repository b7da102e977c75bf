"""
Ordered list editing shared by manual shelf selections and page shelves.

Drag-and-drop reduces to two ids (the dragged item and the item it was
dropped over); everything here works from those ids alone. Functions
never mutate their input and always return tuples.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from typing import Any, TypeVar

from app.features.shelf_composition.domain.models import EditResult, Rejection

T = TypeVar("T")


def item_id(item: Any) -> Hashable:
    """Identity of an item: its ``id`` attribute, or the item itself for bare ids."""
    return getattr(item, "id", item)


def index_of(items: Sequence[T], target: Hashable, key: Callable[[T], Hashable] = item_id) -> int:
    for index, item in enumerate(items):
        if key(item) == target:
            return index
    return -1


def move(
    items: Sequence[T],
    active_id: Hashable,
    over_id: Hashable,
    key: Callable[[T], Hashable] = item_id,
) -> tuple[T, ...]:
    """Move ``active_id`` to the position currently held by ``over_id``."""
    items = tuple(items)
    if active_id == over_id:
        return items

    old_index = index_of(items, active_id, key)
    new_index = index_of(items, over_id, key)
    if old_index == -1 or new_index == -1:
        return items

    reordered = list(items)
    reordered.insert(new_index, reordered.pop(old_index))
    return tuple(reordered)


def append(
    items: Sequence[T],
    item: T,
    key: Callable[[T], Hashable] = item_id,
) -> EditResult[T]:
    items = tuple(items)
    new_key = key(item)
    if any(key(existing) == new_key for existing in items):
        return EditResult(items=items, rejection=Rejection.DUPLICATE_ITEM)
    return EditResult(items=items + (item,))


def remove(
    items: Sequence[T],
    target: Hashable,
    key: Callable[[T], Hashable] = item_id,
) -> tuple[T, ...]:
    return tuple(item for item in items if key(item) != target)


def reindex(items: Sequence[T]) -> tuple[T, ...]:
    """Rewrite each item's ``order`` to its position (0..n-1).

    Items must be pydantic models with an ``order`` field. Items already
    in place are kept as-is.
    """
    return tuple(
        item if item.order == position else item.model_copy(update={"order": position})
        for position, item in enumerate(items)
    )
