"""Sorted insertion into plain lists.

The search fringe is kept as an always-sorted list rather than a heap, so the
cost of a single insertion matters. Four index-insertion strategies are kept
side by side; they produce identical lists and differ only in how they move
memory around. ``insert_at`` is the one used everywhere else.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


def _check_index(lst: list, index: int):
    assert 0 <= index <= len(lst), f"index: {index} exceeds list length of {len(lst)}"


def insert_at_simple(lst: list[T], element: T, index: int):
    """Copy-before + element + copy-after, written back into ``lst``."""
    _check_index(lst, index)
    lst[:] = lst[:index] + [element] + lst[index:]


def insert_at_shift(lst: list[T], element: T, index: int):
    """Rotate the shorter side out of the way one slot at a time."""
    _check_index(lst, index)
    from_back = index >= len(lst) // 2
    n = len(lst) - index if from_back else index
    if from_back:
        for _ in range(n):
            lst.insert(0, lst.pop())
        lst.append(element)
        for _ in range(n):
            lst.append(lst.pop(0))
    else:
        for _ in range(n):
            lst.append(lst.pop(0))
        lst.insert(0, element)
        for _ in range(n):
            lst.insert(0, lst.pop())


def insert_at_block_move(lst: list[T], element: T, index: int):
    """Grow at the tail, move the block after ``index`` forward by one."""
    _check_index(lst, index)
    if index == len(lst):
        lst.append(element)
        return
    if index == 0:
        lst.insert(0, element)
        return
    lst.append(lst[-1])
    lst[index + 1:] = lst[index:-1]
    lst[index] = element


def insert_at_optimized(lst: list[T], element: T, index: int):
    """Grow at whichever end is nearer ``index`` and move only that span."""
    _check_index(lst, index)
    if index == len(lst):
        lst.append(element)
        return
    if index == 0:
        lst.insert(0, element)
        return
    if index > len(lst) // 2:
        lst.append(element)
        lst[index + 1:] = lst[index:-1]
    else:
        lst.insert(0, element)
        lst[:index] = lst[1:index + 1]
    lst[index] = element


insert_at = insert_at_optimized

INSERT_STRATEGIES: dict[str, Callable[[list, Any, int], None]] = {
    "simple": insert_at_simple,
    "shift": insert_at_shift,
    "block_move": insert_at_block_move,
    "optimized": insert_at_optimized,
}


def _identity(value):
    return value


def find_insert_index(lst: list[T], element: T, key: Callable[[T], Any] = _identity, descending: bool = False) -> int:
    """Binary search for the slot after every element that ties with ``element``."""
    val = key(element)
    lo, hi = 0, len(lst)
    while lo < hi:
        mid = (lo + hi) // 2
        mid_val = key(lst[mid])
        goes_before = mid_val < val if descending else val < mid_val
        if goes_before:
            hi = mid
        else:
            lo = mid + 1
    return lo


def insert_sorted(lst: list[T], element: T, key: Callable[[T], Any] = _identity, descending: bool = False):
    """Insert ``element`` into ``lst`` (already sorted by ``key``) keeping it sorted.

    Ascending by default; ``descending=True`` for lists ordered highest to
    lowest. Ties land after the existing equal elements.
    """
    insert_at(lst, element, find_insert_index(lst, element, key, descending))


class Fringe(Generic[T]):
    """Mutable ordered collection of pending search nodes.

    Supports sorted insertion (priority-ordered exploration) as well as plain
    front insertion, which turns it into a depth-first stack.
    """

    __slots__ = ("items", "key")

    def __init__(self, items: list[T] | None = None, key: Callable[[T], Any] = _identity):
        self.items: list[T] = list(items) if items else []
        self.key = key

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    def push_sorted(self, item: T):
        insert_sorted(self.items, item, self.key)

    def push_front(self, item: T):
        insert_at(self.items, item, 0)

    def pop_front(self) -> T:
        return self.items.pop(0)

    def pop_back(self) -> T:
        return self.items.pop()
