"""Helpers for embedded sequences (likes, comments, experience, education).

Embedded sequences are ordered most-recent-first. Inserts go to the head;
removals locate one entry with a single scan and drop it by position.
"""

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def prepend(items: Sequence[T], item: T) -> list[T]:
    """Return a new list with ``item`` at the head."""
    return [item, *items]


def index_of(items: Sequence[T], predicate: Callable[[T], bool]) -> int:
    """Index of the first entry matching ``predicate``, or -1."""
    for index, item in enumerate(items):
        if predicate(item):
            return index
    return -1


def remove_at(items: Sequence[T], index: int) -> list[T]:
    """Return a new list without the entry at ``index``."""
    if index < 0 or index >= len(items):
        raise IndexError(f"index {index} out of range for {len(items)} entries")
    return [*items[:index], *items[index + 1 :]]
