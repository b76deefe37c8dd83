"""Ordering helpers: the left/right bias tie-break and bounded sorted merges."""

import enum
import functools
import logging
from bisect import bisect_left
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from .config import Config


logger = logging.getLogger(__name__)

T = TypeVar("T")
Comparator = Callable[[T, T], int]


class Ordering(enum.IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@functools.total_ordering
class Bias(enum.Enum):
    """Which side of an equal-ranked boundary a position sticks to.

    ``LEFT`` sorts before ``RIGHT``.
    """

    LEFT = "left"
    RIGHT = "right"

    def _rank(self) -> int:
        return 0 if self is Bias.LEFT else 1

    def __lt__(self, other):
        if not isinstance(other, Bias):
            return NotImplemented
        return self._rank() < other._rank()

    def compare(self, other: "Bias") -> Ordering:
        return Ordering((self._rank() > other._rank()) - (self._rank() < other._rank()))


def compare(a: Bias, b: Bias) -> Ordering:
    return a.compare(b)


class Counter:
    """A mutable integer cell for :func:`post_inc`."""

    __slots__ = ("value",)

    def __init__(self, value: int = 0):
        self.value = value

    def __repr__(self) -> str:
        return f"Counter({self.value})"


def post_inc(counter: Counter) -> int:
    """Return the counter's current value, then increment it."""
    prev = counter.value
    counter.value += 1
    return prev


def extend_sorted(container: List[T], new_items: Iterable[T], limit: int, cmp: Comparator) -> None:
    """Merge sorted ``new_items`` into the sorted ``container`` in place.

    Both sequences must already be sorted under ``cmp`` (a three-way
    comparator returning a negative, zero or positive int). The container
    never grows past ``limit``: once full, a new item is admitted only if it
    sorts before the current last element, which is then evicted. Items
    comparing equal to an existing element are dropped, never replaced.

    Each search starts at the previous insertion point, so earlier
    positions are not examined again.
    """
    key = functools.cmp_to_key(cmp)
    start = 0
    for item in new_items:
        index = bisect_left(container, key(item), lo=start, key=key)
        if index < len(container) and cmp(container[index], item) == 0:
            start = index
            continue
        if len(container) < limit:
            container.insert(index, item)
        elif index < len(container):
            container.pop()
            container.insert(index, item)
        start = index


class BoundedSortedList(Generic[T]):
    """A sorted list that owns its comparator and capacity.

    ``limit`` defaults to ``DEFAULT_MERGE_LIMIT`` from :class:`Config`.
    """

    def __init__(self, cmp: Comparator, limit: Optional[int] = None, items: Optional[Iterable[T]] = None):
        if limit is None:
            limit = Config.default_merge_limit()
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self.cmp = cmp
        self.limit = limit
        self._items: List[T] = []
        if items is not None:
            self.extend(sorted(items, key=functools.cmp_to_key(cmp)))

    def extend(self, new_items: Iterable[T]) -> None:
        before = len(self._items)
        extend_sorted(self._items, new_items, self.limit, self.cmp)
        logger.debug(f"Merged batch into bounded list: {before} -> {len(self._items)} items (limit {self.limit})")

    def is_full(self) -> bool:
        return len(self._items) >= self.limit

    def to_list(self) -> List[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self) -> str:
        return f"BoundedSortedList({self._items!r}, limit={self.limit})"
