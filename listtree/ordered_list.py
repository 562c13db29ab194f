"""A self-sorting singly linked list of integers.

Each ``OrderedList`` keeps its elements ascending at all times and caches
its element count and total so that two lists can be ordered against each
other without a full scan.  Lists double as the nodes of a
:class:`listtree.tree.ListTree`: the ``left`` and ``right`` slots are only
used once the list has been installed in a tree, at which point the list is
frozen.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Optional, Tuple


class InvalidOperation(RuntimeError):
    """Raised when a list is used in a way its current state does not allow."""


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class _Element:
    __slots__ = ("value", "next")

    def __init__(self, value: int) -> None:
        self.value = value
        self.next: Optional[_Element] = None


class OrderedList:
    """Maintain integers in ascending order with cached ``count`` and ``total``."""

    def __init__(self, *values: int) -> None:
        self._head: Optional[_Element] = None
        self._tail: Optional[_Element] = None
        self._count = 0
        self._total = 0
        self._frozen = False
        self.left: Optional[OrderedList] = None
        self.right: Optional[OrderedList] = None
        for value in values:
            self.insert(value)

    @property
    def count(self) -> int:
        return self._count

    @property
    def total(self) -> int:
        return self._total

    @property
    def head(self) -> Optional[int]:
        return self._head.value if self._head is not None else None

    @property
    def tail(self) -> Optional[int]:
        return self._tail.value if self._tail is not None else None

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def insert(self, value: int) -> None:
        """Insert ``value`` keeping the list ordered.

        Values at or beyond either end are attached in constant time; anything
        else is spliced in before the first element that is not smaller.
        """
        if self._frozen:
            raise InvalidOperation("cannot insert into a list that belongs to a tree")

        element = _Element(value)
        self._count += 1
        self._total += value

        if self._head is None:
            self._head = self._tail = element
            return
        if value <= self._head.value:
            element.next = self._head
            self._head = element
            return
        if value >= self._tail.value:
            self._tail.next = element
            self._tail = element
            return

        previous = self._head
        current = previous.next
        # The tail check above guarantees a larger element exists.
        while current.value < value:
            previous = current
            current = current.next
        previous.next = element
        element.next = current

    def compare(self, other: "OrderedList") -> Ordering:
        """Order ``self`` against ``other``: by count, then total, then element-wise."""
        if self._count != other._count:
            return Ordering.LESS if self._count < other._count else Ordering.GREATER
        if self._total != other._total:
            return Ordering.LESS if self._total < other._total else Ordering.GREATER
        for mine, theirs in zip(self, other):
            if mine != theirs:
                return Ordering.LESS if mine < theirs else Ordering.GREATER
        return Ordering.EQUAL

    def values(self) -> Tuple[int, ...]:
        return tuple(self)

    def __iter__(self) -> Iterator[int]:
        node = self._head
        while node is not None:
            yield node.value
            node = node.next

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedList):
            return NotImplemented
        return self.compare(other) is Ordering.EQUAL

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"OrderedList({list(self)!r})"
