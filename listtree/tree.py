"""Binary search tree whose keys are whole ordered lists."""
from __future__ import annotations

import logging
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .observability import inc_list_inserted, inc_traversal
from .ordered_list import InvalidOperation, OrderedList, Ordering

logger = logging.getLogger("listtree.tree")


class TraversalEntry(NamedTuple):
    depth: int
    values: Optional[Tuple[int, ...]]

    @property
    def is_marker(self) -> bool:
        return self.values is None


class ListTree:
    """Unbalanced BST ordered by :meth:`OrderedList.compare`.

    Lists that compare GREATER than a node go left of it, everything else
    (including exact duplicates) goes right.  The first list inserted stays
    the root for the lifetime of the tree.
    """

    def __init__(self) -> None:
        self.root: Optional[OrderedList] = None
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self.root is None

    def insert(self, lst: OrderedList) -> int:
        """Install ``lst`` as a new leaf, freeze it and return its depth."""
        if lst.frozen:
            raise InvalidOperation("list is already installed in a tree")

        depth = 1
        if self.root is None:
            self.root = lst
        else:
            node = self.root
            while True:
                depth += 1
                go_right = node.compare(lst) is not Ordering.GREATER
                child = node.right if go_right else node.left
                if child is None:
                    if go_right:
                        node.right = lst
                    else:
                        node.left = lst
                    break
                node = child

        lst.freeze()
        self._size += 1
        inc_list_inserted(lst.count)
        logger.debug(
            "list inserted",
            extra={"count": lst.count, "total": lst.total, "depth": depth},
        )
        return depth

    def locate(self, lst: OrderedList) -> Optional[int]:
        """Return the depth of the node holding ``lst``, or ``None``."""
        node = self.root
        depth = 1
        while node is not None:
            if node is lst:
                return depth
            node = node.left if node.compare(lst) is Ordering.GREATER else node.right
            depth += 1
        return None

    def traverse(self) -> Iterator[TraversalEntry]:
        """Yield a preorder walk, with a marker entry for every absent child."""
        inc_traversal()
        stack: List[Tuple[int, Optional[OrderedList]]] = [(1, self.root)]
        while stack:
            depth, node = stack.pop()
            if node is None:
                yield TraversalEntry(depth, None)
                continue
            yield TraversalEntry(depth, node.values())
            stack.append((depth + 1, node.right))
            stack.append((depth + 1, node.left))

    def __iter__(self) -> Iterator[OrderedList]:
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._size

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ListTree(size={self._size})"
