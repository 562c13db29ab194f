"""Turn lines of text into ordered lists and feed them into a tree."""
from __future__ import annotations

import os
from typing import Iterable, Iterator, List

from .observability import inc_invalid_input, logger
from .ordered_list import InvalidOperation, OrderedList
from .tree import ListTree

STOP_TOKEN = os.getenv("LISTTREE_STOP_TOKEN", "stop")


def parse_line(line: str, lineno: int = 1) -> List[int]:
    values = []
    for token in line.split():
        try:
            values.append(int(token))
        except ValueError:
            inc_invalid_input()
            raise ValueError(f"line {lineno}: {token!r} is not an integer") from None
    return values


def read_lists(lines: Iterable[str], stop_token: str = STOP_TOKEN) -> Iterator[List[int]]:
    """Yield one integer sequence per non-blank line until ``stop_token``."""
    stop = stop_token.strip().lower()
    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        if text.lower() == stop:
            logger.debug("stop token reached", extra={"line": lineno})
            return
        if not text:
            continue
        yield parse_line(text, lineno)


def build_list(values: Iterable[int]) -> OrderedList:
    """Seed a list with the first value and fold the remaining ones in."""
    it = iter(values)
    try:
        seed = next(it)
    except StopIteration:
        raise InvalidOperation("a list needs at least one value") from None
    lst = OrderedList(seed)
    for value in it:
        lst.insert(value)
    return lst


def build_tree(sequences: Iterable[Iterable[int]], tree: ListTree | None = None) -> ListTree:
    tree = tree if tree is not None else ListTree()
    for values in sequences:
        tree.insert(build_list(values))
    return tree
