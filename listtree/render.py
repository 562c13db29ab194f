"""Indented text presentation of a tree traversal."""
from __future__ import annotations

import os
from typing import Iterable, Iterator, List

from jinja2 import BaseLoader, Environment

from .tree import TraversalEntry

DEFAULT_INDENT = int(os.getenv("LISTTREE_INDENT", "2"))

TPL = Environment(loader=BaseLoader(), keep_trailing_newline=True).from_string(
    "{% if title %}{{ title }}\n{% endif %}{% for line in lines %}{{ line }}\n{% endfor %}"
)


def render_lines(entries: Iterable[TraversalEntry], indent: int = DEFAULT_INDENT) -> Iterator[str]:
    """Yield the console lines for a preorder traversal.

    Every node announces its two subtrees with ``Left children:`` and
    ``Right children:`` labels; since the traversal is preorder, the labels
    still owed can be kept on a stack and popped as entries arrive.
    """
    if indent < 0:
        raise ValueError("indent must not be negative")
    pending: List[str] = []
    for depth, values in entries:
        pad = " " * (indent * (depth - 1))
        if pending:
            parent_pad = " " * (indent * (depth - 2))
            yield f"{parent_pad} {pending.pop()} children:"
        if values is None:
            yield f"{pad} No child."
            continue
        yield f"{pad}Level {depth}: " + "".join(f"{value} " for value in values)
        pending.append("Right")
        pending.append("Left")


def render_text(entries: Iterable[TraversalEntry], indent: int = DEFAULT_INDENT, title: str = "") -> str:
    return TPL.render(lines=render_lines(entries, indent), title=title)
