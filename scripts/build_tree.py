#!/usr/bin/env python3
"""Build a list tree from lines of integers and print it."""

import argparse
import json
import sys
from typing import Iterable, Iterator, List, Optional, TextIO
from uuid import uuid4

from listtree.observability import correlation_id_ctx, logger
from listtree.render import DEFAULT_INDENT, render_text
from listtree.source import STOP_TOKEN, build_tree, read_lists

INTRO = (
    'Set up your first linked list. Type "{stop}" at any time to stop adding linked lists to the tree.\n'
    "Enter a list of integers to add to your first linked list. (Examples: 1 0 9 3 or 29 3 -23 93)\n"
    "The values will be sorted after you press 'enter'.\n"
)
AGAIN = 'Integer list added! Enter another integer list, or type "{stop}" to print the tree.\n'


def _prompted(stream: TextIO, out: TextIO, stop: str) -> Iterator[str]:
    out.write(INTRO.format(stop=stop))
    out.flush()
    for line in stream:
        yield line
        if line.strip():
            out.write(AGAIN.format(stop=stop))
            out.flush()


def _collect(lines: Iterable[str], stop: str) -> List[List[int]]:
    return list(read_lists(lines, stop))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sort lists of integers into a list tree")
    parser.add_argument("input", nargs="?", help="File with one list per line (default: stdin)")
    parser.add_argument("--stop", default=STOP_TOKEN, help="Token that ends the input")
    parser.add_argument("--indent", type=int, default=DEFAULT_INDENT, help="Spaces per tree level")
    parser.add_argument("--json", action="store_true", help="Print the traversal as JSON")
    args = parser.parse_args(argv)

    if args.indent < 0:
        parser.error("--indent must not be negative")

    correlation_id_ctx.set(str(uuid4()))

    try:
        if args.input:
            with open(args.input, "r", encoding="utf-8") as f:
                sequences = _collect(f, args.stop)
        elif sys.stdin.isatty():
            sequences = _collect(_prompted(sys.stdin, sys.stderr, args.stop), args.stop)
        else:
            sequences = _collect(sys.stdin, args.stop)
    except OSError as exc:
        parser.error(f"cannot read {args.input}: {exc.strerror}")
    except ValueError as exc:
        parser.error(str(exc))

    if not sequences:
        print("Stopping...", file=sys.stderr)
        return 1

    tree = build_tree(sequences)
    logger.info("tree built", extra={"size": tree.size})

    if args.json:
        entries = [
            {"depth": depth, "values": list(values) if values is not None else None}
            for depth, values in tree.traverse()
        ]
        print(json.dumps(entries))
    else:
        sys.stdout.write(render_text(tree.traverse(), args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
