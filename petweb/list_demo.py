"""Interactive demonstration of the linked list: store arguments, delete one by index."""

from __future__ import annotations

import re
import sys
from typing import Optional, Sequence

from petweb.linkedlist import LinkedList

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def build_list(args: Sequence[str]) -> LinkedList:
    """Append (position, argument) pairs, positions starting at 1."""
    return LinkedList(enumerate(args, start=1))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for an index and delete the argument stored under it."""
    args = sys.argv[1:] if argv is None else list(argv)
    print("Linked List API example")
    items = build_list(args)
    try:
        answer = input("Index to delete: ")
    except EOFError:
        answer = ""
    index = _atoi(answer)
    node = next((n for n in items.nodes() if n.value[0] == index), None)
    if node is None:
        print(f"Error: Could not find string index ({index})")
        return 1
    position, text = node.value
    print(f"Found string at index ({position}): {text}")
    items.remove(node)
    return 0


if __name__ == "__main__":
    sys.exit(main())