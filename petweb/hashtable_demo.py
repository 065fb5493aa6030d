"""Interactive demonstration of the hash table: store arguments, delete one by index."""

from __future__ import annotations

import re
import sys
from typing import Optional, Sequence

from petweb.hashtable import HashTable, hash_u32

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _u32_eq(key1: int, key2: int) -> bool:
    return (key1 & 0xFFFFFFFF) == (key2 & 0xFFFFFFFF)


def build_table(args: Sequence[str]) -> HashTable:
    """Store each argument under its 1-based position."""
    table = HashTable(0, hash_u32, _u32_eq, None, None)
    for index, text in enumerate(args, start=1):
        table.insert(index, text)
    return table


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for an index and delete the argument stored under it."""
    args = sys.argv[1:] if argv is None else list(argv)
    print("Hashtable API example")
    table = build_table(args)
    try:
        answer = input("Index to delete: ")
    except EOFError:
        answer = ""
    index = _atoi(answer)
    text = table.search(index)
    if text is None:
        print(f"Error: Could not find string index ({index})")
        return 1
    print(f"Found string at index ({index}): {text}")
    table.remove(index)
    return 0


if __name__ == "__main__":
    sys.exit(main())