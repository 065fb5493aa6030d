"""Chained hash table with a prime-sized bucket array and a cursor-style iterator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

GOLDEN_RATIO_PRIME_32 = 0x9E370001

PRIMES = (
    53, 97, 193, 389, 769, 1543, 3079,
    6151, 12289, 24593, 49157, 98317, 196613, 393241,
    786433, 1572869, 3145739, 6291469, 12582917, 25165843, 50331653,
    100663319, 201326611, 402653189, 805306457, 1610612741,
)

# Entry limits for each prime size, for a maximum load factor of 0.65.
LOAD_LIMITS = (
    35, 64, 126, 253, 500, 1003, 2002, 3999, 7988,
    15986, 31953, 63907, 127799, 255607, 511182, 1022365, 2044731, 4089455,
    8178897, 16357798, 32715575, 65431158, 130862298, 261724573, 523449198, 1046898282,
)

MAX_MIN_SIZE = 1 << 30


def hash_u32(val: int) -> int:
    """Multiplicative hash of the low 32 bits of an integer key."""
    return ((val & _MASK32) * GOLDEN_RATIO_PRIME_32) & _MASK32


def hash_ptr(val: int) -> int:
    """Hash a 64-bit integer key, keeping the high 32 bits of the mix."""
    h = val & _MASK64
    n = h
    n = (n << 18) & _MASK64
    h = (h - n) & _MASK64
    n = (n << 33) & _MASK64
    h = (h - n) & _MASK64
    n = (n << 3) & _MASK64
    h = (h + n) & _MASK64
    n = (n << 3) & _MASK64
    h = (h - n) & _MASK64
    n = (n << 4) & _MASK64
    h = (h + n) & _MASK64
    n = (n << 2) & _MASK64
    h = (h + n) & _MASK64
    return (h >> 32) & _MASK32


def cmp_ptr(val1: Any, val2: Any) -> bool:
    """Identity-style key equality."""
    return val1 == val2


def hash_buffer(msg: bytes) -> int:
    """ELF-style hash of a byte buffer."""
    h = 0
    for i, byte in enumerate(msg):
        h = ((h << 4) + byte + i) & _MASK32
        temp = h & 0xF0000000
        if temp:
            h ^= temp >> 24
        h &= ~temp & _MASK32
    return h


@dataclass
class _Entry:
    key: Any
    value: Any
    hash: int


class HashTable:
    """Hash table keyed through user-supplied hash and equality functions.

    Duplicate keys are allowed on insert; lookups find the most recent one
    until the table grows, after which their order is reversed.
    """

    def __init__(
        self,
        min_size: int = 0,
        hash_fn: Callable[[Any], int] = hash_u32,
        eq_fn: Callable[[Any, Any], Any] = cmp_ptr,
        val_free_fn: Optional[Callable[[Any], None]] = None,
        key_free_fn: Optional[Callable[[Any], None]] = None,
    ) -> None:
        if min_size > MAX_MIN_SIZE:
            raise ValueError(f"requested size {min_size} exceeds {MAX_MIN_SIZE}")
        prime_index = next(
            (i for i, p in enumerate(PRIMES) if p > min_size), len(PRIMES)
        )
        size = PRIMES[prime_index] if prime_index < len(PRIMES) else PRIMES[0]
        # A request beyond the largest prime keeps the smallest table, at the
        # top of the growth ladder.
        self._prime_index = min(prime_index, len(PRIMES) - 1)
        self._buckets: list[list[_Entry]] = [[] for _ in range(size)]
        self._count = 0
        self._load_limit = LOAD_LIMITS[self._prime_index]
        self._hash_fn = hash_fn
        self._eq_fn = eq_fn
        self._val_free_fn = val_free_fn
        self._key_free_fn = key_free_fn

    def _do_hash(self, key: Any) -> int:
        i = self._hash_fn(key) & _MASK32
        i = (i + (~(i << 9) & _MASK32)) & _MASK32
        i ^= ((i >> 14) | (i << 18)) & _MASK32
        i = (i + (i << 4)) & _MASK32
        i ^= ((i >> 10) | (i << 22)) & _MASK32
        return i

    def _index_for(self, hash_value: int) -> int:
        return hash_value % len(self._buckets)

    def _find(self, key: Any) -> tuple[int, int, Optional[_Entry]]:
        hash_value = self._do_hash(key)
        index = self._index_for(hash_value)
        for pos, entry in enumerate(self._buckets[index]):
            if entry.hash == hash_value and self._eq_fn(key, entry.key):
                return index, pos, entry
        return index, -1, None

    def _expand(self) -> bool:
        if self._prime_index == len(PRIMES) - 1:
            return False
        self._prime_index += 1
        new_size = PRIMES[self._prime_index]
        new_buckets: list[list[_Entry]] = [[] for _ in range(new_size)]
        for bucket in self._buckets:
            for entry in bucket:
                new_buckets[entry.hash % new_size].insert(0, entry)
        self._buckets = new_buckets
        self._load_limit = LOAD_LIMITS[self._prime_index]
        return True

    def insert(self, key: Any, value: Any) -> None:
        """Add a key/value pair, growing the table past its load limit."""
        self._count += 1
        if self._count > self._load_limit:
            # Failing to grow is not fatal: the entry still goes in.
            self._expand()
        hash_value = self._do_hash(key)
        self._buckets[self._index_for(hash_value)].insert(
            0, _Entry(key, value, hash_value)
        )

    def change(self, key: Any, value: Any) -> None:
        """Replace the value stored under key, releasing the old one."""
        _, _, entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        if self._val_free_fn is not None:
            self._val_free_fn(entry.value)
        entry.value = value

    def inc(self, key: Any, value: Any) -> None:
        """Add value to the number stored under key."""
        _, _, entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        entry.value += value

    def dec(self, key: Any, value: Any) -> None:
        """Subtract value from the number stored under key."""
        _, _, entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        entry.value -= value

    def search(self, key: Any) -> Any:
        """Return the value stored under key, or None."""
        _, _, entry = self._find(key)
        return None if entry is None else entry.value

    def cond_remove(self, key: Any, cond: Optional[Callable[[Any], bool]]) -> Any:
        """Remove key if cond accepts its value; return the value or None."""
        index, pos, entry = self._find(key)
        if entry is None:
            return None
        if cond is not None and cond(entry.value) is not True:
            return None
        del self._buckets[index][pos]
        self._count -= 1
        if self._key_free_fn is not None:
            self._key_free_fn(entry.key)
        return entry.value

    def remove(self, key: Any) -> Any:
        """Remove key and return its value, or None if absent."""
        return self.cond_remove(key, None)

    def clear(self) -> None:
        """Drop every entry, releasing keys and values through the free functions."""
        for bucket in self._buckets:
            for entry in bucket:
                if self._key_free_fn is not None:
                    self._key_free_fn(entry.key)
                if self._val_free_fn is not None:
                    self._val_free_fn(entry.value)
            bucket.clear()
        self._count = 0

    def iterator(self) -> "HashTableIterator":
        """Return a cursor positioned before the first entry."""
        return HashTableIterator(self)

    def capacity(self) -> int:
        """Number of buckets."""
        return len(self._buckets)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        for bucket in self._buckets:
            for entry in bucket:
                yield entry.key, entry.value


class HashTableIterator:
    """Cursor over a HashTable that can remove the entry it points at."""

    def __init__(self, table: HashTable) -> None:
        self._table = table
        self._index = table.capacity()
        self._pos = 0
        self._entry: Optional[_Entry] = None

    def _current(self) -> _Entry:
        if self._entry is None:
            raise LookupError("iterator is not positioned on an entry")
        return self._entry

    def key(self) -> Any:
        """Key of the current entry."""
        return self._current().key

    def value(self) -> Any:
        """Value of the current entry."""
        return self._current().value

    def _seek_from(self, start: int) -> bool:
        buckets = self._table._buckets
        for j in range(start, len(buckets)):
            if buckets[j]:
                self._index = j
                self._pos = 0
                self._entry = buckets[j][0]
                return True
        self._index = len(buckets)
        self._entry = None
        return False

    def advance(self) -> bool:
        """Move to the first or next entry; False once the end is reached."""
        if self._entry is None:
            return self._seek_from(0)
        bucket = self._table._buckets[self._index]
        if self._pos + 1 < len(bucket):
            self._pos += 1
            self._entry = bucket[self._pos]
            return True
        return self._seek_from(self._index + 1)

    def remove(self) -> bool:
        """Remove the current entry and move to the next; False at the end."""
        entry = self._current()
        table = self._table
        bucket = table._buckets[self._index]
        del bucket[self._pos]
        table._count -= 1
        if table._key_free_fn is not None:
            table._key_free_fn(entry.key)
        if self._pos < len(bucket):
            self._entry = bucket[self._pos]
            return True
        return self._seek_from(self._index + 1)

    def search(self, table: HashTable, key: Any) -> bool:
        """Point at the entry for key in table; False if it is absent."""
        index, pos, entry = table._find(key)
        if entry is None:
            return False
        self._table = table
        self._index = index
        self._pos = pos
        self._entry = entry
        return True