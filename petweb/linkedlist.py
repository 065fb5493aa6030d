"""Circular doubly linked list and single-headed hash-chain list."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class ListNode(Generic[T]):
    """A node of a LinkedList, handed out so it can be removed or moved later."""

    __slots__ = ("value", "prev", "next", "_owner")

    def __init__(self, value: T) -> None:
        self.value = value
        self.prev: Optional[ListNode[T]] = None
        self.next: Optional[ListNode[T]] = None
        self._owner: Optional[LinkedList[T]] = None

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


class LinkedList(Generic[T]):
    """Circular doubly linked list built around a sentinel head.

    Insertion at either end, removal and moves between lists are O(1);
    iteration tolerates removal of the node currently being visited.
    """

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._head: ListNode[Any] = ListNode(None)
        self._head.prev = self._head
        self._head.next = self._head
        self._len = 0
        for value in values:
            self.add_tail(value)

    def _check(self, node: ListNode[T]) -> None:
        if node._owner is not self:
            raise ValueError("node does not belong to this list")

    def _insert(self, node: ListNode[T], prev: ListNode[Any], nxt: ListNode[Any]) -> None:
        nxt.prev = node
        node.next = nxt
        node.prev = prev
        prev.next = node
        node._owner = self
        self._len += 1

    def _unlink(self, node: ListNode[T]) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = None
        node._owner = None
        self._len -= 1

    def add(self, value: T) -> ListNode[T]:
        """Insert value at the front and return its node."""
        node = ListNode(value)
        self._insert(node, self._head, self._head.next)
        return node

    def add_tail(self, value: T) -> ListNode[T]:
        """Insert value at the back and return its node."""
        node = ListNode(value)
        self._insert(node, self._head.prev, self._head)
        return node

    def remove(self, node: ListNode[T]) -> T:
        """Unlink node from this list and return its value."""
        self._check(node)
        self._unlink(node)
        return node.value

    def move(self, node: ListNode[T], other: "LinkedList[T]") -> None:
        """Take node out of this list and put it at the front of other."""
        self._check(node)
        self._unlink(node)
        other._insert(node, other._head, other._head.next)

    def move_tail(self, node: ListNode[T], other: "LinkedList[T]") -> None:
        """Take node out of this list and put it at the back of other."""
        self._check(node)
        self._unlink(node)
        other._insert(node, other._head.prev, other._head)

    def splice(self, other: "LinkedList[T]") -> None:
        """Move every node of other to the front of this list, emptying other."""
        if other is self:
            raise ValueError("cannot splice a list into itself")
        if not other:
            return
        for node in other.nodes():
            node._owner = self
        first = other._head.next
        last = other._head.prev
        at = self._head.next
        first.prev = self._head
        self._head.next = first
        last.next = at
        at.prev = last
        self._len += other._len
        other._head.next = other._head
        other._head.prev = other._head
        other._len = 0

    def first(self) -> T:
        """Value at the front of the list."""
        if not self:
            raise IndexError("first() on an empty list")
        return self._head.next.value

    def nodes(self) -> Iterator[ListNode[T]]:
        """Yield the nodes front to back; the current node may be removed."""
        node = self._head.next
        while node is not self._head:
            nxt = node.next
            yield node
            node = nxt

    def __iter__(self) -> Iterator[T]:
        for node in self.nodes():
            yield node.value

    def __reversed__(self) -> Iterator[T]:
        node = self._head.prev
        while node is not self._head:
            prev = node.prev
            yield node.value
            node = prev

    def __len__(self) -> int:
        return self._len

    def __bool__(self) -> bool:
        return self._head.next is not self._head

    def __repr__(self) -> str:
        return f"LinkedList({list(self)!r})"


class HListNode(Generic[T]):
    """A node of an HList."""

    __slots__ = ("value", "prev", "next", "_owner")

    def __init__(self, value: T) -> None:
        self.value = value
        self.prev: Optional[HListNode[T]] = None
        self.next: Optional[HListNode[T]] = None
        self._owner: Optional[HList[T]] = None

    def __repr__(self) -> str:
        return f"HListNode({self.value!r})"


class HList(Generic[T]):
    """Doubly linked list with a single-pointer head, as used for hash chains.

    There is no O(1) access to the tail.
    """

    def __init__(self) -> None:
        self._first: Optional[HListNode[T]] = None

    def _check(self, node: HListNode[T]) -> None:
        if node._owner is not self:
            raise ValueError("node does not belong to this list")

    def add_head(self, value: T) -> HListNode[T]:
        """Insert value at the front and return its node."""
        node = HListNode(value)
        node._owner = self
        node.next = self._first
        if self._first is not None:
            self._first.prev = node
        self._first = node
        return node

    def add_before(self, node: HListNode[T], value: T) -> HListNode[T]:
        """Insert value just before node and return the new node."""
        self._check(node)
        new = HListNode(value)
        new._owner = self
        new.prev = node.prev
        new.next = node
        node.prev = new
        if new.prev is None:
            self._first = new
        else:
            new.prev.next = new
        return new

    def add_after(self, node: HListNode[T], value: T) -> HListNode[T]:
        """Insert value just after node and return the new node."""
        self._check(node)
        new = HListNode(value)
        new._owner = self
        new.next = node.next
        node.next = new
        new.prev = node
        if new.next is not None:
            new.next.prev = new
        return new

    def remove(self, node: HListNode[T]) -> T:
        """Unlink node and return its value."""
        self._check(node)
        if node.prev is None:
            self._first = node.next
        else:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        node.prev = node.next = None
        node._owner = None
        return node.value

    def __iter__(self) -> Iterator[T]:
        node = self._first
        while node is not None:
            nxt = node.next
            yield node.value
            node = nxt

    def __bool__(self) -> bool:
        return self._first is not None

    def __repr__(self) -> str:
        return f"HList({list(self)!r})"