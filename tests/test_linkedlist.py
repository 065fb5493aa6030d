import pytest

from petweb.linkedlist import HList, LinkedList


def test_add_tail_keeps_order():
    lst = LinkedList()
    for v in ["a", "b", "c"]:
        lst.add_tail(v)
    assert list(lst) == ["a", "b", "c"]
    assert len(lst) == 3


def test_add_pushes_front():
    lst = LinkedList()
    for v in ["a", "b", "c"]:
        lst.add(v)
    assert list(lst) == ["c", "b", "a"]
    assert lst.first() == "c"


def test_init_from_values_and_reversed():
    lst = LinkedList([1, 2, 3, 4])
    assert list(reversed(lst)) == [4, 3, 2, 1]
    assert list(lst) == [1, 2, 3, 4]


def test_empty_list():
    lst = LinkedList()
    assert not lst
    assert len(lst) == 0
    with pytest.raises(IndexError):
        lst.first()


def test_remove_returns_value_and_unlinks():
    lst = LinkedList()
    lst.add_tail("x")
    node = lst.add_tail("y")
    lst.add_tail("z")
    assert lst.remove(node) == "y"
    assert list(lst) == ["x", "z"]
    assert len(lst) == 2
    with pytest.raises(ValueError):
        lst.remove(node)


def test_remove_node_of_other_list_rejected():
    a = LinkedList()
    b = LinkedList([9])
    node = a.add("q")
    with pytest.raises(ValueError):
        b.remove(node)
    assert list(a) == ["q"]


def test_removal_during_iteration():
    lst = LinkedList(range(6))
    for node in lst.nodes():
        if node.value % 2:
            lst.remove(node)
    assert list(lst) == [0, 2, 4]
    assert len(lst) == 3


def test_move_and_move_tail():
    a = LinkedList()
    n1 = a.add_tail("one")
    n2 = a.add_tail("two")
    b = LinkedList(["x", "y"])
    a.move(n1, b)
    a.move_tail(n2, b)
    assert not a
    assert list(b) == ["one", "x", "y", "two"]
    assert len(b) == 4
    assert b.remove(n1) == "one"


def test_move_within_same_list():
    lst = LinkedList()
    lst.add_tail("a")
    lst.add_tail("b")
    c = lst.add_tail("c")
    lst.move(c, lst)
    assert list(lst) == ["c", "a", "b"]
    assert len(lst) == 3


def test_splice_joins_at_front_and_empties_other():
    a = LinkedList(["a1", "a2"])
    b = LinkedList(["b1", "b2"])
    node = b.first
    nodes_b = list(b.nodes())
    a.splice(b)
    assert list(a) == ["b1", "b2", "a1", "a2"]
    assert len(a) == 4
    assert not b and len(b) == 0
    assert a.remove(nodes_b[0]) == "b1"
    assert callable(node)


def test_splice_empty_is_noop_and_self_rejected():
    a = LinkedList(["a"])
    a.splice(LinkedList())
    assert list(a) == ["a"]
    with pytest.raises(ValueError):
        a.splice(a)


def test_hlist_add_head_order():
    h = HList()
    assert not h
    for v in [1, 2, 3]:
        h.add_head(v)
    assert list(h) == [3, 2, 1]
    assert h


def test_hlist_add_before_and_after():
    h = HList()
    mid = h.add_head("m")
    h.add_before(mid, "first")
    h.add_after(mid, "last")
    h.add_after(mid, "m2")
    assert list(h) == ["first", "m", "m2", "last"]


def test_hlist_remove_head_middle_tail():
    h = HList()
    c = h.add_head("c")
    b = h.add_head("b")
    a = h.add_head("a")
    assert h.remove(b) == "b"
    assert list(h) == ["a", "c"]
    assert h.remove(a) == "a"
    assert list(h) == ["c"]
    assert h.remove(c) == "c"
    assert not h
    with pytest.raises(ValueError):
        h.remove(c)


def test_hlist_rejects_foreign_node():
    h1 = HList()
    h2 = HList()
    node = h1.add_head(5)
    with pytest.raises(ValueError):
        h2.add_after(node, 6)
    assert list(h2) == []