import io

from petweb.list_demo import build_list, main


def test_build_list_pairs_in_order():
    items = build_list(["alpha", "beta", "gamma"])
    assert list(items) == [(1, "alpha"), (2, "beta"), (3, "gamma")]
    assert len(items) == 3


def test_build_list_empty():
    items = build_list([])
    assert not items
    assert len(items) == 0


def test_main_found(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n"))
    assert main(["alpha", "beta", "gamma"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Linked List API example\n")
    assert "Found string at index (3): gamma" in out


def test_main_not_found(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("5\n"))
    assert main(["alpha", "beta"]) == 1
    assert "Error: Could not find string index (5)" in capsys.readouterr().out


def test_main_no_arguments(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
    assert main([]) == 1
    assert "Error: Could not find string index (1)" in capsys.readouterr().out


def test_main_eof(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["alpha"]) == 1
    assert "index (0)" in capsys.readouterr().out