import pytest

from guifile_toolkit.editor_tabs import EditorTabs


def make_tabs(*names):
    tabs = EditorTabs()
    for name in names:
        tabs.open(name)
    return tabs


def test_empty_has_no_active():
    tabs = EditorTabs()
    assert tabs.active() is None
    assert len(tabs) == 0
    assert list(tabs) == []


def test_open_makes_newest_active():
    tabs = EditorTabs()
    assert tabs.open("a.gui") == 0
    assert tabs.open("b.gui") == 1
    assert tabs.active() == "b.gui"
    assert list(tabs) == ["a.gui", "b.gui"]
    assert len(tabs) == 2


def test_close_active_selects_first():
    tabs = make_tabs("a", "b", "c")
    tabs.select(1)
    assert tabs.close(1) == "b"
    assert tabs.active() == "a"
    assert list(tabs) == ["a", "c"]


def test_close_before_active_keeps_document_active():
    tabs = make_tabs("a", "b", "c")
    assert tabs.close(0) == "a"
    assert tabs.active() == "c"
    assert tabs.active_index == 1


def test_close_after_active_keeps_index():
    tabs = make_tabs("a", "b", "c")
    tabs.select(0)
    tabs.close(2)
    assert tabs.active() == "a"
    assert tabs.active_index == 0


def test_close_last_tab_leaves_none_active():
    tabs = make_tabs("only")
    assert tabs.close(0) == "only"
    assert tabs.active() is None
    assert tabs.active_index is None
    assert len(tabs) == 0


def test_close_with_no_selection_stays_unselected():
    tabs = make_tabs("a", "b")
    tabs.select(None)
    tabs.close(0)
    assert tabs.active() is None
    assert list(tabs) == ["b"]


def test_select_changes_active():
    tabs = make_tabs("a", "b")
    tabs.select(0)
    assert tabs.active() == "a"


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_select_out_of_range_raises(index):
    tabs = make_tabs("a", "b")
    with pytest.raises(IndexError):
        tabs.select(index)
    assert tabs.active() == "b"


@pytest.mark.parametrize("index", [-1, 2])
def test_close_out_of_range_raises(index):
    tabs = make_tabs("a", "b")
    with pytest.raises(IndexError):
        tabs.close(index)
    assert list(tabs) == ["a", "b"]