"""
Tests for the raw/shown entry sets of FileListModel
"""
from filepane.core.file_entry import FileEntry, FileKind
from filepane.core.ordering import by_name


def _records(*names):
    return [FileEntry(f"/home/user/{n.rstrip('/')}",
                      FileKind.DIRECTORY if n.endswith("/") else FileKind.FILE)
            for n in names]


def _shown_names(model):
    return [e.file_name for e in model.shown]


def test_set_all_wraps_records_and_drops_missing_ones(model):
    records = _records("b.txt", "a.txt")
    assert model.set_all([records[0], None, records[1]])

    assert [e.raw_file_entry for e in model.all] == records
    assert all(e.owner is model for e in model.all)
    assert _shown_names(model) == ["b.txt", "a.txt"]


def test_directories_come_first_and_ties_keep_listing_order(model):
    model.set_all(_records("zeta.txt", "music/", "alpha.txt", "docs/"))
    assert _shown_names(model) == ["music", "docs", "zeta.txt", "alpha.txt"]


def test_comparator_change_recomputes_shown(model):
    model.set_all(_records("zeta.txt", "music/", "alpha.txt", "docs/"))
    emitted = []
    model.shown_changed.connect(emitted.append)

    model.set_comparator(by_name)
    assert _shown_names(model) == ["docs", "music", "alpha.txt", "zeta.txt"]
    assert len(emitted) == 1
    assert model.comparator is by_name


def test_filter_is_case_insensitive_substring(pane, model):
    model.set_all(_records("Alpha.txt", "alpine.txt", "beta.txt", "ALPS/"))
    pane.filter.set("alp")
    assert _shown_names(model) == ["ALPS", "Alpha.txt", "alpine.txt"]

    # Not a glob or regex
    pane.filter.set("a*.txt")
    assert _shown_names(model) == []


def test_filter_with_no_match_then_cleared(pane, model):
    model.set_all(_records("b.txt", "dir/", "a.txt"))
    pane.filter.set("nothing-matches")
    assert model.shown == ()

    pane.filter.set(None)
    assert _shown_names(model) == ["dir", "b.txt", "a.txt"]
    assert len(model.shown) == len(model.all)


def test_empty_filter_keeps_everything(pane, model):
    model.set_all(_records("b.txt", "a.txt"))
    pane.filter.set("")
    assert _shown_names(model) == ["b.txt", "a.txt"]


def test_refresh_shown_is_idempotent(pane, model):
    model.set_all(_records("c.txt", "x/", "a.txt", "b.txt"))
    pane.filter.set(".txt")
    model.refresh_shown()
    first = list(model.shown)
    model.refresh_shown()
    second = list(model.shown)
    assert first == second
    assert all(a is b for a, b in zip(first, second))


def test_set_all_closes_listing_after_consuming(model):
    closed = []

    def listing():
        try:
            yield from _records("a.txt", "b.txt")
        finally:
            closed.append(True)

    gen = listing()
    assert model.set_all(gen)
    assert closed == [True]
    assert len(model.all) == 2


def test_set_all_failure_keeps_previous_entries_and_closes(model, error_events):
    model.set_all(_records("keep.txt"))
    closed = []

    class BrokenListing:
        def __iter__(self):
            yield FileEntry("/home/user/partial.txt", FileKind.FILE)
            raise ConnectionError("connection reset")

        def close(self):
            closed.append(True)

    assert not model.set_all(BrokenListing())
    assert closed == [True]
    assert _shown_names(model) == ["keep.txt"]
    assert len(error_events) == 1
    assert isinstance(error_events[0].throwable, ConnectionError)
    assert not error_events[0].is_expected


def test_failing_comparator_is_reported_not_raised(model, error_events):
    model.set_all(_records("a.txt", "b.txt"))

    def broken(left, right):
        raise RuntimeError("bad comparator")

    model.set_comparator(broken)
    assert _shown_names(model) == ["a.txt", "b.txt"]
    assert len(error_events) == 1


def test_new_listing_replaces_all_wholesale(model):
    model.set_all(_records("a.txt"))
    old = model.all[0]
    model.set_all(_records("a.txt"))
    assert model.all[0] is not old
    assert model.all[0].raw_file_entry == old.raw_file_entry
