from datetime import date

import pytest

from eventlog.errors import DirectoryMissing, FileMissing, ParseError, PathUnresolved, WriteError
from eventlog.event import Event
from eventlog.store import EventStore, resolve_events_path

HEADER = "date,category,description\n"


@pytest.fixture
def events_file(tmp_path):
    events_dir = tmp_path / ".events"
    events_dir.mkdir()
    path = events_dir / "events.csv"
    path.write_text(HEADER)
    return path


@pytest.fixture
def store(tmp_path, events_file):
    return EventStore(home=str(tmp_path))


@pytest.mark.parametrize("home", ["", "/", "~"])
def test_resolve_unresolved_home(home):
    with pytest.raises(PathUnresolved, match="Unable to determine user home directory"):
        resolve_events_path(home)


def test_resolve_empty_home_env(monkeypatch):
    monkeypatch.setenv("HOME", "")
    with pytest.raises(PathUnresolved):
        EventStore().load()


def test_resolve_missing_directory(tmp_path):
    with pytest.raises(DirectoryMissing):
        resolve_events_path(str(tmp_path))


def test_resolve_missing_file(tmp_path):
    (tmp_path / ".events").mkdir()
    with pytest.raises(FileMissing):
        resolve_events_path(str(tmp_path))


def test_resolve_custom_location(tmp_path):
    (tmp_path / "log").mkdir()
    (tmp_path / "log" / "mine.csv").write_text(HEADER)
    path = resolve_events_path(str(tmp_path), "log", "mine.csv")
    assert path.name == "mine.csv"


def test_load_parses_rows(store, events_file):
    events_file.write_text(HEADER + '2024-01-01,,X\n2023-05-02,work,"Meeting, with comma"\n')
    events = store.load()
    assert events == [
        Event(date(2024, 1, 1), "", "X"),
        Event(date(2023, 5, 2), "work", "Meeting, with comma"),
    ]


def test_load_keeps_file_order(store, events_file):
    events_file.write_text(HEADER + "2024-06-01,,B\n2024-01-01,,A\n")
    assert [e.description for e in store.load()] == ["B", "A"]


def test_load_empty_file(store, events_file):
    events_file.write_text("")
    assert store.load() == []


def test_load_replaces_previous_events(store, events_file):
    store.events = [Event(date(2020, 1, 1), "", "stale")]
    events_file.write_text(HEADER + "2024-01-01,,X\n")
    store.load()
    assert [e.description for e in store.events] == ["X"]


@pytest.mark.parametrize(
    "content",
    [
        "when,category,description\n2024-01-01,,X\n",
        HEADER + "01/02/2024,,X\n",
        HEADER + "20240101,,X\n",
        HEADER + "2024-W10-1,,X\n",
        HEADER + "2024-01-01,,\n",
        HEADER + "2024-01-01,a\n",
        HEADER + "2024-01-01,a,b,c\n",
    ],
)
def test_load_malformed(store, events_file, content):
    events_file.write_text(content)
    with pytest.raises(ParseError):
        store.load()


def test_insert_persists_sorted(store, events_file):
    events_file.write_text(HEADER + "2024-06-01,b,later\n")
    store.load()
    store.insert(Event(date(2024, 1, 1), None, "earlier"))
    assert events_file.read_text() == HEADER + "2024-01-01,,earlier\n2024-06-01,b,later\n"


def test_add_to_empty_store(store, events_file):
    store.load()
    store.insert(Event(date(2024, 1, 1), "", "X"))
    assert len(store.events) == 1
    lines = events_file.read_text().splitlines()
    assert lines == ["date,category,description", "2024-01-01,,X"]


def test_save_round_trip(store, tmp_path):
    original = [
        Event(date(2024, 3, 1), "work", 'Quote "this", please'),
        Event(date(2023, 12, 31), "", "Party"),
        Event(date(2024, 3, 1), "home", "Clean"),
    ]
    store.events = list(original)
    store.save()

    reloaded = EventStore(home=str(tmp_path)).load()
    assert sorted(reloaded, key=repr) == sorted(original, key=repr)
    assert [e.date for e in reloaded] == sorted(e.date for e in reloaded)


def test_save_is_idempotent(store, events_file):
    store.events = [Event(date(2024, 3, 1), "a", "one"), Event(date(2024, 1, 1), "", "two")]
    store.save()
    first = events_file.read_bytes()
    store.save()
    assert events_file.read_bytes() == first


def test_save_is_stable_for_same_date(store, events_file):
    store.events = [
        Event(date(2024, 2, 1), "", "b"),
        Event(date(2024, 1, 1), "", "first"),
        Event(date(2024, 1, 1), "", "second"),
    ]
    store.save()
    assert [e.description for e in store.events] == ["first", "second", "b"]


def test_save_empty_leaves_file_unchanged(store, events_file):
    events_file.write_text(HEADER + "2024-01-01,,X\n")
    store.events = []
    store.save()
    assert events_file.read_text() == HEADER + "2024-01-01,,X\n"


def test_save_write_failure(store, events_file, monkeypatch):
    def fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("eventlog.store.os.replace", fail)
    store.events = [Event(date(2024, 1, 1), "", "X")]
    with pytest.raises(WriteError, match="disk full"):
        store.save()
    assert events_file.read_text() == HEADER
    assert list(events_file.parent.iterdir()) == [events_file]


def test_replace_reports_count_change(store, events_file):
    events_file.write_text(HEADER + "2024-01-01,,A\n2024-06-01,,B\n")
    store.load()
    assert store.replace([store.events[1]]) is True
    assert events_file.read_text() == HEADER + "2024-06-01,,B\n"


def test_replace_same_count_reports_no_change(store, events_file):
    events_file.write_text(HEADER + "2024-01-01,,A\n")
    store.load()
    assert store.replace([Event(date(2024, 2, 2), "", "other")]) is False
    assert events_file.read_text() == HEADER + "2024-02-02,,other\n"


def test_categories(store, events_file):
    events_file.write_text(HEADER + "2024-01-01,b,X\n2024-01-02,,Y\n2024-01-03,a,Z\n2024-01-04,b,W\n")
    store.load()
    assert store.categories() == ["a", "b"]
