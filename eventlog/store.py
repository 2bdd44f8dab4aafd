"""
Event store for EventLog.

The store owns the full list of events for one command run. It reads the
whole record file on load and rewrites it on save, sorted by date, so the
file never accumulates events in insertion order.
"""

import csv
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from eventlog.errors import (
    DirectoryMissing,
    FileMissing,
    ParseError,
    PathUnresolved,
    WriteError,
)
from eventlog.event import CSV_FIELDS, Event

DEFAULT_EVENTS_DIR = ".events"
DEFAULT_EVENTS_FILE = "events.csv"

logger = logging.getLogger("eventlog")


def resolve_events_path(
    home: Optional[str] = None,
    directory: str = DEFAULT_EVENTS_DIR,
    filename: str = DEFAULT_EVENTS_FILE,
) -> Path:
    """
    Locate the record file under the user's home directory.

    Neither the directory nor the file is created; both must already exist.

    Args:
        home: Home directory to use instead of the current user's.
        directory: Storage directory, relative to the home directory.
        filename: Name of the record file inside the storage directory.

    Returns:
        Path: The absolute path of the record file.

    Raises:
        PathUnresolved: If the home directory cannot be determined.
        DirectoryMissing: If the storage directory does not exist.
        FileMissing: If the record file does not exist.
    """
    if home is None:
        try:
            home = os.path.expanduser("~")
        except (KeyError, RuntimeError) as e:
            raise PathUnresolved(f"Unable to determine user home directory: {e}") from e
    home = os.fspath(home)
    # expanduser maps an empty $HOME to "/" and leaves "~" alone when no
    # home directory is known.
    if home in ("", "/") or home.startswith("~"):
        raise PathUnresolved("Unable to determine user home directory")

    events_dir = (Path(home) / directory).resolve()
    if not events_dir.is_dir():
        raise DirectoryMissing(f"{events_dir} directory does not exist, please create it.")

    events_path = events_dir / filename
    if not events_path.is_file():
        raise FileMissing(f"{events_path} file not found!")

    return events_path


class EventStore:
    """
    In-memory list of events backed by a CSV record file.

    Args:
        home: Home directory override, mostly for tests.
        directory: Storage directory relative to the home directory.
        filename: Record file name.
    """

    def __init__(
        self,
        home: Optional[str] = None,
        directory: str = DEFAULT_EVENTS_DIR,
        filename: str = DEFAULT_EVENTS_FILE,
    ):
        self.home = home
        self.directory = directory
        self.filename = filename
        self.events: List[Event] = []

    @classmethod
    def from_config(cls, cfg, home=None):
        storage = cfg.get("storage", {})
        return cls(
            home=home,
            directory=storage.get("directory", DEFAULT_EVENTS_DIR),
            filename=storage.get("filename", DEFAULT_EVENTS_FILE),
        )

    @property
    def path(self) -> Path:
        return resolve_events_path(self.home, self.directory, self.filename)

    def load(self) -> List[Event]:
        """
        Replace the in-memory events with the contents of the record file.

        Raises:
            PathUnresolved, DirectoryMissing, FileMissing: If the record file
                cannot be located.
            ParseError: If the file cannot be decoded into events.
        """
        path = self.path
        try:
            with open(path, "r", newline="", encoding="utf-8") as f:
                events = self._read_events(csv.DictReader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ParseError(f"Failed to load events from {path}: {e}") from e

        self.events = events
        logger.debug("Loaded %d events from %s", len(events), path)
        return self.events

    @staticmethod
    def _read_events(reader: csv.DictReader) -> List[Event]:
        # An empty file has no header row; treat it as an empty log.
        if reader.fieldnames is None:
            return []
        missing = [name for name in CSV_FIELDS if name not in reader.fieldnames]
        if missing:
            raise ParseError(f"Missing column(s) in header: {', '.join(missing)}")

        events = []
        for row in reader:
            line = reader.line_num
            if None in row or any(row[name] is None for name in CSV_FIELDS):
                raise ParseError(f"Malformed row on line {line}")
            try:
                events.append(Event.from_row(row))
            except ValueError as e:
                raise ParseError(f"Bad event on line {line}: {e}") from e
        return events

    def save(self):
        """
        Sort the events by date and write them to the record file.

        An empty event list is not written; the record file keeps its
        previous contents.

        Raises:
            WriteError: If the record file cannot be written.
        """
        if not self.events:
            logger.warning("No events to save, record file left unchanged.")
            return

        # list.sort is stable, so same-day events keep their relative order.
        self.events.sort()
        path = self.path

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                newline="",
                encoding="utf-8",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                writer = csv.writer(tmp, lineterminator="\n")
                writer.writerow(CSV_FIELDS)
                for event in self.events:
                    row = event.to_row()
                    writer.writerow([row[name] for name in CSV_FIELDS])
            shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise WriteError(f"Failed to save events to {path}: {e}") from e

        logger.debug("Saved %d events to %s", len(self.events), path)

    def insert(self, event: Event):
        """Append an event and persist the store."""
        self.events.append(event)
        self.save()

    def replace(self, events: List[Event]) -> bool:
        """
        Swap in a new event list and persist the store.

        Returns:
            bool: True if the number of events changed.
        """
        previous_size = len(self.events)
        self.events = events
        self.save()
        return previous_size != len(events)

    def categories(self) -> List[str]:
        """Return the distinct non-empty categories in sorted order."""
        return sorted({event.category for event in self.events if event.category})
