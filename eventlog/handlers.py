"""
Command handlers for EventLog.

Each handler loads the store, builds a filter from its options, and then
either prints the filtered events or writes them back through the store.
Handlers raise EventsError subclasses on storage failures and
OptionParseError on invalid option combinations; the CLI turns both into
a non-zero exit status.
"""

import datetime
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import click

from eventlog.compose import compose_and, compose_or, filter_events
from eventlog.display import print_events
from eventlog.errors import OptionParseError
from eventlog.event import Event
from eventlog.store import EventStore

logger = logging.getLogger("eventlog")


@dataclass
class ListOptions:
    today: bool = False
    date: Optional[datetime.date] = None
    before_date: Optional[datetime.date] = None
    after_date: Optional[datetime.date] = None
    categories: Tuple[str, ...] = field(default_factory=tuple)
    exclude: bool = False
    no_category: bool = False
    out_format: str = "plain"

    def validate(self):
        if self.exclude and not self.categories:
            raise OptionParseError('Cannot use "--exclude" without "--categories"!')


@dataclass
class AddOptions:
    description: str
    date: Optional[datetime.date] = None
    category: Optional[str] = None


@dataclass
class DeleteOptions:
    date: Optional[datetime.date] = None
    before_date: Optional[datetime.date] = None
    after_date: Optional[datetime.date] = None
    category: Optional[str] = None
    description: Optional[str] = None
    all: bool = False
    dry_run: bool = False

    def validate(self):
        selectors = [
            self.date,
            self.before_date,
            self.after_date,
            self.category,
            self.description,
        ]
        has_selector = any(value is not None for value in selectors)
        if not has_selector and not self.all:
            if self.dry_run:
                raise OptionParseError('"--dry-run" requires at least one other option!')
            raise OptionParseError("At least one option is required!")
        if self.all and has_selector:
            raise OptionParseError('Cannot have other options with "--all"!')


def build_list_filter(opts: ListOptions, today: datetime.date):
    """Build the conjunctive filter for the list command, or None for no filtering."""
    predicate = None
    if opts.today:
        predicate = compose_and(predicate, lambda e: e.date == today)
    if opts.date is not None:
        predicate = compose_and(predicate, lambda e: e.date == opts.date)
    if opts.before_date is not None:
        predicate = compose_and(predicate, lambda e: e.date < opts.before_date)
    if opts.after_date is not None:
        predicate = compose_and(predicate, lambda e: e.date > opts.after_date)
    if opts.categories:
        categories = set(opts.categories)
        if opts.exclude:
            predicate = compose_and(predicate, lambda e: e.category not in categories)
        else:
            predicate = compose_and(predicate, lambda e: e.category in categories)
    if opts.no_category:
        predicate = compose_and(predicate, lambda e: not e.has_category)
    return predicate


def build_delete_filter(opts: DeleteOptions):
    """
    Build the filter selecting the events that survive a delete.

    The clauses describe what to keep. Date, category and description
    clauses each keep an event that differs from the deletion target and
    are OR-ed together; the date boundaries are AND-ed on top, keeping
    events on or after --before-date and on or before --after-date.
    """
    predicate = None
    if opts.date is not None:
        predicate = compose_or(predicate, lambda e: e.date != opts.date)
    if opts.before_date is not None:
        predicate = compose_and(predicate, lambda e: e.date >= opts.before_date)
    if opts.after_date is not None:
        predicate = compose_and(predicate, lambda e: e.date <= opts.after_date)
    if opts.category is not None:
        category = opts.category or ""
        predicate = compose_or(predicate, lambda e: e.category != category)
    if opts.description is not None:
        predicate = compose_or(
            predicate, lambda e: not e.description.startswith(opts.description)
        )
    return predicate


def run_list(store: EventStore, opts: ListOptions, today: Optional[datetime.date] = None):
    """Print the stored events matching every given option."""
    opts.validate()
    today = today or datetime.date.today()
    store.load()

    events = filter_events(store.events, build_list_filter(opts, today))
    logger.debug("Listing %d of %d events", len(events), len(store.events))
    print_events(events, today, opts.out_format)
    return events


def run_add(store: EventStore, opts: AddOptions, today: Optional[datetime.date] = None):
    """Add a new event, dated today unless a date is given, and print all events."""
    today = today or datetime.date.today()
    store.load()

    event = Event(opts.date or today, opts.category, opts.description)
    store.insert(event)
    click.echo("Successfully added new event!")
    print_events(store.events, today)
    return event


def run_delete(store: EventStore, opts: DeleteOptions, today: Optional[datetime.date] = None):
    """Delete the selected events, or preview the result with dry_run."""
    opts.validate()
    today = today or datetime.date.today()
    store.load()

    if opts.all:
        events = []
    else:
        events = filter_events(store.events, build_delete_filter(opts))

    if opts.dry_run:
        click.echo("Performing dry run...\nResult:")
        print_events(events, today)
        return events

    if store.replace(events):
        click.echo("Successfully removed event(s)!")
    else:
        click.echo("No events affected!")
    print_events(store.events, today)
    return store.events


def run_categories(store: EventStore):
    """Print every category in use, one per line."""
    store.load()
    categories = store.categories()
    if not categories:
        click.echo("No categories found!")
    for category in categories:
        click.echo(category)
    return categories
