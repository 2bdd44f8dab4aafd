"""
Output helpers for printing events in the supported formats.
"""

import csv
import io
import json
from datetime import date

import click
from rich.console import Console
from rich.table import Table

from eventlog.event import CSV_FIELDS

OUTPUT_FORMATS = ["plain", "table", "json", "csv"]
NO_EVENTS_MESSAGE = "No events found!"


def format_event(event, today):
    return f"{event} -- {event.relative_time(today)}"


def print_events(events, today=None, out_format="plain"):
    """
    Print events one per line with their relative time.

    Args:
        events (list): Events to print, in display order.
        today (date): Reference date for relative times. Defaults to today.
        out_format (str): One of OUTPUT_FORMATS.
    """
    today = today or date.today()
    out_format = out_format.lower()

    if not events:
        if out_format == "json":
            click.echo("[]")
        else:
            click.echo(NO_EVENTS_MESSAGE)
        return

    if out_format == "json":
        rows = []
        for event in events:
            row = event.to_row()
            row["when"] = event.relative_time(today)
            rows.append(row)
        click.echo(json.dumps(rows, indent=2))
    elif out_format == "csv":
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_FIELDS)
        for event in events:
            row = event.to_row()
            writer.writerow([row[name] for name in CSV_FIELDS])
        click.echo(output.getvalue(), nl=False)
    elif out_format == "table":
        table = Table(title="Events")
        table.add_column("Date", style="cyan")
        table.add_column("Category", style="magenta")
        table.add_column("Description")
        table.add_column("When", style="green")
        for event in events:
            table.add_row(
                event.date.isoformat(),
                event.category,
                event.description,
                event.relative_time(today),
            )
        Console().print(table)
    else:
        for event in events:
            click.echo(format_event(event, today))
