import datetime

import click

from eventlog import config
from eventlog import handlers
from eventlog.display import OUTPUT_FORMATS
from eventlog.errors import EventsError
from eventlog.event import parse_iso_date
from eventlog.logger import setup_logger
from eventlog.store import EventStore


class ISODate(click.ParamType):
    """Click parameter type for ISO 8601 calendar dates (YYYY-MM-DD)."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, datetime.date):
            return value
        try:
            return parse_iso_date(value)
        except ValueError:
            self.fail(f"{value!r} is not an ISO-8601 formatted date (YYYY-MM-DD)", param, ctx)


ISO_DATE = ISODate()


def run_handler(ctx, handler, *args):
    """Run a command handler, reporting storage errors and exiting non-zero."""
    try:
        return handler(ctx.obj["store"], *args)
    except EventsError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Path to configuration TOML file.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx, config_path, debug):
    """
    EventLog CLI: List, add and delete dated events.
    """
    try:
        cfg = config.load_config(config_path)
        if debug:
            cfg.setdefault("logging", {})["level"] = "DEBUG"
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)
    log_cfg = cfg.get("logging", {})
    setup_logger("eventlog", log_cfg.get("log_dir"), level=log_cfg.get("level", "WARNING"))
    ctx.obj = {
        "config": cfg,
        "config_path": config_path,
        "debug": debug,
        "store": EventStore.from_config(cfg),
    }


@main.command(name="show-config")
@click.pass_context
def show_config(ctx):
    """
    Show the loaded configuration.
    """
    cfg = ctx.obj.get("config")
    click.echo(cfg)


@main.command(name="list")
@click.option("--today", "-t", is_flag=True, help="List events happening today.")
@click.option("--date", "-D", "on_date", type=ISO_DATE, default=None, help="List events on specified date.")
@click.option("--before-date", "-b", type=ISO_DATE, default=None, help="List events before specified date.")
@click.option("--after-date", "-a", type=ISO_DATE, default=None, help="List events after specified date.")
@click.option("--categories", "-c", multiple=True, help="List events from specified categories (repeatable).")
@click.option("--exclude", "-e", is_flag=True, help="Exclude specified categories.")
@click.option("--no-category", "-n", is_flag=True, help="List events with no category.")
@click.option("--format", "-f", "out_format", default="plain", type=click.Choice(OUTPUT_FORMATS, case_sensitive=False), help="Output format.")
@click.pass_context
def list_events(ctx, today, on_date, before_date, after_date, categories, exclude, no_category, out_format):
    """
    List events.
    """
    opts = handlers.ListOptions(
        today=today,
        date=on_date,
        before_date=before_date,
        after_date=after_date,
        categories=categories,
        exclude=exclude,
        no_category=no_category,
        out_format=out_format,
    )
    run_handler(ctx, handlers.run_list, opts)


@main.command()
@click.option("--date", "-D", "on_date", type=ISO_DATE, default=None, help="Specify date for new event (default: today).")
@click.option("--category", "-c", default=None, help="Specify category for new event.")
@click.option("--description", "-d", required=True, help="Specify description for new event.")
@click.pass_context
def add(ctx, on_date, category, description):
    """
    Add a new event.
    """
    if not description:
        raise click.BadParameter("description must not be empty", param_hint="'--description'")
    opts = handlers.AddOptions(description=description, date=on_date, category=category)
    run_handler(ctx, handlers.run_add, opts)


@main.command()
@click.option("--date", "-D", "on_date", type=ISO_DATE, default=None, help="Delete all events with specified date.")
@click.option("--before-date", "-b", type=ISO_DATE, default=None, help="Delete all events before specified date.")
@click.option("--after-date", "-a", type=ISO_DATE, default=None, help="Delete all events after specified date.")
@click.option("--category", "-c", default=None, help="Delete all events with specified category.")
@click.option("--description", "-d", default=None, help="Delete all events with descriptions starting with specified string.")
@click.option("--all", "delete_all", is_flag=True, help="Delete all events.")
@click.option("--dry-run", is_flag=True, help="Display results of executing command without actually executing it.")
@click.pass_context
def delete(ctx, on_date, before_date, after_date, category, description, delete_all, dry_run):
    """
    Delete events.
    """
    opts = handlers.DeleteOptions(
        date=on_date,
        before_date=before_date,
        after_date=after_date,
        category=category,
        description=description,
        all=delete_all,
        dry_run=dry_run,
    )
    run_handler(ctx, handlers.run_delete, opts)


@main.command()
@click.pass_context
def categories(ctx):
    """
    List the categories in use.
    """
    run_handler(ctx, handlers.run_categories)


if __name__ == "__main__":
    main()
