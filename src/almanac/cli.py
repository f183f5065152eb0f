"""Almanac CLI - month calendar with session-scoped events."""

import json
import logging
import sys
from datetime import date

import click

from .config import Config, load_config
from .core.events import EventStore, TitleValidationError
from .core.grid import DateRangeError, month_title, weekday_headers
from .render import day_to_dict, render_event_list, render_month
from .session import CalendarSession, PastDateError

logger = logging.getLogger(__name__)

SHELL_HELP = """\
Commands:
  show                 Redraw the current month
  next | prev          Move one month forward or back
  today                Jump to the current month
  goto YYYY-MM-DD      Jump to the month containing a date
  add YYYY-MM-DD TITLE Add an event (today or later)
  new [YYYY-MM-DD]     Start a new event draft (defaults to today)
  title TEXT           Set the draft title
  save | cancel        Save or discard the draft
  rename ID TITLE      Rename an event
  delete ID            Delete an event
  list [YYYY-MM-DD]    List events, all or for one day
  help                 Show this help
  quit                 Leave the shell (events are not kept)"""


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}")


def _parse_id(value: str) -> int:
    try:
        return int(value.lstrip("#"))
    except ValueError:
        raise click.BadParameter(f"Expected an event id, got {value!r}")


def build_session(config: Config, reference: date | None = None) -> CalendarSession:
    """Create a fresh session using the configured week start and colours."""
    store = EventStore(color_picker=config.color_picker())
    return CalendarSession(store=store, reference=reference, week_start=config.week_start)


def format_session(session: CalendarSession) -> str:
    return render_month(
        session.month_view(),
        month_title(session.reference),
        weekday_headers(session.week_start),
    )


@click.group()
@click.version_option(package_name="almanac")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Almanac - month calendar in the terminal."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Any day in the month to show (YYYY-MM-DD), defaults to today")
@click.option("--offset", "-o", default=0, type=int, help="Months to move from that date")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def month(target_date: str | None, offset: int, as_json: bool):
    """Show a month grid."""
    config = load_config()
    reference = _parse_date(target_date) if target_date else None
    try:
        session = build_session(config, reference)
        if offset:
            session.shift(offset)
    except DateRangeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "month": month_title(session.reference),
                    "days": [day_to_dict(day) for day in session.visible_days()],
                },
                indent=2,
            )
        )
    else:
        click.echo(format_session(session))


def run_command(session: CalendarSession, line: str, date_format: str = "%A, %B %d") -> str | None:
    """
    Apply one shell command to the session and return the text to show.

    Returns None when the shell should exit.

    Raises:
        click.BadParameter: for malformed arguments
        TitleValidationError: for blank titles on add/rename
        PastDateError: for add on a past day
        DateRangeError: for navigation to a month that cannot be drawn
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return ""
    command = parts[0].lower()
    rest = parts[1] if len(parts) > 1 else ""

    match command:
        case "quit" | "exit":
            return None
        case "help" | "?":
            return SHELL_HELP
        case "show":
            return format_session(session)
        case "next":
            session.next_month()
            return format_session(session)
        case "prev":
            session.previous_month()
            return format_session(session)
        case "today":
            session.go_today()
            return format_session(session)
        case "goto":
            session.go_to(_parse_date(rest))
            return format_session(session)
        case "add":
            day_str, _, title = rest.partition(" ")
            event = session.add_event(_parse_date(day_str), title)
            return f"Added #{event.id} {event.title} on {event.date.isoformat()}"
        case "new":
            day = _parse_date(rest) if rest else None
            if not session.begin_draft(day):
                return "Events can only be added today or later."
            return f"New event on {session.draft.date.isoformat()}; set it with 'title TEXT', then 'save'."
        case "title":
            if session.draft is None:
                return "No draft open. Start one with 'new'."
            session.set_draft_title(rest)
            return f"Draft title: {rest}"
        case "save":
            if session.draft is None:
                return "No draft open. Start one with 'new'."
            event = session.commit_draft()
            if event is None:
                return "Draft needs a title before it can be saved."
            return f"Added #{event.id} {event.title} on {event.date.isoformat()}"
        case "cancel":
            session.cancel_draft()
            return "Draft discarded."
        case "rename":
            id_str, _, title = rest.partition(" ")
            event_id = _parse_id(id_str)
            if session.rename_event(event_id, title):
                return f"Renamed #{event_id}"
            return f"No event #{event_id}"
        case "delete":
            event_id = _parse_id(rest)
            if session.delete_event(event_id):
                return f"Deleted #{event_id}"
            return f"No event #{event_id}"
        case "list":
            if rest:
                events = session.events_on(_parse_date(rest))
            else:
                events = list(session.store)
            return render_event_list(events, date_format) or "No events."
        case _:
            return f"Unknown command {command!r}. Type 'help' for a list."


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Month to open on (YYYY-MM-DD), defaults to today")
def shell(target_date: str | None):
    """Interactive calendar session. Events last until you quit."""
    config = load_config()
    reference = _parse_date(target_date) if target_date else None
    try:
        session = build_session(config, reference)
    except DateRangeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(format_session(session))
    click.echo("Type 'help' for commands.")

    while True:
        try:
            line = click.prompt("almanac", default="", show_default=False, prompt_suffix="> ")
        except (EOFError, click.Abort):
            click.echo()
            break

        try:
            output = run_command(session, line, config.date_format)
        except (click.BadParameter, TitleValidationError, PastDateError, DateRangeError) as e:
            message = e.format_message() if isinstance(e, click.BadParameter) else str(e)
            click.echo(f"Error: {message}", err=True)
            continue

        if output is None:
            break
        if output:
            click.echo(output)

    logger.debug(f"Shell closed with {len(session.store)} event(s) discarded")

