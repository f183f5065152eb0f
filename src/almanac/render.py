"""Plain-text and JSON formatting for month views."""

from .core.events import Event
from .core.grid import CalendarDay

CELL_WIDTH = 14


def _fit(text: str, width: int = CELL_WIDTH) -> str:
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def day_label(day: CalendarDay) -> str:
    """Day number, parenthesised outside the month, starred for today."""
    label = str(day.day_number)
    if not day.in_current_month:
        label = f"({label})"
    if day.is_today:
        label = f"*{label}"
    return label.rjust(CELL_WIDTH - 1) + " "


def event_label(event: Event) -> str:
    return f"#{event.id} {event.title}"


def render_month(
    view: list[list[tuple[CalendarDay, list[Event]]]],
    title: str,
    headers: list[str],
) -> str:
    """
    Draw a month view as a seven-column text grid.

    Each week is a block: one line of day numbers, then as many lines as
    the busiest day in that week has events.
    """
    width = CELL_WIDTH * 7 + 8
    separator = "+" + "+".join("-" * CELL_WIDTH for _ in range(7)) + "+"
    lines = [title.center(width).rstrip(), separator]
    lines.append("|" + "|".join(h.center(CELL_WIDTH) for h in headers) + "|")
    lines.append(separator)

    for week in view:
        lines.append("|" + "|".join(day_label(day) for day, _ in week) + "|")
        depth = max(len(events) for _, events in week)
        for row in range(depth):
            cells = []
            for _, events in week:
                cells.append(_fit(" " + event_label(events[row])) if row < len(events) else " " * CELL_WIDTH)
            lines.append("|" + "|".join(cells) + "|")
        lines.append(separator)

    return "\n".join(lines)


def render_event_list(events: list[Event], date_format: str = "%A, %B %d") -> str:
    """One line per event, grouped under a date heading."""
    lines = []
    current_date = None
    for event in sorted(events, key=lambda e: (e.date, e.id)):
        if event.date != current_date:
            if current_date is not None:
                lines.append("")
            lines.append(f"### {event.date.strftime(date_format)}")
            current_date = event.date
        lines.append(f"  #{event.id:<4} {event.title} [{event.color.value}]")
    return "\n".join(lines)


def event_to_dict(event: Event) -> dict:
    return {
        "id": event.id,
        "title": event.title,
        "date": event.date.isoformat(),
        "color": event.color.value,
    }


def day_to_dict(day: CalendarDay, events: list[Event] | None = None) -> dict:
    return {
        "date": day.date.isoformat(),
        "in_current_month": day.in_current_month,
        "is_today": day.is_today,
        "is_future_or_today": day.is_future_or_today,
        "events": [event_to_dict(e) for e in events or []],
    }
