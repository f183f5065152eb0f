"""In-memory event collection - no I/O dependencies."""

import itertools
import logging
import random
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from .grid import as_day

logger = logging.getLogger(__name__)


class ColorTag(Enum):
    """Cosmetic category shown next to an event."""

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    YELLOW = "yellow"
    PINK = "pink"


PALETTE: tuple[ColorTag, ...] = tuple(ColorTag)


class TitleValidationError(ValueError):
    """Raised when an event title is empty after trimming."""


@dataclass(frozen=True)
class Event:
    """A single-day calendar event."""

    id: int
    title: str
    date: date
    color: ColorTag

    def occurs_on(self, day: date | datetime) -> bool:
        return self.date == as_day(day)


ColorPicker = Callable[[int], ColorTag]


def random_color(rng: random.Random | None = None) -> ColorPicker:
    """Uniform choice over the palette; pass a seeded Random for repeatable draws."""
    rng = rng or random.Random()

    def _pick(event_id: int) -> ColorTag:
        return rng.choice(PALETTE)

    return _pick


def color_by_id(event_id: int) -> ColorTag:
    """Deterministic palette slot derived from the event id."""
    return PALETTE[event_id % len(PALETTE)]


def normalize_title(title: str) -> str:
    """Trim a title, rejecting it if nothing is left."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise TitleValidationError("Event title cannot be empty")
    return cleaned


class EventStore:
    """
    Session-owned collection of events keyed by id.

    Implements EventRepository protocol. Iteration follows insertion order;
    ids come from a counter and are never reused.
    """

    def __init__(self, color_picker: ColorPicker | None = None):
        self._events: dict[int, Event] = {}
        self._ids = itertools.count(1)
        self._pick_color = color_picker or random_color()

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events.values()))

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def get(self, event_id: int) -> Event | None:
        return self._events.get(event_id)

    def events_on(self, day: date | datetime) -> list[Event]:
        """All events on a calendar day, in insertion order."""
        target = as_day(day)
        return [e for e in self._events.values() if e.occurs_on(target)]

    def create(self, day: date | datetime, title: str) -> Event:
        """
        Add a new event.

        The title is trimmed and must not be empty. Any date is accepted;
        callers decide whether past days are allowed.

        Raises:
            TitleValidationError: if the trimmed title is empty
        """
        try:
            cleaned = normalize_title(title)
        except TitleValidationError:
            logger.info(f"Rejected event on {as_day(day)}: empty title")
            raise

        event_id = next(self._ids)
        event = Event(
            id=event_id,
            title=cleaned,
            date=as_day(day),
            color=self._pick_color(event_id),
        )
        self._events[event_id] = event
        logger.debug(f"Created event #{event.id} on {event.date}: {event.title!r}")
        return event

    def rename(self, event_id: int, title: str) -> bool:
        """
        Replace an event's title. Unknown ids are ignored.

        Returns True if an event was renamed.

        Raises:
            TitleValidationError: if the trimmed title is empty
        """
        event = self._events.get(event_id)
        if event is None:
            logger.debug(f"Rename ignored, no event #{event_id}")
            return False
        self._events[event_id] = replace(event, title=normalize_title(title))
        logger.debug(f"Renamed event #{event_id} to {self._events[event_id].title!r}")
        return True

    def delete(self, event_id: int) -> bool:
        """Remove an event. Returns False if it was already gone."""
        if self._events.pop(event_id, None) is None:
            logger.debug(f"Delete ignored, no event #{event_id}")
            return False
        logger.debug(f"Deleted event #{event_id}")
        return True
