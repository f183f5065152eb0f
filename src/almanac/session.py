"""Calendar session - navigation state plus the event store it owns.

The presentation layer (CLI shell, or any other front end) holds one
CalendarSession and routes every user action through it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from .core.events import Event, EventStore, TitleValidationError
from .core.grid import (
    SUNDAY,
    CalendarDay,
    as_day,
    compute_visible_days,
    shift_month,
    split_weeks,
    week_aligned_range,
)
from .ports.event_repo import EventRepository

logger = logging.getLogger(__name__)


class PastDateError(ValueError):
    """Raised when an event is requested for a day that has already passed."""


@dataclass
class Draft:
    """A new event being typed in, not yet saved."""

    date: date
    title: str = ""


class CalendarSession:
    """Reference month, week-start setting and the session's events."""

    def __init__(
        self,
        store: EventRepository | None = None,
        reference: date | None = None,
        week_start: int = SUNDAY,
        clock: Callable[[], date] = date.today,
    ):
        self.store = store if store is not None else EventStore()
        self.clock = clock
        self.week_start = week_start
        self.reference = self._checked(reference or clock())
        self.draft: Draft | None = None

    # ============== Navigation ==============

    def _checked(self, target: date) -> date:
        """Return the target day if its month can be drawn; raises DateRangeError otherwise.

        The reference is only replaced after this passes, so a refused move
        leaves the session on the month it was showing.
        """
        target = as_day(target)
        week_aligned_range(target, self.week_start)
        return target

    def next_month(self) -> date:
        return self.shift(1)

    def previous_month(self) -> date:
        return self.shift(-1)

    def shift(self, delta_months: int) -> date:
        self.reference = self._checked(shift_month(self.reference, delta_months))
        logger.debug(f"Reference moved to {self.reference}")
        return self.reference

    def go_to(self, target: date) -> date:
        self.reference = self._checked(target)
        return self.reference

    def go_today(self) -> date:
        return self.go_to(self.clock())

    # ============== Queries ==============

    def visible_days(self) -> list[CalendarDay]:
        """Grid for the reference month, flagged against the clock's current day."""
        return compute_visible_days(self.reference, self.week_start, today=self.clock())

    def month_view(self) -> list[list[tuple[CalendarDay, list[Event]]]]:
        """Week rows of (day, events on that day)."""
        cells = [(day, self.store.events_on(day.date)) for day in self.visible_days()]
        return split_weeks(cells)

    def events_on(self, day: date) -> list[Event]:
        return self.store.events_on(day)

    def can_create_on(self, day: date) -> bool:
        """Events may only be added today or later."""
        return as_day(day) >= self.clock()

    # ============== Edits ==============

    def add_event(self, day: date, title: str) -> Event:
        """
        Create an event on a day that has not passed yet.

        Raises:
            PastDateError: if the day is before today
            TitleValidationError: if the trimmed title is empty
        """
        day = as_day(day)
        if not self.can_create_on(day):
            logger.info(f"Refused event on past day {day}")
            raise PastDateError(f"Cannot add events to a past day ({day.isoformat()})")
        return self.store.create(day, title)

    def rename_event(self, event_id: int, title: str) -> bool:
        return self.store.rename(event_id, title)

    def delete_event(self, event_id: int) -> bool:
        return self.store.delete(event_id)

    # ============== Draft flow ==============

    def begin_draft(self, day: date | None = None) -> bool:
        """
        Start typing a new event on a day (today if omitted).

        Past days are ignored and any existing draft is left alone.
        Returns True if a fresh draft was opened.
        """
        day = as_day(day) if day else self.clock()
        if not self.can_create_on(day):
            return False
        self.draft = Draft(date=day)
        return True

    def set_draft_title(self, title: str) -> None:
        if self.draft is not None:
            self.draft.title = title

    def commit_draft(self) -> Event | None:
        """
        Save the open draft.

        Returns None when there is no draft or the title is blank; in that
        case the draft stays open with its text unchanged.
        """
        if self.draft is None:
            return None
        try:
            event = self.add_event(self.draft.date, self.draft.title)
        except (TitleValidationError, PastDateError) as e:
            logger.info(f"Draft not saved: {e}")
            return None
        self.draft = None
        return event

    def cancel_draft(self) -> None:
        self.draft = None
