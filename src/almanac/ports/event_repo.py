"""Event repository interface."""

from collections.abc import Iterator
from datetime import date
from typing import Protocol

from almanac.core.events import Event


class EventRepository(Protocol):
    """Interface for the session's event collection."""

    def __len__(self) -> int:
        ...

    def __iter__(self) -> Iterator[Event]:
        """All events, in insertion order."""
        ...

    def events_on(self, day: date) -> list[Event]:
        """Events on a calendar day."""
        ...

    def create(self, day: date, title: str) -> Event:
        """Add an event; raises TitleValidationError for an empty title."""
        ...

    def rename(self, event_id: int, title: str) -> bool:
        """Replace a title. Returns False for unknown ids."""
        ...

    def delete(self, event_id: int) -> bool:
        """Remove an event. Returns False for unknown ids."""
        ...
