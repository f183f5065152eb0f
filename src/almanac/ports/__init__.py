"""Ports - interfaces/protocols for swappable collaborators."""

from .event_repo import EventRepository

__all__ = [
    "EventRepository",
]
