"""Functional core - pure business logic with no I/O."""

from .grid import (
    SUNDAY,
    MONDAY,
    CalendarDay,
    DateRangeError,
    compute_visible_days,
    shift_month,
    week_aligned_range,
    split_weeks,
    parse_week_start,
)
from .events import (
    ColorTag,
    Event,
    EventStore,
    TitleValidationError,
    color_by_id,
    random_color,
)

__all__ = [
    # Grid
    "SUNDAY",
    "MONDAY",
    "CalendarDay",
    "DateRangeError",
    "compute_visible_days",
    "shift_month",
    "week_aligned_range",
    "split_weeks",
    "parse_week_start",
    # Events
    "ColorTag",
    "Event",
    "EventStore",
    "TitleValidationError",
    "color_by_id",
    "random_color",
]
