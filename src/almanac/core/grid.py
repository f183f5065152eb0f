"""Pure month-grid logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class DateRangeError(ValueError):
    """Raised when a grid or month shift would leave the supported date range (years 1-9999)."""


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid."""

    date: date
    in_current_month: bool
    is_today: bool
    is_future_or_today: bool

    @property
    def is_past(self) -> bool:
        return not self.is_future_or_today

    @property
    def day_number(self) -> int:
        return self.date.day


def as_day(value: date | datetime) -> date:
    """Reduce a datetime to its calendar day; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_week_start(value: str | int) -> int:
    """
    Resolve a week-start setting to a Python weekday number (Monday=0).

    Accepts weekday numbers or names, full or abbreviated ("sun", "Sunday").
    """
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)

    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Weekday number out of range: {value}")

    name = value.strip().lower()
    for i, weekday in enumerate(WEEKDAY_NAMES):
        if len(name) >= 3 and weekday.lower().startswith(name):
            return i
    raise ValueError(f"Unknown weekday: {value!r}")


def week_aligned_range(reference: date, week_start: int = SUNDAY) -> tuple[date, date]:
    """
    First and last day shown for the month containing ``reference``.

    The start is the week_start day on or before the 1st; the end is the
    last day of that week containing the month's final day.

    Raises:
        DateRangeError: if the padding weeks fall before year 1 or after 9999
    """
    reference = as_day(reference)
    first = reference.replace(day=1)
    last = first + relativedelta(day=31)

    try:
        start = first - timedelta(days=(first.weekday() - week_start) % 7)
        end = last + timedelta(days=(week_start - 1 - last.weekday()) % 7)
    except OverflowError:
        raise DateRangeError(
            f"The grid for {first.year:04d}-{first.month:02d} runs outside the supported date range"
        ) from None
    return start, end


def compute_visible_days(
    reference: date,
    week_start: int = SUNDAY,
    today: date | None = None,
) -> list[CalendarDay]:
    """
    Every day displayed for the month of ``reference``, in ascending order.

    Pure function - no I/O. The result always covers whole weeks, so its
    length is a multiple of 7 (28 to 42 days).

    Args:
        reference: Any day in the month to display
        week_start: Weekday the rows begin on (Monday=0 ... Sunday=6)
        today: Day used for the today/future flags (defaults to date.today())

    Raises:
        DateRangeError: for months whose padding weeks leave years 1-9999
    """
    reference = as_day(reference)
    today = as_day(today) if today else date.today()
    start, end = week_aligned_range(reference, week_start)

    days = []
    # Counted by offset so a grid ending on date.max never steps past it
    for offset in range((end - start).days + 1):
        current = start + timedelta(days=offset)
        days.append(
            CalendarDay(
                date=current,
                in_current_month=(current.year, current.month) == (reference.year, reference.month),
                is_today=current == today,
                is_future_or_today=current >= today,
            )
        )
    return days


def shift_month(reference: date, delta_months: int) -> date:
    """
    Move by whole months, clamping to the end of shorter months.

    Raises:
        DateRangeError: if the result would fall before year 1 or after 9999
    """
    try:
        return as_day(reference) + relativedelta(months=delta_months)
    except (ValueError, OverflowError):
        raise DateRangeError(
            f"Moving {delta_months} month(s) from {as_day(reference).isoformat()} leaves the supported date range"
        ) from None


def split_weeks(days: list) -> list[list]:
    """Chunk a grid (or any per-day sequence) into rows of seven."""
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def month_title(reference: date) -> str:
    return as_day(reference).strftime("%B %Y")


def weekday_headers(week_start: int = SUNDAY) -> list[str]:
    """Three-letter column headers rotated to the week start."""
    return [WEEKDAY_NAMES[(week_start + i) % 7][:3] for i in range(7)]
