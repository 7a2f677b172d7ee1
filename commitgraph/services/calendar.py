from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import UTC

from commitgraph.errors import DateRangeError
from commitgraph.models import DAYS_PER_WEEK


def today_utc() -> date:
    """Return the current calendar date in UTC."""

    return datetime.now(UTC).date()


def week_start(day: date) -> date:
    """Return the Sunday on or before `day`."""

    weekday = (day.weekday() + 1) % DAYS_PER_WEEK
    return day - timedelta(days=weekday)


def align(today: date, column_count: int) -> date:
    """Return the date of row 0 in column 0 of a grid `column_count` weeks wide.

    The newest column is the last completed week: it ends on the Saturday
    before the Sunday that starts the week of `today`, so no cell lies after
    `today`.

    Raises:
        DateRangeError: If `column_count` is negative or the shift leaves the
            range `datetime.date` can represent.
    """

    if column_count < 0:
        raise DateRangeError(f"column count must not be negative, got {column_count}")

    try:
        return week_start(today) - timedelta(days=DAYS_PER_WEEK * column_count)
    except OverflowError as exc:
        raise DateRangeError(
            f"cannot go back {column_count} weeks from {today.isoformat()}"
        ) from exc
