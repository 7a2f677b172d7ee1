"""Turn an intensity grid into an ordered list of dated commit requests.

The number of commits for a day is ``int(intensity * density)``: the product
is truncated toward zero, never rounded. With the default density of 0.03 a
pixel of 99 yields 2 commits and a pixel of 100 yields 3. This mirrors the
behavior of the original tool and is kept on purpose.
"""

import logging
import math

from commitgraph.errors import InvalidDensity
from commitgraph.models import CommitHistoryGrid
from commitgraph.models import CommitRequest
from commitgraph.models import CommitSchedule
from commitgraph.models import DaySchedule

logger = logging.getLogger(__name__)

DEFAULT_DENSITY = 0.03


def parse_density(raw_value: str | float | None) -> float:
    """Convert a density percentage ("3" meaning 3%) to a scaling factor.

    A missing value yields the default factor of 0.03.
    """

    if raw_value is None:
        return DEFAULT_DENSITY

    try:
        percent = float(raw_value)
    except (TypeError, ValueError) as exc:
        raise InvalidDensity(f"Couldn't parse density value {raw_value!r}") from exc

    if not math.isfinite(percent):
        raise InvalidDensity(f"Density must be a finite number, got {raw_value!r}")

    if percent < 0:
        raise InvalidDensity(f"Density must not be negative, got {raw_value!r}")

    return percent / 100


def validate_density(density: float) -> None:
    if not math.isfinite(density):
        raise InvalidDensity(f"Density must be a finite number, got {density!r}")
    if density < 0:
        raise InvalidDensity(f"Density must not be negative, got {density!r}")


def commit_count(intensity: int, density: float) -> int:
    """Number of commits for one day, truncating the scaled intensity."""

    return int(intensity * density)


def schedule(grid: CommitHistoryGrid, density: float) -> CommitSchedule:
    """Expand every cell of `grid` into `commit_count` requests.

    Requests come out in column-major, then row-major order, and must be
    applied in that order.

    Raises:
        InvalidDensity: If `density` is negative, before anything is scheduled.
    """

    validate_density(density)

    days: list[DaySchedule] = []
    requests: list[CommitRequest] = []
    max_daily_count = 0

    for cell in grid.cells():
        count = commit_count(cell.intensity, density)
        days.append(
            DaySchedule(date=cell.date, intensity=cell.intensity, commit_count=count)
        )
        request = CommitRequest(timestamp=cell.timestamp)
        requests.extend([request] * count)
        max_daily_count = max(max_daily_count, count)

    logger.debug("Scheduled %d commits over %d days", len(requests), len(days))
    return CommitSchedule(
        days=days, requests=requests, max_daily_count=max_daily_count
    )
