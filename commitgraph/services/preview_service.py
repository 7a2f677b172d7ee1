from datetime import date

from commitgraph.models import CommitSchedule
from commitgraph.services.calendar import week_start
from commitgraph.services.grid_builder import build_grid
from commitgraph.services.image_loader import decode_luma_image
from commitgraph.services.scheduler import schedule


def contribution_level(count: int) -> int:
    """Map daily commit count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    if count <= 2:
        return 1
    if count <= 5:
        return 2
    if count <= 9:
        return 3
    return 4


def build_weeks_payload(
    commit_schedule: CommitSchedule,
) -> list[dict[str, object]]:
    """Group scheduled days into week buckets as a contribution graph shows them."""

    grouped_weeks: dict[date, list[dict[str, object]]] = {}
    for day in commit_schedule.days:
        grouped_weeks.setdefault(week_start(day.date), []).append(
            {
                "date": day.date.isoformat(),
                "weekday": (day.date.weekday() + 1) % 7,
                "intensity": day.intensity,
                "commits": day.commit_count,
                "level": contribution_level(day.commit_count),
            }
        )

    return [
        {"week_start": start.isoformat(), "days": days}
        for start, days in sorted(grouped_weeks.items())
    ]


def preview_image(data: bytes, density: float, today: date) -> dict[str, object]:
    """Build the commit plan for uploaded image bytes without touching git."""

    image = decode_luma_image(data)
    commit_schedule = schedule(build_grid(image, today), density)
    return {
        "total": commit_schedule.total_commits,
        "max_daily_count": commit_schedule.max_daily_count,
        "weeks": build_weeks_payload(commit_schedule),
    }
