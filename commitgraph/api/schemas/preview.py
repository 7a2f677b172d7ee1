from datetime import date

from pydantic import BaseModel


class PreviewDay(BaseModel):
    """Single day of the planned commit graph."""

    date: date
    weekday: int
    intensity: int
    commits: int
    level: int


class PreviewWeek(BaseModel):
    """Week bucket containing ordered daily items, Sunday first."""

    week_start: date
    days: list[PreviewDay]


class PreviewResponse(BaseModel):
    """Commit plan for an uploaded image."""

    total: int
    max_daily_count: int
    weeks: list[PreviewWeek]
