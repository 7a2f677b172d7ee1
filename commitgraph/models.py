from collections.abc import Iterator
from datetime import date
from datetime import datetime
from datetime import time
from datetime import timedelta

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator

DAYS_PER_WEEK = 7
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DayCell(BaseModel):
    """One calendar day and the raw pixel sample painted onto it."""

    model_config = ConfigDict(frozen=True)

    date: date
    intensity: int = Field(ge=0, le=255)

    @property
    def timestamp(self) -> datetime:
        return datetime.combine(self.date, time.min)

    @property
    def timestamp_text(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)


class WeekColumn(BaseModel):
    """Seven consecutive days, row 0 being the Sunday that opens the week."""

    model_config = ConfigDict(frozen=True)

    days: tuple[DayCell, ...] = Field(
        min_length=DAYS_PER_WEEK, max_length=DAYS_PER_WEEK
    )

    @property
    def week_start(self) -> date:
        return self.days[0].date


class CommitHistoryGrid(BaseModel):
    """Week columns ordered oldest first.

    Walking the columns and then the rows of each column visits strictly
    consecutive calendar days.
    """

    model_config = ConfigDict(frozen=True)

    weeks: tuple[WeekColumn, ...] = ()

    @model_validator(mode="after")
    def check_consecutive_days(self) -> "CommitHistoryGrid":
        previous: date | None = None
        for cell in self.cells():
            if previous is not None and cell.date - previous != timedelta(days=1):
                raise ValueError(
                    f"grid dates are not consecutive: {previous} then {cell.date}"
                )
            previous = cell.date
        return self

    @property
    def width(self) -> int:
        return len(self.weeks)

    def cells(self) -> Iterator[DayCell]:
        """Yield cells column-major, then row-major within a column."""

        for week in self.weeks:
            yield from week.days


class CommitRequest(BaseModel):
    """An empty change to be recorded at a fixed timestamp."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime

    @property
    def timestamp_text(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)


class DaySchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    intensity: int
    commit_count: int

    @property
    def timestamp_text(self) -> str:
        return datetime.combine(self.date, time.min).strftime(TIMESTAMP_FORMAT)


class CommitSchedule(BaseModel):
    """Ordered commit requests for a grid along with per-day counts."""

    days: list[DaySchedule] = Field(default_factory=list)
    requests: list[CommitRequest] = Field(default_factory=list)
    max_daily_count: int = 0

    @property
    def total_commits(self) -> int:
        return len(self.requests)
