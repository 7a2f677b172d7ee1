import logging
from datetime import date
from datetime import datetime
from pathlib import Path

import pytest

from commitgraph.clients.git_client import GitRepository
from commitgraph.errors import ImageNotFound
from commitgraph.errors import InvalidDensity
from commitgraph.errors import SinkCommitError
from commitgraph.errors import UnsupportedImageShape
from commitgraph.services.grid_builder import build_grid
from commitgraph.services.painter import apply_schedule
from commitgraph.services.painter import paint
from commitgraph.services.scheduler import schedule

TODAY = date(2026, 10, 21)


class RecordingSink:
    def __init__(self, fail_on_call: int | None = None) -> None:
        self.fail_on_call = fail_on_call
        self.events: list[tuple] = []

    def initialize(self, path, git_executable="git"):
        self.events.append(("initialize", Path(path)))
        return GitRepository(path=Path(path), git_executable=git_executable)

    def set_identity(self, repository, name=None, email=None):
        self.events.append(("identity", name, email))

    def record_empty_commit(self, repository, timestamp, message):
        commits = [event for event in self.events if event[0] == "commit"]
        if self.fail_on_call is not None and len(commits) + 1 == self.fail_on_call:
            raise SinkCommitError(f"Commit dated {timestamp} failed")
        self.events.append(("commit", timestamp, message))

    @property
    def commits(self) -> list[tuple]:
        return [event for event in self.events if event[0] == "commit"]


@pytest.fixture
def sink(monkeypatch: pytest.MonkeyPatch) -> RecordingSink:
    fake = RecordingSink()
    monkeypatch.setattr("commitgraph.services.painter.initialize", fake.initialize)
    monkeypatch.setattr("commitgraph.services.painter.set_identity", fake.set_identity)
    monkeypatch.setattr(
        "commitgraph.services.painter.record_empty_commit", fake.record_empty_commit
    )
    return fake


@pytest.fixture
def week_image(make_image, tmp_path: Path) -> Path:
    path = tmp_path / "week.png"
    make_image([[0, 85, 170, 255, 0, 0, 0]]).save(path)
    return path


def test_paint_records_commits_in_order(
    sink: RecordingSink, week_image: Path, tmp_path: Path
) -> None:
    result = paint(
        image_path=week_image,
        output_dir=tmp_path / "graphrepo",
        density=0.03,
        today=TODAY,
        user_name="Octo Cat",
        user_email="octo@example.com",
    )

    assert sink.events[0] == ("initialize", tmp_path / "graphrepo")
    assert sink.events[1] == ("identity", "Octo Cat", "octo@example.com")
    assert [event[1] for event in sink.commits] == (
        [datetime(2026, 10, 12)] * 2
        + [datetime(2026, 10, 13)] * 5
        + [datetime(2026, 10, 14)] * 7
    )
    assert {event[2] for event in sink.commits} == {"."}
    assert result.max_daily_count == 7


def test_paint_logs_every_day_and_the_maximum(
    sink: RecordingSink,
    week_image: Path,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="commitgraph")

    paint(week_image, tmp_path / "graphrepo", density=0.03, today=TODAY)

    assert "Date: 2026-10-11 00:00:00 -- 0 commits" in caplog.messages
    assert "Date: 2026-10-14 00:00:00 -- 7 commits" in caplog.messages
    assert caplog.messages[-1] == "Max commits in a single day: 7"


def test_paint_dry_run_touches_no_repository(
    sink: RecordingSink, week_image: Path, tmp_path: Path
) -> None:
    result = paint(
        week_image, tmp_path / "graphrepo", density=0.03, today=TODAY, dry_run=True
    )

    assert sink.events == []
    assert result.total_commits == 14


def test_paint_stops_at_first_failed_commit(
    monkeypatch: pytest.MonkeyPatch, week_image: Path, tmp_path: Path
) -> None:
    failing = RecordingSink(fail_on_call=4)
    monkeypatch.setattr("commitgraph.services.painter.initialize", failing.initialize)
    monkeypatch.setattr(
        "commitgraph.services.painter.set_identity", failing.set_identity
    )
    monkeypatch.setattr(
        "commitgraph.services.painter.record_empty_commit",
        failing.record_empty_commit,
    )

    with pytest.raises(SinkCommitError):
        paint(week_image, tmp_path / "graphrepo", density=0.03, today=TODAY)

    assert len(failing.commits) == 3


def test_paint_rejects_negative_density_before_anything_else(
    sink: RecordingSink, tmp_path: Path
) -> None:
    with pytest.raises(InvalidDensity):
        paint(tmp_path / "missing.png", tmp_path / "graphrepo", density=-1.0)

    assert sink.events == []


def test_paint_reports_missing_image(sink: RecordingSink, tmp_path: Path) -> None:
    with pytest.raises(ImageNotFound, match="missing.png"):
        paint(tmp_path / "missing.png", tmp_path / "graphrepo", density=0.03)

    assert sink.events == []


def test_paint_rejects_wrong_height_before_touching_repository(
    sink: RecordingSink, make_image, tmp_path: Path
) -> None:
    path = tmp_path / "tall.png"
    make_image([[255] * 10], height=10).save(path)

    with pytest.raises(UnsupportedImageShape):
        paint(path, tmp_path / "graphrepo", density=0.03, today=TODAY)

    assert sink.events == []


def test_dry_run_logs_the_same_day_lines(
    sink: RecordingSink,
    week_image: Path,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="commitgraph")

    paint(week_image, tmp_path / "graphrepo", density=0.03, today=TODAY, dry_run=True)

    day_lines = [line for line in caplog.messages if line.startswith("Date: ")]
    assert day_lines == [
        "Date: 2026-10-11 00:00:00 -- 0 commits",
        "Date: 2026-10-12 00:00:00 -- 2 commits",
        "Date: 2026-10-13 00:00:00 -- 5 commits",
        "Date: 2026-10-14 00:00:00 -- 7 commits",
        "Date: 2026-10-15 00:00:00 -- 0 commits",
        "Date: 2026-10-16 00:00:00 -- 0 commits",
        "Date: 2026-10-17 00:00:00 -- 0 commits",
    ]
    assert sink.events == []


def test_apply_schedule_without_repository_records_nothing(
    sink: RecordingSink, make_image
) -> None:
    commit_schedule = schedule(build_grid(make_image([[255] * 7]), TODAY), 0.03)

    assert apply_schedule(None, commit_schedule, ".") == 0
    assert sink.commits == []
