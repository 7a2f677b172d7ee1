import logging
from datetime import date
from pathlib import Path

from commitgraph.clients.git_client import GitRepository
from commitgraph.clients.git_client import initialize
from commitgraph.clients.git_client import record_empty_commit
from commitgraph.clients.git_client import set_identity
from commitgraph.models import CommitSchedule
from commitgraph.services.calendar import today_utc
from commitgraph.services.grid_builder import build_grid
from commitgraph.services.image_loader import load_luma_image
from commitgraph.services.scheduler import schedule
from commitgraph.services.scheduler import validate_density

logger = logging.getLogger(__name__)


def apply_schedule(
    repository: GitRepository | None,
    commit_schedule: CommitSchedule,
    message: str,
) -> int:
    """Log each day and record its commits in order; return how many were made.

    Without a repository the days are only logged. The first failing commit
    aborts the run; commits already recorded stay.
    """

    requests = iter(commit_schedule.requests)
    recorded = 0
    for day in commit_schedule.days:
        logger.info("Date: %s -- %d commits", day.timestamp_text, day.commit_count)
        if repository is None:
            continue
        for _ in range(day.commit_count):
            request = next(requests)
            record_empty_commit(repository, request.timestamp, message)
            recorded += 1

    return recorded


def paint(
    image_path: str | Path,
    output_dir: str | Path,
    density: float,
    today: date | None = None,
    user_name: str | None = None,
    user_email: str | None = None,
    message: str = ".",
    git_executable: str = "git",
    dry_run: bool = False,
) -> CommitSchedule:
    """Turn the image at `image_path` into a freshly initialized repository.

    With `dry_run` the schedule is computed and logged but no repository is
    created.
    """

    validate_density(density)

    logger.info("Loading image...")
    image = load_luma_image(image_path)
    grid = build_grid(image, today or today_utc())
    commit_schedule = schedule(grid, density)

    repository = None
    if not dry_run:
        logger.info("Initializing git repo...")
        repository = initialize(output_dir, git_executable=git_executable)
        set_identity(repository, name=user_name, email=user_email)
    apply_schedule(repository, commit_schedule, message)

    logger.info("Max commits in a single day: %d", commit_schedule.max_daily_count)
    return commit_schedule
