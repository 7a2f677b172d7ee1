import logging
import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from commitgraph.errors import CommitGraphError
from commitgraph.errors import SinkCommitError
from commitgraph.errors import SinkInitError
from commitgraph.models import TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitRepository:
    """A git working tree that commits are recorded into."""

    path: Path
    git_executable: str = "git"


def _run_git(
    repository: GitRepository,
    args: list[str],
    error_cls: type[CommitGraphError],
    env: Mapping[str, str] | None = None,
) -> str:
    """Run one git command inside the repository and return its stdout."""

    command = [repository.git_executable, *args]
    try:
        result = subprocess.run(
            command,
            cwd=repository.path,
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise error_cls(f"Could not run {' '.join(command)}: {exc}") from exc

    if result.stderr:
        logger.debug("%s: %s", " ".join(command), result.stderr.strip())

    if result.returncode != 0:
        raise error_cls(
            f"{' '.join(command)} exited with status {result.returncode}: "
            f"{result.stderr.strip()}"
        )

    return result.stdout


def initialize(path: str | Path, git_executable: str = "git") -> GitRepository:
    """Create an empty git repository at `path`.

    An existing directory is only replaced when it is empty or already a git
    work tree; anything else at `path` is left alone and reported.
    """

    path = Path(path)
    try:
        if path.is_dir():
            if any(path.iterdir()) and not (path / ".git").exists():
                raise SinkInitError(
                    f"Refusing to replace {path}: "
                    "it is neither empty nor a git repository"
                )
            shutil.rmtree(path)
        elif path.exists():
            raise SinkInitError(f"{path} exists and is not a directory")
        path.mkdir(parents=True)
    except OSError as exc:
        raise SinkInitError(f"Could not prepare repository directory {path}") from exc

    repository = GitRepository(path=path, git_executable=git_executable)
    _run_git(repository, ["init", "."], SinkInitError)
    return repository


def set_identity(
    repository: GitRepository, name: str | None = None, email: str | None = None
) -> None:
    """Store the commit identity in the repository's local config."""

    if name:
        _run_git(repository, ["config", "user.name", name], SinkInitError)
    if email:
        _run_git(repository, ["config", "user.email", email], SinkInitError)


def record_empty_commit(
    repository: GitRepository, timestamp: datetime, message: str
) -> None:
    """Record one empty commit authored and committed at `timestamp`.

    The dates are handed to git through the child's environment only; the
    environment of this process is left untouched.
    """

    timestamp_text = timestamp.strftime(TIMESTAMP_FORMAT)
    env = {
        **os.environ,
        "GIT_AUTHOR_DATE": timestamp_text,
        "GIT_COMMITTER_DATE": timestamp_text,
    }

    try:
        _run_git(
            repository,
            ["commit", "--allow-empty", "-m", message, "--date", timestamp_text],
            SinkCommitError,
            env=env,
        )
    except SinkCommitError as exc:
        raise SinkCommitError(f"Commit dated {timestamp_text} failed: {exc}") from exc
