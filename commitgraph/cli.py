import argparse
import logging
import sys
from collections.abc import Sequence

from commitgraph import __version__
from commitgraph.core.observability import configure_logging
from commitgraph.core.observability import init_sentry
from commitgraph.errors import CommitGraphError
from commitgraph.services.painter import paint
from commitgraph.services.scheduler import parse_density
from commitgraph.settings import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commitgraph",
        description="Paint a 7-pixel-high image onto a contribution graph.",
    )
    parser.add_argument("-i", "--image", required=True, help="Image to use")
    parser.add_argument("-n", "--username", help="Git user name")
    parser.add_argument("-m", "--email", help="Git user email")
    parser.add_argument(
        "-d",
        "--density",
        help="Percentage of each pixel's intensity that becomes commits "
        "(default: 3)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Repository directory to (re)create (default: graphrepo)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the per-day commit counts without touching any repository",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()

    configure_logging(settings.log_level)
    init_sentry(settings)

    raw_density = args.density
    if raw_density is None:
        raw_density = settings.density_percent

    try:
        paint(
            image_path=args.image,
            output_dir=args.output or settings.repo_dir,
            density=parse_density(raw_density),
            user_name=args.username or settings.git_user_name,
            user_email=args.email or settings.git_user_email,
            message=settings.commit_message,
            git_executable=settings.git_executable,
            dry_run=args.dry_run,
        )
    except CommitGraphError as exc:
        logger.error("error: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0
