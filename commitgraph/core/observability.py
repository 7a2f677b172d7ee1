import logging
import sys

import sentry_sdk

from commitgraph.settings import Settings

LOG_FORMAT = "%(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send `commitgraph` log records below ERROR to stdout.

    Errors are reported on stderr by the caller and reach Sentry through its
    logging integration.
    """

    logger = logging.getLogger("commitgraph")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(lambda record: record.levelno < logging.ERROR)
        logger.addHandler(handler)


def init_sentry(app_settings: Settings) -> None:
    """Initialize Sentry SDK when DSN is configured."""

    if not app_settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
