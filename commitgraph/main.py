from fastapi import FastAPI

from commitgraph import __version__
from commitgraph.api.routes.preview import router
from commitgraph.core.observability import configure_logging
from commitgraph.core.observability import init_sentry
from commitgraph.core.rate_limit import UploadBudget
from commitgraph.settings import Settings


def create_app() -> FastAPI:
    """Build the preview API with observability and the upload budget wired in."""

    settings = Settings()
    configure_logging(settings.log_level)
    init_sentry(settings)

    app = FastAPI(title="commitgraph", version=__version__)
    app.state.upload_budget = UploadBudget(
        max_bytes=settings.upload_budget_bytes,
        window_seconds=settings.upload_budget_window_seconds,
    )
    app.include_router(router)
    return app


app = create_app()
