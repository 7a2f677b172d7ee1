from fastapi import APIRouter
from fastapi import HTTPException
from fastapi import Query
from fastapi import Request

from commitgraph.api.schemas.preview import PreviewResponse
from commitgraph.core.rate_limit import client_key
from commitgraph.errors import CommitGraphError
from commitgraph.services.calendar import today_utc
from commitgraph.services.preview_service import preview_image
from commitgraph.services.scheduler import parse_density
from commitgraph.settings import Settings


router = APIRouter()
settings = Settings()


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.post("/preview", response_model=PreviewResponse)
async def preview(
    request: Request,
    density: str | None = Query(default=None),
) -> dict[str, object]:
    """Return the commit plan for the image sent as the raw request body."""

    data = await request.body()
    if not data:
        raise HTTPException(status_code=400, detail="Request body must be an image")
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Image is too large")

    budget = request.app.state.upload_budget
    retry_after = budget.charge(client_key(request), len(data))
    if retry_after is not None:
        raise HTTPException(
            status_code=429,
            detail="Upload budget exhausted",
            headers={"Retry-After": str(retry_after)},
        )

    try:
        return preview_image(
            data,
            density=parse_density(density),
            today=today_utc(),
        )
    except CommitGraphError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
