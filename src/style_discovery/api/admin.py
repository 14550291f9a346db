"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from style_discovery.api.schemas import (
    ActiveToggleRequest,
    ImageView,
    SessionResultView,
)

if TYPE_CHECKING:
    from style_discovery.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/library", dependencies=[Depends(require_admin)])
async def list_library(request: Request) -> dict[str, object]:
    """Return library images with their active flags."""
    container: AppContainer = request.app.state.container
    images = container.library_service.list_images()
    return {"images": [ImageView.from_image(image).model_dump() for image in images]}


@router.post("/library/{image_id}/active", dependencies=[Depends(require_admin)])
async def set_image_active(
    image_id: str, body: ActiveToggleRequest, request: Request
) -> dict[str, object]:
    """Include or exclude an image from discovery sampling."""
    container: AppContainer = request.app.state.container
    try:
        image = container.library_service.set_active(image_id, body.is_active)
    except RuntimeError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return ImageView.from_image(image).model_dump()


@router.get("/sessions", dependencies=[Depends(require_admin)])
async def list_sessions(request: Request, limit: int = 20) -> dict[str, object]:
    """Return recent completed sessions."""
    container: AppContainer = request.app.state.container
    results = container.history_service.recent(limit)
    return {
        "sessions": [
            SessionResultView.from_result(result).model_dump(mode="json")
            for result in results
        ]
    }


@router.get("/sessions/{result_id}", dependencies=[Depends(require_admin)])
async def session_detail(result_id: UUID, request: Request) -> dict[str, object]:
    """Return a single completed session."""
    container: AppContainer = request.app.state.container
    result = container.history_service.get(result_id)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return SessionResultView.from_result(result).model_dump(mode="json")


@router.get("/analytics", dependencies=[Depends(require_admin)])
async def analytics(request: Request, limit: int = 50) -> dict[str, object]:
    """Return mean category affinity across recent sessions."""
    container: AppContainer = request.app.state.container
    trends = container.history_service.category_trends(limit)
    return {
        "categories": [
            {
                "key": trend.key,
                "label": trend.label,
                "mean_affinity": trend.mean_affinity,
                "sessions": trend.sessions,
            }
            for trend in trends
        ]
    }
