"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from style_discovery.api.admin import router as admin_router
from style_discovery.api.schemas import (
    ImageView,
    ProgressView,
    ReadinessView,
    SessionResultView,
    StartRequest,
    SwipeRequest,
    TransitionView,
)
from style_discovery.app_logging import configure_logging
from style_discovery.containers import AppContainer
from style_discovery.domain.errors import (
    InsufficientPoolError,
    SessionAlreadyActiveError,
)
from style_discovery.services.discovery import DiscoveryService
from style_discovery.services.session_machine import SessionState, Transition


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/discovery/readiness")
    async def readiness(request: Request) -> ReadinessView:
        """Report whether the library can support a session."""
        discovery = _discovery(request)
        return ReadinessView.from_readiness(discovery.readiness())

    @app.post("/discovery/start")
    async def start(body: StartRequest, request: Request) -> TransitionView:
        """Sample the library and present the first image."""
        discovery = _discovery(request)
        try:
            machine = discovery.start_session(body.client_name)
        except InsufficientPoolError as exc:
            logger.info(
                "Discovery start refused",
                extra={"pool_size": exc.pool_size, "min_required": exc.min_required},
            )
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={
                    "status": "not_ready",
                    "pool_size": exc.pool_size,
                    "min_required": exc.min_required,
                },
            ) from exc
        except SessionAlreadyActiveError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={"status": "already_active"},
            ) from exc
        return _transition_view(
            discovery, Transition(accepted=True, state=machine.state)
        )

    @app.post("/discovery/swipe")
    async def swipe(body: SwipeRequest, request: Request) -> TransitionView:
        """Record a decision on the current image."""
        discovery = _discovery(request)
        return _transition_view(discovery, discovery.swipe(body.direction))

    @app.post("/discovery/undo")
    async def undo(request: Request) -> TransitionView:
        """Withdraw the latest decision."""
        discovery = _discovery(request)
        return _transition_view(discovery, discovery.undo())

    @app.post("/discovery/cancel")
    async def cancel(request: Request) -> TransitionView:
        """Abandon the current session."""
        discovery = _discovery(request)
        return _transition_view(discovery, discovery.cancel())

    @app.get("/discovery/summary")
    async def summary(request: Request) -> SessionResultView:
        """Return the most recently completed session."""
        discovery = _discovery(request)
        if discovery.last_result is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return SessionResultView.from_result(discovery.last_result)

    return app


def _discovery(request: Request) -> DiscoveryService:
    state_container: AppContainer = request.app.state.container
    return state_container.discovery_service


def _transition_view(
    discovery: DiscoveryService, transition: Transition
) -> TransitionView:
    """Describe a transition together with what the participant sees next."""
    view = TransitionView(
        accepted=transition.accepted,
        state=str(transition.state),
        reason=transition.reason,
    )
    machine = discovery.active_session
    if machine is not None:
        image = machine.current_image
        view.current_image = ImageView.from_image(image) if image else None
        view.progress = ProgressView.from_progress(machine.progress)
        view.can_undo = machine.can_undo
    if (
        transition.accepted
        and transition.state is SessionState.COMPLETED
        and discovery.last_result is not None
    ):
        view.result = SessionResultView.from_result(discovery.last_result)
    return view
