"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from bitesnaps.api.models import CreatePostRequest, OnboardingAdvanceRequest
from bitesnaps.app_logging import configure_logging
from bitesnaps.containers import AppContainer
from bitesnaps.errors import (
    AnalysisFailedError,
    CaptureError,
    CaptureInProgressError,
    DuplicatePostError,
    OnboardingError,
)
from bitesnaps.services.onboarding import OnboardingFlow
from bitesnaps.services.stats import build_daily_wrap, summarize
from bitesnaps.services.views import TUTORIAL_STEPS, resolve_initial_view


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Simple health check endpoint."""
        state_container: AppContainer = request.app.state.container
        return {
            "status": "ok",
            "analysis_configured": state_container.analysis_configured,
            "analyzing": state_container.capture_service.analyzing,
        }

    @app.get("/view")
    async def initial_view(request: Request) -> dict[str, str]:
        """Return the screen the UI should open on."""
        state_container: AppContainer = request.app.state.container
        return {"view": resolve_initial_view(state_container.store).value}

    @app.get("/onboarding")
    async def onboarding_state(request: Request) -> dict[str, str]:
        """Return the current onboarding step."""
        state_container: AppContainer = request.app.state.container
        return _onboarding_payload(state_container.onboarding_flow)

    @app.post("/onboarding/advance")
    async def onboarding_advance(
        payload: OnboardingAdvanceRequest, request: Request
    ) -> dict[str, str]:
        """Submit input for the current step and move forward."""
        state_container: AppContainer = request.app.state.container
        flow = state_container.onboarding_flow
        try:
            flow.advance(payload.value)
        except OnboardingError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return _onboarding_payload(flow)

    @app.get("/user")
    async def get_user(request: Request) -> dict[str, object]:
        """Return the stored profile."""
        state_container: AppContainer = request.app.state.container
        user = state_container.store.get_user()
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return user.model_dump(mode="json", by_alias=True)

    @app.get("/posts")
    async def list_posts(request: Request) -> dict[str, object]:
        """Return the feed, newest first."""
        state_container: AppContainer = request.app.state.container
        posts = state_container.store.get_posts()
        return {
            "posts": [post.model_dump(mode="json", by_alias=True) for post in posts]
        }

    @app.post("/posts", status_code=status.HTTP_201_CREATED)
    async def create_post(
        payload: CreatePostRequest, request: Request
    ) -> dict[str, object]:
        """Analyze a captured photo and save it as a post."""
        state_container: AppContainer = request.app.state.container
        try:
            post = await state_container.capture_service.create_post(
                payload.image, payload.caption
            )
        except (CaptureInProgressError, DuplicatePostError) as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        except CaptureError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except AnalysisFailedError as exc:
            logger.warning("Post not saved, analysis unavailable: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="analysis unavailable",
            ) from exc
        return post.model_dump(mode="json", by_alias=True)

    @app.get("/challenges")
    async def list_challenges(request: Request) -> dict[str, object]:
        """Return challenges with their progress."""
        state_container: AppContainer = request.app.state.container
        challenges = state_container.store.get_challenges()
        return {
            "challenges": [
                challenge.model_dump(mode="json", by_alias=True)
                for challenge in challenges
            ]
        }

    @app.get("/stats")
    async def stats(request: Request) -> dict[str, object]:
        """Return category stats over all posts."""
        state_container: AppContainer = request.app.state.container
        return asdict(summarize(state_container.store.get_posts()))

    @app.get("/wrapped")
    async def wrapped(request: Request) -> dict[str, object]:
        """Return the daily wrap recap."""
        state_container: AppContainer = request.app.state.container
        store = state_container.store
        return asdict(build_daily_wrap(store.get_posts(), store.get_user()))

    @app.get("/tutorial")
    async def tutorial() -> dict[str, object]:
        """Return the first-run tutorial cards."""
        return {"steps": [asdict(step) for step in TUTORIAL_STEPS]}

    @app.post("/tutorial/seen")
    async def tutorial_seen(request: Request) -> dict[str, str]:
        """Mark the tutorial as shown."""
        state_container: AppContainer = request.app.state.container
        state_container.store.set_seen_tutorial()
        return {"view": resolve_initial_view(state_container.store).value}

    @app.delete("/data")
    async def clear_data(request: Request) -> dict[str, str]:
        """Sign out by wiping every stored record."""
        state_container: AppContainer = request.app.state.container
        state_container.store.clear_data()
        state_container.onboarding_flow.reset()
        logger.info("Cleared local data")
        return {"status": "ok"}

    return app


def _onboarding_payload(flow: OnboardingFlow) -> dict[str, str]:
    return {"step": flow.step.value}
