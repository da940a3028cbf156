"""Shared test fixtures."""

import asyncio
import io
from dataclasses import dataclass, field

import pytest
from PIL import Image

from bitesnaps.adapters.memory_storage import InMemoryStorage
from bitesnaps.config import Settings
from bitesnaps.containers import AppContainer
from bitesnaps.domain.analysis import AnalysisResult, FoodCategory
from bitesnaps.domain.models import Post, User
from bitesnaps.services.analysis import AnalysisPipeline, VisionClient
from bitesnaps.services.capture import CaptureService
from bitesnaps.services.onboarding import OnboardingFlow
from bitesnaps.services.store import ProgressStore


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foodName": "Green salad",
            "category": ["Green/fresh"],
            "moodSuggestion": "Fresh",
            "timeContext": "Afternoon",
            "isHealthyLean": True,
            "isWater": False,
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append(
            {"model": model, "image_data_url": image_data_url, "schema": schema}
        )
        return self.payload


@dataclass
class FailingVisionClient(VisionClient):
    """Fake vision client that always raises."""

    error: Exception = field(default_factory=lambda: ConnectionError("network down"))

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        raise self.error


@dataclass
class SlowVisionClient(VisionClient):
    """Fake vision client that never answers in time."""

    delay_seconds: float = 1.0

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        await asyncio.sleep(self.delay_seconds)
        return {}


def make_image_bytes(width: int, height: int, image_format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(120, 200, 80)).save(
        buffer, format=image_format
    )
    return buffer.getvalue()


def make_analysis(
    categories: list[FoodCategory] | None = None,
    is_water: bool = False,
    is_healthy_lean: bool = False,
) -> AnalysisResult:
    return AnalysisResult(
        food_name="Test meal",
        category=categories if categories is not None else [FoodCategory.SAVORY],
        mood_suggestion="Calm",
        time_context="Evening",
        is_healthy_lean=is_healthy_lean,
        is_water=is_water,
    )


def make_post(post_id: str, analysis: AnalysisResult | None = None) -> Post:
    return Post(
        id=post_id,
        user_id="foodie",
        username="foodie",
        timestamp=1_700_000_000_000,
        image_url="data:image/png;base64,AAAA",
        caption=f"meal {post_id}",
        analysis=analysis,
        likes=0,
    )


def make_user() -> User:
    return User(
        username="foodie",
        email="foodie@example.com",
        streak=1,
        total_meals=0,
        eating_style=["The Explorer"],
    )


def make_pipeline(  # type: ignore[no-untyped-def]
    client: VisionClient, **overrides
) -> AnalysisPipeline:
    options: dict[str, object] = {
        "client": client,
        "model": "gpt-4.1-mini",
        "reasoning_effort": None,
        "store": False,
    }
    options.update(overrides)
    return AnalysisPipeline(**options)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        storage_backend="memory",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage) -> ProgressStore:
    return ProgressStore(storage)


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(
    settings: Settings,
    store: ProgressStore,
    vision_client: FakeVisionClient,
) -> AppContainer:
    pipeline = make_pipeline(vision_client)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        analysis_pipeline=pipeline,
        capture_service=CaptureService(pipeline=pipeline, store=store),
        onboarding_flow=OnboardingFlow(store=store),
        close_resources=close_resources,
    )
