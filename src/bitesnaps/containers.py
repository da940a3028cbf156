"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from bitesnaps.adapters.file_storage import JsonFileStorage
from bitesnaps.adapters.memory_storage import InMemoryStorage
from bitesnaps.adapters.openai_vision_client import OpenAIVisionClient
from bitesnaps.adapters.supabase_storage import SupabaseStorage
from bitesnaps.config import Settings, has_analysis_credentials
from bitesnaps.services.analysis import (
    AnalysisPipeline,
    UnconfiguredVisionClient,
    VisionClient,
)
from bitesnaps.services.capture import CaptureService
from bitesnaps.services.onboarding import OnboardingFlow
from bitesnaps.services.store import KeyValueStorage, ProgressStore

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: ProgressStore
    analysis_pipeline: AnalysisPipeline
    capture_service: CaptureService
    onboarding_flow: OnboardingFlow
    close_resources: Callable[[], Awaitable[None]]

    @property
    def analysis_configured(self) -> bool:
        """Return True when a real inference client is wired."""
        return not isinstance(self.analysis_pipeline.client, UnconfiguredVisionClient)


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the storage backend selected in settings."""
    if settings.storage_backend == "memory":
        return InMemoryStorage()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStorage(client=client, table_name=settings.supabase_table)
    return JsonFileStorage.create(settings.storage_path)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = ProgressStore(build_storage(resolved_settings))

    openai_client: OpenAIVisionClient | None = None
    vision_client: VisionClient
    if has_analysis_credentials(resolved_settings):
        openai_client = OpenAIVisionClient.create(
            api_key=resolved_settings.openai_api_key,
            timeout_seconds=resolved_settings.analysis_timeout_seconds,
        )
        vision_client = openai_client
    else:
        logger.warning("OPENAI_API_KEY is not set; meal analysis is unavailable")
        vision_client = UnconfiguredVisionClient()

    analysis_pipeline = AnalysisPipeline(
        client=vision_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        max_width=resolved_settings.image_max_width,
        quality=resolved_settings.image_quality,
        timeout_seconds=resolved_settings.analysis_timeout_seconds,
        failure_policy=resolved_settings.analysis_failure_policy,
    )
    capture_service = CaptureService(pipeline=analysis_pipeline, store=store)
    onboarding_flow = OnboardingFlow(store=store)

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        analysis_pipeline=analysis_pipeline,
        capture_service=capture_service,
        onboarding_flow=onboarding_flow,
        close_resources=close_resources,
    )
