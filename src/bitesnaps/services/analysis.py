"""Meal photo analysis pipeline using LLM vision."""

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from bitesnaps.domain.analysis import (
    AnalysisResult,
    FailurePolicy,
    FoodCategory,
    neutral_result,
)
from bitesnaps.errors import AnalysisConfigurationError, AnalysisFailedError
from bitesnaps.services.images import (
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
    detect_mime_type,
    downscale_image,
)

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = (
    "Analyze this food image for a mindful eating journal. "
    "Identify the food name (short), categories (select zero or more from: "
    + ", ".join(category.value for category in FoodCategory)
    + "), suggest a mood, determine the time context "
    "(Morning, Afternoon, Evening, Late Night), flag whether it is primarily "
    "green, fresh or vegetable based, and flag whether it is just water."
)

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodName": {"type": "string"},
        "category": {
            "type": "array",
            "items": {
                "type": "string",
                "enum": [category.value for category in FoodCategory],
            },
        },
        "moodSuggestion": {"type": "string"},
        "timeContext": {"type": "string"},
        "isHealthyLean": {
            "type": "boolean",
            "description": "Is it primarily green/fresh/vegetable based?",
        },
        "isWater": {"type": "boolean", "description": "Is this just water?"},
    },
    "required": [
        "foodName",
        "category",
        "moodSuggestion",
        "timeContext",
        "isHealthyLean",
        "isWater",
    ],
    "additionalProperties": False,
}


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

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
        """Return structured vision extraction data."""


@dataclass
class UnconfiguredVisionClient(VisionClient):
    """Vision client used when no inference credential is configured."""

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
        raise AnalysisConfigurationError("OPENAI_API_KEY is not configured")


@dataclass
class AnalysisPipeline:
    """Downscale, classify and validate a meal photo."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool
    max_width: int = DEFAULT_MAX_WIDTH
    quality: int = DEFAULT_QUALITY
    timeout_seconds: float = 20.0
    failure_policy: FailurePolicy = FailurePolicy.FALLBACK

    async def analyze(self, photo: bytes) -> AnalysisResult:
        """Return the analysis for a photo, applying the failure policy."""
        try:
            return await self._analyze(photo)
        except Exception as exc:
            logger.exception("Meal analysis failed")
            if self.failure_policy is FailurePolicy.RAISE:
                raise AnalysisFailedError(str(exc) or type(exc).__name__) from exc
            return neutral_result()

    async def _analyze(self, photo: bytes) -> AnalysisResult:
        prepared = await asyncio.to_thread(
            downscale_image, photo, self.max_width, self.quality
        )
        raw = await asyncio.wait_for(
            self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=_to_data_url(prepared),
                schema=ANALYSIS_SCHEMA,
                prompt=ANALYSIS_PROMPT,
            ),
            timeout=self.timeout_seconds,
        )
        return AnalysisResult.model_validate(raw)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
