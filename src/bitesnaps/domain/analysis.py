"""Models for meal photo analysis results."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FoodCategory(StrEnum):
    """Fixed tag vocabulary for analyzed meals."""

    COMFORT = "Comfort"
    SWEET = "Sweet"
    SAVORY = "Savory"
    HIGH_CARB = "High-carb"
    GREEN_FRESH = "Green/fresh"
    PROTEIN_HEAVY = "Protein-heavy"
    SNACK = "Snack"
    DRINK = "Drink"


class FailurePolicy(StrEnum):
    """How the analysis pipeline reacts to a failed inference call."""

    FALLBACK = "fallback"
    RAISE = "raise"


class AnalysisResult(BaseModel):
    """Structured output describing a photographed meal."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    food_name: str
    category: list[FoodCategory]
    mood_suggestion: str
    time_context: str
    is_healthy_lean: bool
    is_water: bool


def neutral_result() -> AnalysisResult:
    """Return the neutral result used when analysis is unavailable."""
    return AnalysisResult(
        food_name="Detected Meal",
        category=[FoodCategory.SAVORY],
        mood_suggestion="Nourishing",
        time_context="Daytime",
        is_healthy_lean=False,
        is_water=False,
    )
