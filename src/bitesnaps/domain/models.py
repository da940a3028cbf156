"""Domain models for the meal journal."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bitesnaps.domain.analysis import AnalysisResult, FoodCategory

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class User(BaseModel):
    """The single local profile."""

    model_config = _CAMEL_CONFIG

    username: str
    email: str
    avatar_url: str | None = None
    streak: int = 0
    total_meals: int = 0
    eating_style: list[str] = Field(default_factory=list)
    friends: list[str] = Field(default_factory=list)


class Post(BaseModel):
    """One logged meal."""

    model_config = _CAMEL_CONFIG

    id: str
    user_id: str
    username: str
    timestamp: int
    image_url: str
    caption: str = ""
    analysis: AnalysisResult | None = None
    likes: int = 0


class ChallengeType(StrEnum):
    """Audience of a challenge."""

    SOLO = "SOLO"
    FRIENDS = "FRIENDS"
    COMMUNITY = "COMMUNITY"


class Challenge(BaseModel):
    """A static gamified goal with a progress counter."""

    model_config = _CAMEL_CONFIG

    id: str
    title: str
    description: str
    type: ChallengeType
    target_count: int = Field(ge=1)
    current_count: int = Field(default=0, ge=0)
    completed: bool = False
    required_category: FoodCategory | None = None
