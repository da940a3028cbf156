"""Pydantic models for API request payloads."""

from pydantic import BaseModel


class CreatePostRequest(BaseModel):
    """Captured photo as a data URL plus an optional caption."""

    image: str
    caption: str = ""


class OnboardingAdvanceRequest(BaseModel):
    """Input for the current onboarding step."""

    value: str | None = None
