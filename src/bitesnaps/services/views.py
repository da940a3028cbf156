"""View routing and first-run tutorial content."""

from dataclasses import dataclass
from enum import Enum

from bitesnaps.services.store import ProgressStore


class ViewState(Enum):
    """Screen currently rendered by the UI."""

    ONBOARDING = "ONBOARDING"
    TUTORIAL = "TUTORIAL"
    FEED = "FEED"
    CAMERA = "CAMERA"
    STATS = "STATS"
    CHALLENGES = "CHALLENGES"
    PROFILE = "PROFILE"
    WRAPPED = "WRAPPED"


@dataclass(frozen=True)
class TutorialStep:
    """One card of the first-run tutorial."""

    title: str
    text: str
    target: str


TUTORIAL_STEPS: tuple[TutorialStep, ...] = (
    TutorialStep(
        "Capture Instantly",
        "Tap the camera button to snap what you're eating. "
        "No calories, just memories.",
        "bottom-center",
    ),
    TutorialStep(
        "Your Feed",
        "See meals from friends and your own timeline.",
        "bottom-left",
    ),
    TutorialStep(
        "Understand Patterns",
        "Check stats to see your eating habits over time.",
        "bottom-right",
    ),
)


def resolve_initial_view(store: ProgressStore) -> ViewState:
    """Pick the first screen based on stored profile and tutorial state."""
    if store.get_user() is None:
        return ViewState.ONBOARDING
    if store.has_seen_tutorial():
        return ViewState.FEED
    return ViewState.TUTORIAL
