"""Domain models for first-run onboarding."""

from enum import Enum


class OnboardingStep(Enum):
    """Ordered onboarding screens."""

    WELCOME = "WELCOME"
    EMAIL_ENTRY = "EMAIL_ENTRY"
    USERNAME_ENTRY = "USERNAME_ENTRY"
    PASSWORD_ENTRY = "PASSWORD_ENTRY"
    ADD_FRIENDS = "ADD_FRIENDS"
    DONE = "DONE"
