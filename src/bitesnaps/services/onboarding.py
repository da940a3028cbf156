"""Onboarding state machine for first-run account setup."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from bitesnaps.domain.models import User
from bitesnaps.domain.onboarding import OnboardingStep
from bitesnaps.errors import OnboardingError, OnboardingValidationError
from bitesnaps.services.store import ProgressStore

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
DEFAULT_EATING_STYLE = "The Explorer"

TRANSITIONS: dict[OnboardingStep, OnboardingStep] = {
    OnboardingStep.WELCOME: OnboardingStep.EMAIL_ENTRY,
    OnboardingStep.EMAIL_ENTRY: OnboardingStep.USERNAME_ENTRY,
    OnboardingStep.USERNAME_ENTRY: OnboardingStep.PASSWORD_ENTRY,
    OnboardingStep.PASSWORD_ENTRY: OnboardingStep.ADD_FRIENDS,
    OnboardingStep.ADD_FRIENDS: OnboardingStep.DONE,
}


def _validate_email(value: str) -> None:
    if "@" not in value:
        raise OnboardingValidationError("Please enter a valid email.")


def _validate_username(value: str) -> None:
    if len(value) < MIN_USERNAME_LENGTH:
        raise OnboardingValidationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters."
        )


def _validate_password(value: str) -> None:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise OnboardingValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )


_VALIDATORS: dict[OnboardingStep, Callable[[str], None]] = {
    OnboardingStep.EMAIL_ENTRY: _validate_email,
    OnboardingStep.USERNAME_ENTRY: _validate_username,
    OnboardingStep.PASSWORD_ENTRY: _validate_password,
}


@dataclass
class OnboardingFlow:
    """Walks a new user through account setup and saves the profile."""

    store: ProgressStore
    step: OnboardingStep = OnboardingStep.WELCOME
    email: str = ""
    username: str = ""

    def advance(self, value: str | None = None) -> OnboardingStep:
        """Validate the current step's input and move to the next step."""
        next_step = TRANSITIONS.get(self.step)
        if next_step is None:
            raise OnboardingError("Onboarding is already complete")

        validator = _VALIDATORS.get(self.step)
        if validator is not None:
            cleaned = (value or "").strip()
            validator(cleaned)
            if self.step is OnboardingStep.EMAIL_ENTRY:
                self.email = cleaned
            elif self.step is OnboardingStep.USERNAME_ENTRY:
                self.username = cleaned

        if next_step is OnboardingStep.DONE:
            self._create_user()
        self.step = next_step
        return next_step

    def reset(self) -> None:
        """Return to the welcome screen and forget collected input."""
        self.step = OnboardingStep.WELCOME
        self.email = ""
        self.username = ""

    def _create_user(self) -> User:
        user = User(
            username=self.username,
            email=self.email,
            streak=1,
            total_meals=0,
            eating_style=[DEFAULT_EATING_STYLE],
            friends=[],
        )
        self.store.save_user(user)
        logger.info("Created profile for %s", user.username)
        return user
