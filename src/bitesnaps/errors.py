"""Application error types."""


class BiteSnapsError(Exception):
    """Base error for the application."""


class AnalysisError(BiteSnapsError):
    """Base error for meal photo analysis."""


class AnalysisConfigurationError(AnalysisError):
    """Raised when the inference service is not configured."""


class AnalysisFailedError(AnalysisError):
    """Raised when analysis fails and the failure policy surfaces it."""


class CaptureError(BiteSnapsError):
    """Raised when a captured photo cannot be turned into a post."""


class CaptureInProgressError(CaptureError):
    """Raised when a second analysis is submitted while one is in flight."""


class DuplicatePostError(BiteSnapsError):
    """Raised when a post id is already present in the store."""


class OnboardingError(BiteSnapsError):
    """Raised for invalid onboarding transitions."""


class OnboardingValidationError(OnboardingError):
    """Raised when the input for an onboarding step is invalid."""
