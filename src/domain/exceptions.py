"""Base exception classes for the assessment domain layer."""


class AssessmentServiceError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application:
    callers can catch a single type at the outermost boundary while the
    orchestrator itself never recovers locally.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
