"""Configuration errors."""

from __future__ import annotations

from typing import Optional

from src.domain.exceptions import AssessmentServiceError


class ConfigurationError(AssessmentServiceError):
    """Raised when a configuration value is malformed.

    Attributes:
        key: The configuration key (or environment variable) at fault.
        value: The raw value that was rejected.
    """

    def __init__(self, key: str, value: object, message: Optional[str] = None) -> None:
        msg = message or f"CONFIGURATION_ERROR: invalid value {value!r} for {key}"
        super().__init__(msg)
        self.key = key
        self.value = value
