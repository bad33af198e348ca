"""
Astrology - Error Taxonomy

Every failure raised by the library derives from AstrologyError so callers
can catch the whole family, or pick the specific kind to decide whether to
reconfigure credentials, retry later, or give up.
"""

from __future__ import annotations

from typing import Optional


class AstrologyError(RuntimeError):
    """Base error for the astrology client."""


class InvalidDateError(AstrologyError, ValueError):
    """Raised when a month/day pair is outside [1, 12] x [1, 31]."""


class NoMatchingSignError(AstrologyError):
    """Raised when no zodiac sign covers a date, or a sign name is unknown."""


class ConfigurationError(AstrologyError):
    """Raised when credentials or client settings are missing or invalid."""


class _StatusError(AstrologyError):
    """Error carrying the upstream HTTP status code, when there was one."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationFailedError(_StatusError):
    """Raised when the token endpoint rejects the credentials or is unreachable."""


class PredictionRequestFailedError(_StatusError):
    """Raised when a single prediction request fails."""


class AllClientsBlockedError(AstrologyError):
    """Raised when every configured client was rejected with HTTP 403."""


class PredictionUnavailableError(AstrologyError):
    """Raised for any other unrecoverable failure during a prediction call."""
