"""
Application exceptions for the availability service.

Services raise these; the route layer maps them onto HTTP status codes.
"""

from typing import Any, Dict, Optional


class FixMeetError(Exception):
    """Base exception for all availability service errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(FixMeetError):
    """Raised when an event type does not exist or is inactive."""


class ConfigurationError(FixMeetError):
    """
    Raised when an event type configuration cannot produce availability.

    Callers surface this as zero availability for the affected event type
    instead of failing the whole request.
    """


class UpstreamUnavailable(FixMeetError):
    """Raised when the external calendar lookup fails or times out."""


class RequiredDataUnavailable(FixMeetError):
    """Raised when confirmed bookings cannot be retrieved for a calculation."""
