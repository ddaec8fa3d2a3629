"""
Custom Exceptions

This module defines the error taxonomy of the redirect and analytics paths.
Each exception maps to one HTTP status code through the handlers registered
in main.py.
"""


class LinkAnalyticsError(Exception):
    """Base exception for the link analytics service."""
    status_code = 500

    @property
    def message(self) -> str:
        return str(self)


class LinkNotFoundError(LinkAnalyticsError):
    """Raised when a short code or link id does not exist."""
    status_code = 404

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Link '{identifier}' not found")


class AuthenticationRequiredError(LinkAnalyticsError):
    """Raised when an analytics endpoint is called without a valid token."""
    status_code = 401

    def __init__(self):
        super().__init__("Authentication required")


class AccessDeniedError(LinkAnalyticsError):
    """Raised when the authenticated user does not own the requested link."""
    status_code = 403

    def __init__(self, link_id: int):
        self.link_id = link_id
        super().__init__("You do not have permission to view this link's analytics")


class LinkUnavailableError(LinkAnalyticsError):
    """Raised when a link exists but is inactive or expired."""
    status_code = 410

    REASONS = {
        "inactive": "This link has been deactivated by the owner.",
        "expired": "This link has expired and is no longer available.",
    }

    def __init__(self, short_code: str, reason: str):
        self.short_code = short_code
        self.reason = reason
        super().__init__(self.REASONS.get(reason, "This link is no longer available."))


class DatabaseError(LinkAnalyticsError):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
