"""Custom exceptions for the Cloud Servers API client."""

from __future__ import annotations


class CloudServersError(Exception):
    """Base exception for every Cloud Servers failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class CloudServersAuthenticationError(CloudServersError):
    """Missing credentials, rejected credentials or an unusable token."""


class CloudServersBadRequestError(CloudServersError):
    """400 - Malformed request or expired token."""


class CloudServersForbiddenError(CloudServersError):
    """403 - Access denied."""


class CloudServersNotFoundError(CloudServersError):
    """404 - Resource not found."""


class CloudServersRequestTooLargeError(CloudServersError):
    """413 - Request entity too large."""


class CloudServersServerError(CloudServersError):
    """500 - Provider side failure."""


class CloudServersAPIError(CloudServersError):
    """Any other non-success status."""


class CloudServersTransportError(CloudServersError):
    """The request never produced an HTTP response."""


class CloudServersValidationError(CloudServersError):
    """A parameter was rejected before sending the request."""


class CloudServersConflictError(CloudServersError):
    """A server with the requested name already exists."""
