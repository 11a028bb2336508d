"""
Relay error taxonomy.

Every failure in the chat relay pipeline is raised as a RelayError subclass
carrying the HTTP status it maps to. ErrorHandlingMiddleware turns these into
plain-text responses.
"""
from typing import Optional

from fastapi import status


class RelayError(Exception):
    """Base class for errors that terminate a relay request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(RelayError):
    """Missing or invalid environment settings."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ChatValidationError(RelayError):
    """Malformed client input, rejected before any upstream call."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamTimeoutError(RelayError):
    """Upstream did not answer within the configured timeout."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class UpstreamTransportError(RelayError):
    """Network, DNS or TLS failure talking to the upstream."""

    status_code = status.HTTP_502_BAD_GATEWAY


class UpstreamError(RelayError):
    """Upstream answered with a non-success status; the status is passed through."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message, status_code)
