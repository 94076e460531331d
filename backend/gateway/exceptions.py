"""Exception hierarchy for the gateway services."""

from __future__ import annotations


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(GatewayError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(GatewayError):
    """The referenced device was never registered."""

    status_code = 404


class MalformedBodyError(GatewayError):
    """The request body could not be decoded."""

    status_code = 400


class PayloadTooLargeError(GatewayError):
    """The request body exceeds the configured limit."""

    status_code = 413
