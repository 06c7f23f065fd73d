"""Exceptions raised by the Chargily Pay SDK."""

from typing import Any, Optional


class ChargilyError(Exception):
    """Base exception for Chargily SDK errors."""
    pass


class ChargilyAPIError(ChargilyError):
    """Non-2xx or undecodable response from the Chargily API."""

    def __init__(self, status_code: int, message: str, body: Optional[Any] = None):
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {message}")


class ChargilyRequestError(ChargilyError):
    """The request never produced a response (network or transport failure)."""
    pass


class ChargilyValidationError(ChargilyError, ValueError):
    """Request parameters rejected before sending."""
    pass


class WebhookError(ChargilyError):
    """Base exception for webhook handling failures."""

    http_status = 400


class SignatureVerificationError(WebhookError):
    """Webhook signature could not be verified."""
    pass


class SignatureAbsentError(SignatureVerificationError):
    """The signature header is missing or empty."""

    http_status = 400

    def __init__(self, message: str = "The signature header is missing."):
        super().__init__(message)


class SignatureInvalidError(SignatureVerificationError):
    """The signature does not match the payload."""

    http_status = 403

    def __init__(self, message: str = "The signature is invalid."):
        super().__init__(message)


class WebhookPayloadError(WebhookError):
    """A correctly signed body that is not a valid event."""

    http_status = 400
