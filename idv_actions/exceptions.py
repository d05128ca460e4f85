"""Exceptions."""

from typing import Optional


class OnfidoError(IOError):
    """A call to the Onfido API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 provider_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.provider_message = provider_message


class TokenEncodingFailed(RuntimeError):
    """Could not produce a session token."""


class TokenValidationFailed(RuntimeError):
    """A session token could not be validated."""


class InvalidToken(TokenValidationFailed):
    """Token is missing, malformed, tampered with, or has the wrong claims."""


class ExpiredToken(TokenValidationFailed):
    """Token has expired."""


class InvalidEvent(ValueError):
    """A post-login event payload is missing required data."""
