"""
Gateway error taxonomy.

Every error carries a caller-safe message and the HTTP status the API
layer should answer with. Provider details never go into the message.
"""
from typing import Optional


class GatewayError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(GatewayError):
    """Malformed or missing caller input."""

    status_code = 400


class ConfigurationError(GatewayError):
    """Provider credentials are missing."""

    status_code = 500


class UpstreamError(GatewayError):
    """A provider call failed or returned an error."""

    status_code = 500
