"""
errors – failure kinds raised by the prompt relay.

Every error carries a human-readable message and the HTTP status the API
layer answers with.  None of them is fatal to the process; each request
fails on its own.
"""
from __future__ import annotations


class RelayError(Exception):
    """Base class for all relay failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(RelayError):
    """Missing or empty input text (or an unusable panel field)."""

    status_code = 400


class ConfigurationError(RelayError):
    """Gemini credential missing or still set to the placeholder."""


class UpstreamError(RelayError):
    """The call to the generative-model endpoint failed."""
