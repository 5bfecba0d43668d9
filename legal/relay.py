"""
relay – the prompt relay between the API layer and the generative model.

Inputs  → RelayRequest
            task_type   One of the prompts.TaskType tags (anything else
                        falls back to the raw text as the prompt)
            text        User-supplied legal text or question

Processing → PromptRelay
            1. Reject empty / whitespace-only text (no network call)
            2. Reject a missing or placeholder credential (no network call)
            3. Fill the task template
            4. Await exactly one generator.generate_content(prompt)

Outputs → RelayResponse
            success     True when the model answered
            result      Model text, returned unmodified
            error       Human-readable failure description
            status_code HTTP status the API layer should answer with

The relay holds only the settings and generator it was built with and
never mutates them, so one instance serves concurrent requests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import ConfigurationError, InvalidInputError, RelayError, UpstreamError
from .prompts import build_panel_prompt, build_prompt, is_known_task

if TYPE_CHECKING:
    from server.config import Settings

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Text is required"
API_KEY_MISSING = (
    "Gemini API key not configured. "
    "Please set GEMINI_API_KEY in your environment or .env file."
)


@dataclass(frozen=True)
class RelayRequest:
    task_type: str | None
    text: str | None


@dataclass(frozen=True)
class RelayResponse:
    """Exactly one of ``result`` / ``error`` is set."""
    success: bool
    result: str | None = None
    error: str | None = None
    status_code: int = 200

    @classmethod
    def ok(cls, result: str) -> "RelayResponse":
        return cls(success=True, result=result)

    @classmethod
    def failed(cls, exc: RelayError) -> "RelayResponse":
        return cls(success=False, error=exc.message, status_code=exc.status_code)


class PromptRelay:
    """
    Stateless task → prompt → model → text relay.

    ``generator`` is any object exposing
    ``async generate_content(prompt: str) -> str``; in production that is
    server.ai.gemini_client.GeminiClient.

    Usage::

        relay = PromptRelay(settings, GeminiClient.from_settings(settings))
        text = await relay.generate("simplify", "Tenant shall pay rent monthly.")
    """

    def __init__(self, settings: "Settings", generator: Any) -> None:
        self._settings = settings
        self._generator = generator

    @property
    def settings(self) -> "Settings":
        return self._settings

    async def generate(
        self, task_type: str | None, text: str | None, *, panel: bool = False
    ) -> str:
        """
        Return the model's text for *text* wrapped in *task_type*'s template.

        With *panel* set, a UI panel's own template is used where one exists.

        Raises:
            InvalidInputError   text missing or whitespace only.
            ConfigurationError  credential missing or placeholder.
            UpstreamError       the model call failed.
        """
        if text is None or not text.strip():
            raise InvalidInputError(TEXT_REQUIRED)

        if not self._settings.api_key_configured:
            raise ConfigurationError(API_KEY_MISSING)

        if task_type and not is_known_task(task_type):
            logger.info("Unknown task type %r; sending text as the prompt", task_type)

        prompt = (build_panel_prompt if panel else build_prompt)(task_type, text)
        logger.info("Relaying task=%s chars=%d", task_type or "raw", len(text))

        try:
            output = await self._generator.generate_content(prompt)
        except UpstreamError:
            raise
        except Exception as exc:
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc

        return output

    async def relay(self, request: RelayRequest) -> RelayResponse:
        """Run :meth:`generate` and shape the outcome into a RelayResponse."""
        try:
            output = await self.generate(request.task_type, request.text)
        except RelayError as exc:
            if isinstance(exc, InvalidInputError):
                logger.info("Rejected request: %s", exc.message)
            else:
                logger.warning("Relay failed (%s): %s", exc.__class__.__name__, exc.message)
            return RelayResponse.failed(exc)
        return RelayResponse.ok(output)
