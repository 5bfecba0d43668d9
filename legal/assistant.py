"""
assistant – one call per UI panel (simplifier, chat, scenario simulator).

Thin wrappers over PromptRelay.generate() that compose the panel input and
replace upstream failure descriptions with a panel-specific message.
Input and configuration errors propagate unchanged.
"""
from __future__ import annotations

from .errors import InvalidInputError, UpstreamError
from .prompts import (
    SCENARIO_ROLES,
    TaskType,
    compose_chat_input,
    compose_scenario_input,
)
from .relay import PromptRelay

ROLE_REQUIRED = "Please select a role and describe your scenario"


def _failure_message(what: str) -> str:
    return f"Failed to generate {what}. Please check your API configuration."


class LegalAssistant:
    """
    Panel-level helpers.

    Usage::

        assistant = LegalAssistant(relay)
        text = await assistant.chat("Can my landlord keep my deposit?")
    """

    def __init__(self, relay: PromptRelay) -> None:
        self.relay = relay

    async def simplify(self, legal_text: str | None) -> str:
        return await self._run(TaskType.SIMPLIFY, legal_text, "simplification")

    async def chat(self, question: str | None, document: str | None = None) -> str:
        if question is None or not question.strip():
            raise InvalidInputError("Text is required")
        return await self._run(
            TaskType.CHAT, compose_chat_input(question, document), "response"
        )

    async def analyze_scenario(self, scenario: str | None, role: str | None) -> str:
        role_key = (role or "").strip().lower()
        if role_key not in SCENARIO_ROLES or scenario is None or not scenario.strip():
            raise InvalidInputError(ROLE_REQUIRED)
        return await self._run(
            TaskType.SCENARIO,
            compose_scenario_input(scenario, role_key),
            "scenario analysis",
        )

    async def _run(self, task: TaskType, text: str | None, what: str) -> str:
        try:
            return await self.relay.generate(task.value, text, panel=True)
        except UpstreamError as exc:
            raise UpstreamError(_failure_message(what)) from exc
