"""
legal – prompt relay for the legal-document assistant.

Submodules
----------
prompts     Task tags, prompt templates and panel input composition.
relay       PromptRelay: task + text → one model call → RelayResponse.
assistant   LegalAssistant: simplify / chat / analyze_scenario helpers.
errors      InvalidInputError, ConfigurationError, UpstreamError.
"""

from .assistant import LegalAssistant
from .errors    import ConfigurationError, InvalidInputError, RelayError, UpstreamError
from .prompts   import SCENARIO_ROLES, TaskType, build_prompt
from .relay     import PromptRelay, RelayRequest, RelayResponse

__all__ = [
    "LegalAssistant",
    "PromptRelay",
    "RelayRequest",
    "RelayResponse",
    "RelayError",
    "InvalidInputError",
    "ConfigurationError",
    "UpstreamError",
    "TaskType",
    "SCENARIO_ROLES",
    "build_prompt",
]
