"""
prompts – fixed instruction templates wrapped around user text.

Each recognised task tag maps to one template.  The user's text is always
embedded verbatim; nothing is trimmed, escaped or rewritten.

Task tags
---------
simplify    Plain-language rewrite of a legal passage.
chat        Legal Q&A in plain English.
scenario    Situation analysis (risks, rights, next steps).
summary     Concise summary of rights and obligations.
keypoints   Bullet list of key points.
caseref     Analogous case law / precedent suggestions.
actions     Practical next steps.

An unrecognised or empty tag falls back to using the text itself as the
prompt.
"""
from __future__ import annotations

from enum import Enum


class TaskType(str, Enum):
    SIMPLIFY  = "simplify"
    CHAT      = "chat"
    SCENARIO  = "scenario"
    SUMMARY   = "summary"
    KEYPOINTS = "keypoints"
    CASEREF   = "caseref"
    ACTIONS   = "actions"


# Roles offered by the scenario simulator panel
SCENARIO_ROLES: tuple[str, ...] = (
    "tenant",
    "landlord",
    "employee",
    "employer",
    "consumer",
    "business",
    "contractor",
    "client",
)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_TEMPLATES: dict[TaskType, str] = {
    TaskType.SIMPLIFY: (
        "You are a legal assistant. Your task is to simplify the following "
        "legal text into plain language so that an ordinary person can "
        "understand it. Do not remove any important meaning, but make it "
        "easy to read and clear.\n\nText:\n{text}"
    ),
    TaskType.SUMMARY: (
        "You are a legal summarizer. Read the following legal document and "
        "provide a clear and concise summary. Focus on the essential points, "
        "obligations, and rights.\n\nText:\n{text}"
    ),
    TaskType.KEYPOINTS: (
        "Extract the most important key points from the following legal "
        "text. Present them as bullet points that are easy to read and "
        "understand. Do not miss any crucial obligations or rights."
        "\n\nText:\n{text}"
    ),
    TaskType.CASEREF: (
        "Analyze the following legal matter and suggest relevant case law or "
        "precedents that may apply. Provide proper context but do not invent "
        "false cases.\n\nText:\n{text}"
    ),
    TaskType.ACTIONS: (
        "Based on the following legal issue, provide practical and actionable "
        "next steps a person can take. Make sure the advice is general (not "
        "jurisdiction-specific), simple, and responsible.\n\nText:\n{text}"
    ),
    TaskType.CHAT: (
        "You are a helpful legal assistant. Answer the following legal "
        "question in simple, understandable terms.\n\n"
        "Provide:\n"
        "1. A direct answer to the question\n"
        "2. Important considerations or exceptions\n"
        "3. When to seek professional legal help\n\n"
        "Remember to:\n"
        "- Use plain English\n"
        "- Avoid legal jargon\n"
        "- Be helpful but remind users this is not formal legal advice\n\n"
        "User Question: {text}"
    ),
    TaskType.SCENARIO: (
        "You are a legal analyst. Analyze the following scenario and "
        "provide:\n\n"
        "1. A clear explanation of the legal situation\n"
        "2. Potential risks and consequences\n"
        "3. Rights and protections available\n"
        "4. Recommended next steps\n"
        "5. When immediate legal help is needed\n\n"
        "Please provide practical, actionable advice in plain English.\n\n"
        "Scenario: {text}"
    ),
}


# The simplifier panel asks for more than the bare "simplify" task: a
# plain-English rewrite, bullet key points and real-world examples, in an
# Original/Simplified layout.
_PANEL_TEMPLATES: dict[TaskType, str] = {
    TaskType.SIMPLIFY: (
        "You are a legal expert specializing in simplifying complex legal "
        "documents for general public understanding.\n\n"
        "Please analyze the following legal text and provide:\n"
        "1. A simplified version in plain English\n"
        "2. Key points as bullet points\n"
        "3. Real-world examples where applicable\n\n"
        "Format your response as:\n"
        "Original: [relevant section]\n"
        "Simplified: [plain English explanation]\n\n"
        "Legal Text:\n{text}\n\n"
        "Please make it accessible to someone with no legal background."
    ),
}


def is_known_task(task_type: str | None) -> bool:
    """True when *task_type* is one of the recognised tags."""
    return task_type in {t.value for t in TaskType}


def build_prompt(task_type: str | None, text: str) -> str:
    """
    Wrap *text* in the template for *task_type*.

    Unknown or empty tags return *text* unchanged so it is sent to the
    model as the literal prompt.
    """
    if not is_known_task(task_type):
        return text
    # str.replace rather than str.format: user text may contain braces.
    return _TEMPLATES[TaskType(task_type)].replace("{text}", text)


def compose_chat_input(question: str, document: str | None = None) -> str:
    """Prefix the chat question with an attached document, if any."""
    if document and document.strip():
        return f"Based on the uploaded document: {document}\n\nUser question: {question}"
    return question


def compose_scenario_input(scenario: str, role: str) -> str:
    """Prefix the scenario description with the caller's role."""
    return f"Role: {role}\nScenario: {scenario}"


def build_panel_prompt(task_type: str | None, text: str) -> str:
    """
    Like :func:`build_prompt`, but uses the UI panel's own template when
    that panel has one.
    """
    if is_known_task(task_type) and TaskType(task_type) in _PANEL_TEMPLATES:
        return _PANEL_TEMPLATES[TaskType(task_type)].replace("{text}", text)
    return build_prompt(task_type, text)
