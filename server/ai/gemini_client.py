"""
server.ai.gemini_client – Gemini generateContent REST client.

GeminiClient sends one prompt per call to
``{base_url}/models/{model}:generateContent`` and returns the text of the
first candidate.  Every failure is raised as legal.errors.UpstreamError
with a readable description; nothing is retried.
"""
from __future__ import annotations

import httpx

from legal.errors import UpstreamError
from server.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, Settings

UNEXPECTED_SHAPE = "Gemini returned an unexpected response shape"


class GeminiClient:
    """
    Async client for a single Gemini model.

    A fresh httpx.AsyncClient is opened per call, so an instance carries
    no connection state between requests.

    Usage::

        client = GeminiClient(api_key="...", model="gemini-2.5-pro")
        text = await client.generate_content("Summarize: ...")
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout_seconds, connect=min(timeout_seconds, 10.0))
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    async def generate_content(self, prompt: str) -> str:
        """
        Return the model's text for *prompt*.

        Raises:
            UpstreamError  Network failure, non-200 status, malformed body,
                           or a response without any candidate text.
        """
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"Gemini request failed: {exc.__class__.__name__}: {exc}"
            ) from exc

        if response.status_code != 200:
            raise UpstreamError(self._error_message(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError("Gemini returned a response that is not valid JSON") from exc

        return self._extract_text(payload)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        detail = ""
        try:
            detail = (response.json().get("error") or {}).get("message", "")
        except (ValueError, AttributeError):
            detail = response.text[:200]
        base = f"Gemini API error (HTTP {response.status_code})"
        return f"{base}: {detail}" if detail else base

    @staticmethod
    def _extract_text(payload: dict) -> str:
        if not isinstance(payload, dict):
            raise UpstreamError(UNEXPECTED_SHAPE)
        candidates = payload.get("candidates") or []
        if not isinstance(candidates, list):
            raise UpstreamError(UNEXPECTED_SHAPE)
        if not candidates:
            reason = (payload.get("promptFeedback") or {}).get("blockReason")
            if reason:
                raise UpstreamError(f"Gemini blocked the prompt: {reason}")
            raise UpstreamError("Gemini returned no candidates")

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise UpstreamError(UNEXPECTED_SHAPE)
        content = candidate.get("content") or {}
        parts = (content.get("parts") if isinstance(content, dict) else None) or []
        if not isinstance(content, dict) or not isinstance(parts, list):
            raise UpstreamError(UNEXPECTED_SHAPE)
        if not all(isinstance(p, dict) for p in parts):
            raise UpstreamError(UNEXPECTED_SHAPE)

        texts = [p["text"] for p in parts if isinstance(p.get("text"), str)]
        if not texts:
            finish = candidate.get("finishReason", "UNKNOWN")
            raise UpstreamError(f"Gemini returned no text (finishReason={finish})")
        return "".join(texts)
