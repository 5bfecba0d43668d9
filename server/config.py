"""
server.config – process configuration.

Loads a ``.env`` file (if present) into the environment, then builds an
immutable Settings snapshot.  Settings are created once at startup and
passed explicitly to the relay and the Gemini client.

Environment variables
---------------------
GEMINI_API_KEY          Required credential for the Gemini API.
GEMINI_MODEL            Model name (default: gemini-2.5-pro).
GEMINI_BASE_URL         REST base URL (default: v1beta endpoint).
GEMINI_TIMEOUT_SECONDS  Outbound request timeout (default: 60).
LOG_LEVEL               Root log level (default: INFO).
CORS_ORIGINS            Comma-separated allowed origins (default: *).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

API_KEY_PLACEHOLDER = "your-api-key-here"

DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT_SECONDS = 60.0

ENV_PATH = Path(__file__).resolve().parent.parent / ".env"


@dataclass(frozen=True)
class Settings:
    gemini_api_key:          str = ""
    gemini_model:            str = DEFAULT_MODEL
    gemini_base_url:         str = DEFAULT_BASE_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level:               str = "INFO"
    cors_origins:            tuple[str, ...] = field(default=("*",))

    @property
    def api_key_configured(self) -> bool:
        """False when the key is empty or still the placeholder value."""
        key = self.gemini_api_key.strip()
        return bool(key) and key != API_KEY_PLACEHOLDER

    @classmethod
    def from_env(cls, env_file: Path | None = ENV_PATH) -> "Settings":
        """
        Build Settings from the process environment.

        Values already present in the environment win over the ``.env`` file.

        Raises:
            ValueError  GEMINI_TIMEOUT_SECONDS is not a positive number.
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)

        timeout_raw = os.getenv("GEMINI_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:
            raise ValueError(
                f"GEMINI_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}"
            ) from exc
        if timeout <= 0:
            raise ValueError("GEMINI_TIMEOUT_SECONDS must be positive")

        origins = tuple(
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ) or ("*",)

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
            gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            request_timeout_seconds=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=origins,
        )
