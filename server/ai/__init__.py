"""server.ai – generative-model client sub-package."""
from .gemini_client import GeminiClient

__all__ = [
    "GeminiClient",
]
