# text_generators/gemini.py
"""Gemini API text generator using the google-genai SDK."""
from __future__ import annotations

import logging
import os
from typing import Any

from google import genai

from .base import TextGeneratorAPI

_LOG = logging.getLogger(__name__)


class GeminiTextGenerator(TextGeneratorAPI):
    """Text-generation backend for Google Gemini models.

    Uses the google-genai SDK. The API key is taken from the constructor or,
    failing that, from GEMINI_API_KEY / GOOGLE_API_KEY in the environment.

    One prompt in, one response out: no retries and no streaming.
    """

    def __init__(self, model: str = "gemini-2.5-flash", *, api_key: str | None = None) -> None:
        self.model = model
        self._api_key = api_key
        self._client: Any = None

    def _get_client(self) -> Any:
        """Get or create the Gemini client."""
        if self._client is None:
            api_key = self._api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
            if not api_key:
                raise ValueError("GEMINI_API_KEY or GOOGLE_API_KEY environment variable required")
            self._client = genai.Client(api_key=api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """Generate text for a single user prompt.

        Returns:
            Generated text response, or "" when the model returned nothing.

        Raises:
            Whatever the SDK raises; callers decide how to surface it.
        """
        client = self._get_client()

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            _LOG.error("Gemini API error for model=%s: %s", self.model, e)
            raise

        text = getattr(response, "text", None)
        if text:
            return text.strip()

        # Fallback: try to extract from candidates
        candidates = getattr(response, "candidates", None)
        if candidates:
            content = getattr(candidates[0], "content", None)
            parts = getattr(content, "parts", None) or []
            text_parts = [part.text for part in parts if getattr(part, "text", None)]
            if text_parts:
                return "\n".join(text_parts).strip()

        _LOG.warning("Gemini returned empty response for model=%s", self.model)
        return ""
