"""Non-failing wrapper around a text generator."""

from __future__ import annotations

import logging

from summarybot.errors import ErrorKind
from summarybot.text_generators import TextGeneratorAPI

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE: str = ErrorKind.MODEL_CALL.message


class LLMClient:
    """Send one prompt to the model and always come back with text.

    Any failure (network, auth, quota, model-side) is logged for operators and
    replaced with ``FALLBACK_MESSAGE`` so handlers never have to catch it.
    """

    def __init__(self, generator: TextGeneratorAPI, *, fallback: str = FALLBACK_MESSAGE) -> None:
        self.generator = generator
        self.fallback = fallback

    async def ask(self, prompt: str) -> str:
        try:
            text = await self.generator.generate(prompt)
        except Exception:
            logger.exception("Model call failed (prompt length=%d)", len(prompt))
            return self.fallback
        if not text:
            logger.warning("Model returned no text (prompt length=%d)", len(prompt))
            return self.fallback
        return text
