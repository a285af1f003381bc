# text_generators/__init__.py
from .base import TextGeneratorAPI
from .gemini import GeminiTextGenerator

__all__ = [
    "TextGeneratorAPI",
    "GeminiTextGenerator",
    "get_text_generator",
]


def get_text_generator(api: str, model: str, *, api_key: str | None = None) -> TextGeneratorAPI:
    """Return an appropriate text-generator instance for the given API."""
    if api in ("gemini", "google"):
        return GeminiTextGenerator(model, api_key=api_key)
    raise ValueError(f"Unknown API: {api}")
