"""Tests for the Gemini text generator."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from summarybot.text_generators import GeminiTextGenerator, get_text_generator


@pytest.fixture
def generator():
    return GeminiTextGenerator(model="gemini-2.5-flash", api_key="test-key")


@pytest.fixture
def mock_client():
    """Create a mock genai client."""
    mock = MagicMock()
    mock.aio.models.generate_content = AsyncMock()
    return mock


class TestInit:
    def test_default_model(self):
        assert GeminiTextGenerator().model == "gemini-2.5-flash"

    def test_factory(self):
        gen = get_text_generator("gemini", "gemini-2.5-pro", api_key="k")
        assert isinstance(gen, GeminiTextGenerator)
        assert gen.model == "gemini-2.5-pro"

    def test_factory_rejects_unknown_api(self):
        with pytest.raises(ValueError):
            get_text_generator("nope", "model")

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(ValueError):
            GeminiTextGenerator()._get_client()


class TestGenerate:
    @pytest.mark.asyncio
    async def test_generate_returns_text(self, generator, mock_client):
        mock_client.aio.models.generate_content.return_value = MagicMock(text="  Hello!  ")

        with patch.object(generator, "_get_client", return_value=mock_client):
            result = await generator.generate("Hi")

        assert result == "Hello!"
        call_kwargs = mock_client.aio.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert call_kwargs["contents"] == "Hi"

    @pytest.mark.asyncio
    async def test_generate_falls_back_to_candidate_parts(self, generator, mock_client):
        part1, part2 = MagicMock(text="one"), MagicMock(text="two")
        candidate = MagicMock()
        candidate.content.parts = [part1, part2]
        mock_client.aio.models.generate_content.return_value = MagicMock(text=None, candidates=[candidate])

        with patch.object(generator, "_get_client", return_value=mock_client):
            result = await generator.generate("Hi")

        assert result == "one\ntwo"

    @pytest.mark.asyncio
    async def test_generate_empty_response(self, generator, mock_client):
        mock_client.aio.models.generate_content.return_value = MagicMock(text=None, candidates=[])

        with patch.object(generator, "_get_client", return_value=mock_client):
            assert await generator.generate("Hi") == ""

    @pytest.mark.asyncio
    async def test_generate_propagates_errors(self, generator, mock_client):
        mock_client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")

        with patch.object(generator, "_get_client", return_value=mock_client):
            with pytest.raises(RuntimeError):
                await generator.generate("Hi")
