"""Discord bot that answers questions and summarizes channels with Gemini."""

__version__ = "0.1.0"
