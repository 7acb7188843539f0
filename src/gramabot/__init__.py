"""GramaBot: government-scheme and general Q&A relay in front of an LLM provider."""

__version__ = "0.1.0"
