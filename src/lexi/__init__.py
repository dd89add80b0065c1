"""Lexi: compile plain-English .lxi descriptions into source code with an LLM."""

__version__ = "1.0.0"
