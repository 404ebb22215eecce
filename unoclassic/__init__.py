"""UNO rules engine with human, LLM and automated players."""

__version__ = "0.1.0"
