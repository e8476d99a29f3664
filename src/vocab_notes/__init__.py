"""Vocabulary word notes for Markdown vaults."""

__version__ = "0.3.0"
