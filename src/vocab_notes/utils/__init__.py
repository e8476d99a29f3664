"""Shared utilities: logging, retries and file I/O."""
