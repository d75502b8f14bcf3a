"""Bundled problem-set data."""
