"""Arithmetic flash-card quiz with an on-screen keypad."""

__all__ = ["__version__"]

__version__ = "0.1.0"
