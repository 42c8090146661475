"""Interactively pick an open pull request, then check it out or open it."""

__version__ = "0.1.0"
