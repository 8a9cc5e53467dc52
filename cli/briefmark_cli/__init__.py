"""Briefmark CLI — render message text from files or stdin."""

__version__ = "0.1.0"
