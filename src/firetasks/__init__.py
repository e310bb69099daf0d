"""Backlog Fire Tasks: due-date urgency dashboard for Backlog issues."""

__version__ = "0.1.0"
