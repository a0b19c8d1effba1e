"""Textual dashboard for backlog-board."""

from .app import BacklogApp

__all__ = ["BacklogApp"]
