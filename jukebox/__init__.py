"""Shared office jukebox: crowd-sourced playlist additions and skip voting."""

__version__ = "0.1.0"
