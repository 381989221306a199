# src/time_tracking_cli/__init__.py

"""Interactive personal time tracking with a CSV record rewritten on every command."""

__version__ = "0.1.0"
