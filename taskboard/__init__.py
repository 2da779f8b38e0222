"""Taskboard - board state engine and API for a personal/team task board"""

__version__ = "1.0.0"
