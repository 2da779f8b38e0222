"""API Routes"""

from . import boards, columns, drag, tasks, users

__all__ = ["boards", "columns", "drag", "tasks", "users"]
