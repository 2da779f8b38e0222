"""Models package - pydantic state records and request payloads"""

from .board import (
    Board,
    BoardCreate,
    BoardSelect,
    BoardState,
    BoardUpdate,
    Column,
    ColumnCreate,
    ColumnOrder,
    ColumnUpdate,
    Priority,
    Subtask,
    SubtaskCreate,
    Task,
    TaskCreate,
    TaskMove,
    TaskUpdate,
    User,
    UserCreate,
)
from .drag import Collision, DragEnd, DragOver, DragStart, Droppable, Point, Rect

__all__ = [
    # State
    "Board",
    "BoardState",
    "Column",
    "Priority",
    "Subtask",
    "Task",
    "User",
    # Requests
    "BoardCreate",
    "BoardSelect",
    "BoardUpdate",
    "ColumnCreate",
    "ColumnOrder",
    "ColumnUpdate",
    "SubtaskCreate",
    "TaskCreate",
    "TaskMove",
    "TaskUpdate",
    "UserCreate",
    # Drag
    "Collision",
    "DragEnd",
    "DragOver",
    "DragStart",
    "Droppable",
    "Point",
    "Rect",
]
