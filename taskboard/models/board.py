"""Board models"""

from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    HIGHEST = "Highest"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    LOWEST = "Lowest"


class Record(BaseModel):
    """Immutable state record, serialized with camelCase keys"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Payload(BaseModel):
    """Request body accepting camelCase or snake_case keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# State records
# =============================================================================

class Subtask(Record):
    id: str
    title: str
    completed: bool = False


class User(Record):
    id: str
    email: str


class Column(Record):
    id: str
    name: str
    is_done: bool = False


class Board(Record):
    id: str
    name: str
    columns: Tuple[Column, ...] = ()
    users: Tuple[User, ...] = ()


class Task(Record):
    id: str
    board_id: str
    status: str
    position: int = Field(0, ge=0)
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    subtasks: Tuple[Subtask, ...] = ()
    assigned_users: Tuple[str, ...] = ()
    deadline: Optional[date] = None
    completed: bool = False


class BoardState(Record):
    """Snapshot of everything the store owns"""

    boards: Tuple[Board, ...] = ()
    tasks: Tuple[Task, ...] = ()
    current_board: str = ""


# =============================================================================
# Request payloads
# =============================================================================

class BoardCreate(Payload):
    name: str = Field(..., min_length=1, max_length=100)


class BoardUpdate(Payload):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class BoardSelect(Payload):
    board_id: str


class ColumnCreate(Payload):
    name: str = Field(..., min_length=1, max_length=50)


class ColumnUpdate(Payload):
    name: Optional[str] = Field(None, min_length=1, max_length=50)


class ColumnOrder(Payload):
    column_ids: List[str]


class SubtaskCreate(Payload):
    title: str = Field(..., min_length=1, max_length=200)
    completed: bool = False


class TaskCreate(Payload):
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    subtasks: List[SubtaskCreate] = []
    assigned_users: List[str] = []
    deadline: Optional[date] = None


class TaskUpdate(Payload):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[Priority] = None
    subtasks: Optional[List[Subtask]] = None
    assigned_users: Optional[List[str]] = None
    deadline: Optional[date] = None
    completed: Optional[bool] = None


class TaskMove(Payload):
    """Either a single task to move to the front, or a full replacement list"""

    task_id: Optional[str] = None
    tasks: Optional[List[Task]] = None


class UserCreate(Payload):
    email: str = Field(..., min_length=1, max_length=254)
