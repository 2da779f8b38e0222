"""Task and subtask operations"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

from ..errors import DuplicateTitle, InvalidMove, NoColumns, NotFound
from ..models.board import BoardState, Priority, Subtask, Task
from .completion import derive_completed
from .positions import column_group, next_position, renormalize, renumber
from .state import (
    clean_text,
    column_by_id,
    ensure_unique,
    find_board,
    find_column,
    find_task,
    generate_id,
    replace_tasks,
)

logger = logging.getLogger(__name__)


def is_deadline_allowed(deadline: Optional[date], today: Optional[date] = None) -> bool:
    """A deadline may be today or later; no deadline is always fine"""
    if deadline is None:
        return True
    return deadline >= (today or date.today())


def _check_title(state: BoardState, board_id: str, title: str, task_id: Optional[str] = None) -> str:
    title = clean_text(title, "Task title")
    others = (
        t.title for t in state.tasks
        if t.board_id == board_id and t.id != task_id
    )
    ensure_unique(title, others, f"Task '{title}' already exists", error=DuplicateTitle)
    return title


def _check_users(board, emails: Iterable[str]) -> Tuple[str, ...]:
    """De-duplicate assignees, each of which must be a user of the board"""
    known = {u.email.lower(): u.email for u in board.users}
    assigned = []
    for email in emails:
        match = known.get(email.strip().lower())
        if match is None:
            raise NotFound(f"User {email} is not on board {board.id}")
        if match not in assigned:
            assigned.append(match)
    return tuple(assigned)


def _as_subtask(item: Union[Subtask, Dict[str, Any]]) -> Subtask:
    if isinstance(item, Subtask):
        return item
    data = dict(item)
    data.setdefault("id", generate_id("sub"))
    return Subtask.model_validate(data)


def add_task(state: BoardState, board_id: str, data: Dict[str, Any]) -> Tuple[BoardState, Task]:
    """Append a task to the end of its column.

    ``data`` holds the TaskCreate fields; status defaults to the board's first
    column and completion comes from the destination column.
    """
    board = find_board(state, board_id)
    if not board.columns:
        raise NoColumns(f"Board {board_id} has no columns")

    title = _check_title(state, board_id, data.get("title"))
    column = find_column(board, data.get("status") or board.columns[0].id)

    task = Task(
        id=data.get("id") or generate_id("task"),
        board_id=board_id,
        status=column.id,
        position=next_position(state.tasks, board_id, column.id),
        title=title,
        description=data.get("description"),
        priority=data.get("priority") or Priority.MEDIUM,
        subtasks=tuple(_as_subtask(s) for s in data.get("subtasks") or ()),
        assigned_users=_check_users(board, data.get("assigned_users") or ()),
        deadline=data.get("deadline"),
        completed=column.is_done,
    )
    logger.debug(f"Adding task {task.id} to column {column.id}")
    return state.model_copy(update={"tasks": state.tasks + (task,)}), task


def update_task(state: BoardState, task_id: str, patch: Dict[str, Any]) -> BoardState:
    """Apply a partial update, re-deriving completion from the task's column.

    Positions are left alone, even when the status changes.
    """
    task = find_task(state, task_id)
    board = find_board(state, task.board_id)
    updates = {}

    if "title" in patch:
        updates["title"] = _check_title(state, board.id, patch["title"], task_id)
    if "status" in patch and patch["status"] is not None:
        updates["status"] = find_column(board, patch["status"]).id
    if "description" in patch:
        updates["description"] = patch["description"]
    if patch.get("priority") is not None:
        updates["priority"] = Priority(patch["priority"])
    if "deadline" in patch:
        updates["deadline"] = patch["deadline"]
    if patch.get("subtasks") is not None:
        updates["subtasks"] = tuple(_as_subtask(s) for s in patch["subtasks"])
    if patch.get("assigned_users") is not None:
        updates["assigned_users"] = _check_users(board, patch["assigned_users"])
    if patch.get("completed") is not None:
        updates["completed"] = bool(patch["completed"])

    merged = task.model_copy(update=updates)
    completed = derive_completed(merged, column_by_id(board, merged.status))
    merged = merged.model_copy(update={"completed": completed})
    return replace_tasks(state, [merged])


def delete_task(state: BoardState, task_id: str) -> BoardState:
    """Remove a task; the rest of its column keeps its positions"""
    find_task(state, task_id)
    tasks = tuple(t for t in state.tasks if t.id != task_id)
    return state.model_copy(update={"tasks": tasks})


def move_task(
    state: BoardState, board_id: str, update: Union[str, Sequence[Task]]
) -> BoardState:
    """Commit a task move.

    With a task id the task goes to the front of its own column. With a list,
    the list replaces the board's tasks and every column of the board is
    renormalized: positions become 0..n-1 and completion is re-derived.
    """
    board = find_board(state, board_id)

    if isinstance(update, str):
        task = find_task(state, update)
        if task.board_id != board.id:
            raise InvalidMove(f"Task {task.id} does not belong to board {board.id}")
        group = column_group(state.tasks, task.board_id, task.status)
        group = [task] + [t for t in group if t.id != task.id]
        return replace_tasks(state, renumber(group))

    foreign = [t.id for t in update if t.board_id != board_id]
    if foreign:
        raise InvalidMove(f"Tasks {', '.join(foreign)} do not belong to board {board_id}")

    others = tuple(t for t in state.tasks if t.board_id != board_id)
    tasks = others + renormalize(update, board)
    return state.model_copy(update={"tasks": tasks})


# =============================================================================
# Subtasks
# =============================================================================

def _find_subtask(task: Task, subtask_id: str) -> Subtask:
    subtask = next((s for s in task.subtasks if s.id == subtask_id), None)
    if subtask is None:
        raise NotFound(f"Subtask {subtask_id} not found")
    return subtask


def add_subtask(
    state: BoardState, task_id: str, title: str, completed: bool = False
) -> Tuple[BoardState, Subtask]:
    task = find_task(state, task_id)
    subtask = Subtask(
        id=generate_id("sub"),
        title=clean_text(title, "Subtask title"),
        completed=completed,
    )
    task = task.model_copy(update={"subtasks": task.subtasks + (subtask,)})
    return replace_tasks(state, [task]), subtask


def toggle_subtask(state: BoardState, task_id: str, subtask_id: str) -> Tuple[BoardState, Subtask]:
    task = find_task(state, task_id)
    subtask = _find_subtask(task, subtask_id)
    toggled = subtask.model_copy(update={"completed": not subtask.completed})
    subtasks = tuple(toggled if s.id == subtask_id else s for s in task.subtasks)
    task = task.model_copy(update={"subtasks": subtasks})
    return replace_tasks(state, [task]), toggled


def remove_subtask(state: BoardState, task_id: str, subtask_id: str) -> BoardState:
    task = find_task(state, task_id)
    _find_subtask(task, subtask_id)
    subtasks = tuple(s for s in task.subtasks if s.id != subtask_id)
    return replace_tasks(state, [task.model_copy(update={"subtasks": subtasks})])
