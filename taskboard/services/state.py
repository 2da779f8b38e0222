"""Lookup and replacement helpers shared by the board operations

Every helper returns new tuples and records; nothing in a ``BoardState`` is
ever modified in place.
"""

import uuid
from typing import Iterable, List, Optional, Sequence

from ..errors import DuplicateName, EmptyField, NotFound
from ..models.board import Board, BoardState, Column, Task


def generate_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def clean_text(value: Optional[str], field: str) -> str:
    """Strip value, raising EmptyField when nothing is left"""
    text = (value or "").strip()
    if not text:
        raise EmptyField(f"{field} cannot be empty")
    return text


def ensure_unique(name: str, existing: Iterable[str], message: str, error=DuplicateName):
    """Case-insensitive uniqueness check"""
    lowered = name.lower()
    if any(other.lower() == lowered for other in existing):
        raise error(message)


# =============================================================================
# Boards
# =============================================================================

def find_board(state: BoardState, board_id: str) -> Board:
    board = next((b for b in state.boards if b.id == board_id), None)
    if board is None:
        raise NotFound(f"Board {board_id} not found")
    return board


def replace_board(state: BoardState, board: Board) -> BoardState:
    boards = tuple(board if b.id == board.id else b for b in state.boards)
    return state.model_copy(update={"boards": boards})


# =============================================================================
# Columns
# =============================================================================

def column_by_id(board: Board, column_id: str) -> Optional[Column]:
    return next((c for c in board.columns if c.id == column_id), None)


def find_column(board: Board, column_id: str) -> Column:
    column = column_by_id(board, column_id)
    if column is None:
        raise NotFound(f"Column {column_id} not found")
    return column


def done_column(board: Board) -> Optional[Column]:
    return next((c for c in board.columns if c.is_done), None)


# =============================================================================
# Tasks
# =============================================================================

def find_task(state: BoardState, task_id: str) -> Task:
    task = next((t for t in state.tasks if t.id == task_id), None)
    if task is None:
        raise NotFound(f"Task {task_id} not found")
    return task


def replace_tasks(state: BoardState, updated: Sequence[Task]) -> BoardState:
    """Swap in updated copies of existing tasks, matched by id"""
    by_id = {t.id: t for t in updated}
    tasks = tuple(by_id.get(t.id, t) for t in state.tasks)
    return state.model_copy(update={"tasks": tasks})


def board_tasks(state: BoardState, board_id: str) -> List[Task]:
    """Tasks of a board in display order"""
    tasks = [t for t in state.tasks if t.board_id == board_id]
    return sorted(tasks, key=lambda t: t.position)
