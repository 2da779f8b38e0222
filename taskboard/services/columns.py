"""Column lifecycle: creation, rename, reorder and deletion with migration

A board keeps at most one done column. Bulk reorders and deletions hand the
done flag to another column instead of leaving the board without one.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from ..errors import InvalidColumns, NotFound
from ..models.board import Board, BoardState, Column, Task
from .completion import derive_completed
from .positions import column_group, next_position
from .state import (
    clean_text,
    column_by_id,
    done_column,
    ensure_unique,
    find_board,
    find_column,
    generate_id,
    replace_board,
)

logger = logging.getLogger(__name__)


def add_column(
    state: BoardState, board_id: str, name: str, column_id: Optional[str] = None
) -> Tuple[BoardState, Column]:
    """Append a column; it becomes the done column only if the board has none"""
    board = find_board(state, board_id)
    name = clean_text(name, "Column name")
    ensure_unique(name, (c.name for c in board.columns), f"Column '{name}' already exists")

    column = Column(
        id=column_id or generate_id("col"),
        name=name,
        is_done=done_column(board) is None,
    )
    board = board.model_copy(update={"columns": board.columns + (column,)})
    return replace_board(state, board), column


def update_column(
    state: BoardState, board_id: str, column_id: str, patch: Dict[str, Any]
) -> BoardState:
    """Rename a column"""
    board = find_board(state, board_id)
    column = find_column(board, column_id)
    if "name" not in patch:
        return state

    name = clean_text(patch["name"], "Column name")
    others = (c.name for c in board.columns if c.id != column_id)
    ensure_unique(name, others, f"Column '{name}' already exists")

    renamed = column.model_copy(update={"name": name})
    columns = tuple(renamed if c.id == column_id else c for c in board.columns)
    return replace_board(state, board.model_copy(update={"columns": columns}))


def _single_done(columns: Sequence[Column]) -> Tuple[Column, ...]:
    """Keep the first done flag; with none, the last column becomes done"""
    done_ids = [c.id for c in columns if c.is_done]
    if not done_ids:
        keep = columns[-1].id
    else:
        keep = done_ids[0]
    return tuple(
        c if c.is_done == (c.id == keep) else c.model_copy(update={"is_done": c.id == keep})
        for c in columns
    )


def reorder_columns(state: BoardState, board_id: str, columns: Sequence[Column]) -> BoardState:
    """Replace the board's column list with the same columns in a new order"""
    board = find_board(state, board_id)
    current_ids = sorted(c.id for c in board.columns)
    new_ids = [c.id for c in columns]
    if sorted(new_ids) != current_ids:
        raise InvalidColumns("Column list must contain exactly the board's columns")
    if not columns:
        return state

    seen = []
    for column in columns:
        name = clean_text(column.name, "Column name")
        ensure_unique(name, seen, f"Column '{name}' already exists")
        seen.append(name)

    ordered = _single_done(columns)
    board = board.model_copy(update={"columns": ordered})
    state = replace_board(state, board)

    # The done flag may have moved to another column
    tasks = tuple(_rederive(t, board) for t in state.tasks)
    return state.model_copy(update={"tasks": tasks})


def order_columns(state: BoardState, board_id: str, column_ids: Sequence[str]) -> BoardState:
    """Reorder a board's columns by id, leaving names and the done flag alone"""
    board = find_board(state, board_id)
    by_id = {c.id: c for c in board.columns}
    unknown = [column_id for column_id in column_ids if column_id not in by_id]
    if unknown:
        raise InvalidColumns(f"Unknown column(s): {', '.join(unknown)}")
    return reorder_columns(state, board_id, [by_id[column_id] for column_id in column_ids])


def _rederive(task: Task, board: Board) -> Task:
    if task.board_id != board.id:
        return task
    completed = derive_completed(task, column_by_id(board, task.status))
    if completed == task.completed:
        return task
    return task.model_copy(update={"completed": completed})


def delete_column(
    state: BoardState,
    board_id: str,
    column_id: str,
    target_column_id: Optional[str] = None,
) -> Optional[BoardState]:
    """Remove a column, moving its tasks to target_column_id.

    Returns None when the column is the board's last one. Tasks are appended
    after the target's own tasks in their previous order; without a target they
    go to the first remaining column.
    """
    board = find_board(state, board_id)
    column = find_column(board, column_id)
    if len(board.columns) <= 1:
        logger.info(f"Refused to delete last column {column_id} of board {board_id}")
        return None

    remaining = [c for c in board.columns if c.id != column_id]
    if column.is_done:
        remaining[0] = remaining[0].model_copy(update={"is_done": True})
    board = board.model_copy(update={"columns": tuple(remaining)})

    target = None
    if target_column_id is not None:
        target = column_by_id(board, target_column_id)
        if target is None:
            raise NotFound(f"Target column {target_column_id} not found")

    moving = column_group(state.tasks, board_id, column_id)
    moved = {}
    if moving:
        target = target or remaining[0]
        start = next_position(state.tasks, board_id, target.id)
        for offset, task in enumerate(moving):
            moved[task.id] = task.model_copy(update={
                "status": target.id,
                "position": start + offset,
                "completed": derive_completed(task, target),
            })
        logger.info(f"Moved {len(moving)} task(s) from column {column_id} to {target.id}")

    state = replace_board(state, board)
    tasks = tuple(_rederive(moved.get(t.id, t), board) for t in state.tasks)
    return state.model_copy(update={"tasks": tasks})
