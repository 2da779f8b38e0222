"""Board operations"""

import logging
from typing import Any, Dict, Optional, Tuple

from ..models.board import Board, BoardState, Column
from .state import clean_text, ensure_unique, find_board, generate_id, replace_board

logger = logging.getLogger(__name__)

# (id suffix, name, is_done)
DEFAULT_COLUMNS = (
    ("todo", "To Do", False),
    ("progress", "Progress", False),
    ("done", "Done", True),
)


def default_columns(board_id: str) -> Tuple[Column, ...]:
    return tuple(
        Column(id=f"col-{board_id}-{suffix}", name=name, is_done=is_done)
        for suffix, name, is_done in DEFAULT_COLUMNS
    )


def add_board(
    state: BoardState, name: str, board_id: Optional[str] = None
) -> Tuple[BoardState, Board]:
    """Create a board with the default columns and make it current"""
    name = clean_text(name, "Board name")
    ensure_unique(name, (b.name for b in state.boards), f"Board '{name}' already exists")

    board_id = board_id or generate_id("board")
    board = Board(id=board_id, name=name, columns=default_columns(board_id))
    state = state.model_copy(update={
        "boards": state.boards + (board,),
        "current_board": board.id,
    })
    logger.info(f"Created board {board.id} ({board.name})")
    return state, board


def update_board(state: BoardState, board_id: str, patch: Dict[str, Any]) -> BoardState:
    """Rename a board"""
    board = find_board(state, board_id)
    if "name" not in patch:
        return state

    name = clean_text(patch["name"], "Board name")
    others = (b.name for b in state.boards if b.id != board_id)
    ensure_unique(name, others, f"Board '{name}' already exists")
    return replace_board(state, board.model_copy(update={"name": name}))


def delete_board(state: BoardState, board_id: str) -> BoardState:
    """Remove a board and its tasks.

    Deleting the current board selects the first remaining one, or none.
    """
    find_board(state, board_id)
    boards = tuple(b for b in state.boards if b.id != board_id)
    tasks = tuple(t for t in state.tasks if t.board_id != board_id)

    current = state.current_board
    if current == board_id:
        current = boards[0].id if boards else ""

    logger.info(f"Deleted board {board_id}")
    return state.model_copy(update={
        "boards": boards,
        "tasks": tasks,
        "current_board": current,
    })


def select_board(state: BoardState, board_id: str) -> BoardState:
    find_board(state, board_id)
    return state.model_copy(update={"current_board": board_id})
