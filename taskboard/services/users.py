"""Board user operations"""

from typing import Tuple

from ..errors import NotFound
from ..models.board import BoardState, User
from .state import clean_text, ensure_unique, find_board, generate_id, replace_board


def add_user(state: BoardState, board_id: str, email: str) -> Tuple[BoardState, User]:
    board = find_board(state, board_id)
    email = clean_text(email, "Email")
    ensure_unique(email, (u.email for u in board.users), f"User {email} already exists")

    user = User(id=generate_id("user"), email=email)
    board = board.model_copy(update={"users": board.users + (user,)})
    return replace_board(state, board), user


def remove_user(state: BoardState, board_id: str, email: str) -> BoardState:
    """Remove a user and unassign them from every task of the board"""
    board = find_board(state, board_id)
    lowered = email.strip().lower()
    user = next((u for u in board.users if u.email.lower() == lowered), None)
    if user is None:
        raise NotFound(f"User {email} not found")

    users = tuple(u for u in board.users if u.id != user.id)
    state = replace_board(state, board.model_copy(update={"users": users}))

    tasks = tuple(
        t.model_copy(update={"assigned_users": tuple(e for e in t.assigned_users if e != user.email)})
        if t.board_id == board_id and user.email in t.assigned_users else t
        for t in state.tasks
    )
    return state.model_copy(update={"tasks": tasks})
