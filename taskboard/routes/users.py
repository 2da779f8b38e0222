"""Board user routes"""

from fastapi import APIRouter, Depends

from ..models.board import UserCreate
from ..services.store import BoardStore
from .deps import dump, get_store

router = APIRouter()


@router.get("/{board_id}/users")
async def list_users(board_id: str, store: BoardStore = Depends(get_store)):
    """List the users of a board"""
    return [dump(u) for u in store.get_board(board_id).users]


@router.post("/{board_id}/users")
async def add_user(board_id: str, data: UserCreate, store: BoardStore = Depends(get_store)):
    """Add a user to a board"""
    return dump(store.add_user(board_id, data.email))


@router.delete("/{board_id}/users/{email}")
async def remove_user(board_id: str, email: str, store: BoardStore = Depends(get_store)):
    """Remove a user and unassign them from the board's tasks"""
    store.remove_user(board_id, email)
    return {"deleted": True}
