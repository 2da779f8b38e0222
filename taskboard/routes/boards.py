"""Board routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..models.board import BoardCreate, BoardSelect, BoardUpdate
from ..services.store import BoardStore
from .deps import dump, get_store, patch_fields

router = APIRouter()


@router.get("")
async def list_boards(store: BoardStore = Depends(get_store)):
    """List all boards"""
    return [dump(b) for b in store.state.boards]


@router.post("")
async def create_board(data: BoardCreate, store: BoardStore = Depends(get_store)):
    """Create a board with the default columns and make it current"""
    return dump(store.add_board(data.name))


@router.get("/current")
async def get_current_board(store: BoardStore = Depends(get_store)):
    """Get the id of the current board"""
    return {"currentBoard": store.state.current_board}


@router.put("/current")
async def select_board(data: BoardSelect, store: BoardStore = Depends(get_store)):
    """Make a board the current one"""
    store.select_board(data.board_id)
    return {"currentBoard": store.state.current_board}


@router.get("/{board_id}")
async def get_board(board_id: str, store: BoardStore = Depends(get_store)):
    """Get board with columns and their tasks in order"""
    board = store.get_board(board_id)
    result = dump(board)
    for column in result["columns"]:
        column["tasks"] = [dump(t) for t in store.column_tasks(board_id, column["id"])]
    return result


@router.patch("/{board_id}")
async def update_board(board_id: str, data: BoardUpdate, store: BoardStore = Depends(get_store)):
    """Rename a board"""
    updates = patch_fields(data)
    if "name" in updates and updates["name"] is None:
        raise HTTPException(status_code=400, detail="Board name cannot be empty")
    return dump(store.update_board(board_id, updates))


@router.delete("/{board_id}")
async def delete_board(board_id: str, store: BoardStore = Depends(get_store)):
    """Delete a board and all its tasks"""
    store.delete_board(board_id)
    return {"deleted": True, "currentBoard": store.state.current_board}
