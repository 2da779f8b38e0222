"""Column routes"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..models.board import ColumnCreate, ColumnOrder, ColumnUpdate
from ..services.store import BoardStore
from .deps import dump, get_store, patch_fields

router = APIRouter()


@router.post("/{board_id}/columns")
async def create_column(board_id: str, data: ColumnCreate, store: BoardStore = Depends(get_store)):
    """Create a new column"""
    return dump(store.add_column(board_id, data.name))


@router.patch("/{board_id}/columns/{column_id}")
async def update_column(
    board_id: str, column_id: str, data: ColumnUpdate, store: BoardStore = Depends(get_store)
):
    """Rename a column"""
    updates = patch_fields(data)
    if "name" in updates and updates["name"] is None:
        raise HTTPException(status_code=400, detail="Column name cannot be empty")
    return dump(store.update_column(board_id, column_id, updates))


@router.put("/{board_id}/columns")
async def reorder_columns(board_id: str, data: ColumnOrder, store: BoardStore = Depends(get_store)):
    """Reorder columns by id; names and the done flag are unchanged"""
    board = store.order_columns(board_id, data.column_ids)
    return [dump(c) for c in board.columns]


@router.delete("/{board_id}/columns/{column_id}")
async def delete_column(
    board_id: str,
    column_id: str,
    target_column_id: Optional[str] = None,
    store: BoardStore = Depends(get_store),
):
    """Delete a column, moving its tasks to the target column"""
    if not store.delete_column(board_id, column_id, target_column_id):
        raise HTTPException(status_code=409, detail="Cannot delete the last column of a board")
    return {"deleted": True}
