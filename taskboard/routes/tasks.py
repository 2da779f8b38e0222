"""Task routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..models.board import SubtaskCreate, TaskCreate, TaskMove, TaskUpdate
from ..services.completion import subtask_progress
from ..services.store import BoardStore
from ..services.tasks import is_deadline_allowed
from .deps import dump, get_store, patch_fields

router = APIRouter()


def _task_view(task):
    done, total = subtask_progress(task)
    return {**dump(task), "subtaskProgress": {"completed": done, "total": total}}


@router.get("/boards/{board_id}/tasks")
async def list_tasks(board_id: str, status: str = None, store: BoardStore = Depends(get_store)):
    """List a board's tasks in position order, optionally for one column"""
    if status:
        tasks = store.column_tasks(board_id, status)
    else:
        tasks = store.board_tasks(board_id)
    return [_task_view(t) for t in tasks]


@router.post("/boards/{board_id}/tasks")
async def create_task(board_id: str, data: TaskCreate, store: BoardStore = Depends(get_store)):
    """Create a new task at the end of its column"""
    if not is_deadline_allowed(data.deadline):
        raise HTTPException(status_code=422, detail="Deadline cannot be in the past")
    return _task_view(store.add_task(board_id, data.model_dump()))


@router.post("/boards/{board_id}/tasks/move")
async def move_task(board_id: str, data: TaskMove, store: BoardStore = Depends(get_store)):
    """Move one task to the front of its column, or commit a reordered task list"""
    if data.tasks is not None:
        tasks = store.move_task(board_id, data.tasks)
    elif data.task_id:
        tasks = store.move_task(board_id, data.task_id)
    else:
        raise HTTPException(status_code=400, detail="Either taskId or tasks is required")
    return [_task_view(t) for t in tasks]


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, store: BoardStore = Depends(get_store)):
    """Get a single task"""
    return _task_view(store.get_task(task_id))


@router.patch("/tasks/{task_id}")
async def update_task(task_id: str, data: TaskUpdate, store: BoardStore = Depends(get_store)):
    """Update a task"""
    updates = patch_fields(data)
    if "title" in updates and updates["title"] is None:
        raise HTTPException(status_code=400, detail="Task title cannot be empty")
    if not is_deadline_allowed(updates.get("deadline")):
        raise HTTPException(status_code=422, detail="Deadline cannot be in the past")
    return _task_view(store.update_task(task_id, updates))


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, store: BoardStore = Depends(get_store)):
    """Delete a task"""
    store.delete_task(task_id)
    return {"deleted": True}


# =============================================================================
# Subtask Routes
# =============================================================================

@router.post("/tasks/{task_id}/subtasks")
async def add_subtask(task_id: str, data: SubtaskCreate, store: BoardStore = Depends(get_store)):
    """Add a subtask to a task"""
    return dump(store.add_subtask(task_id, data.title, data.completed))


@router.post("/tasks/{task_id}/subtasks/{subtask_id}/toggle")
async def toggle_subtask(task_id: str, subtask_id: str, store: BoardStore = Depends(get_store)):
    """Toggle a subtask's completed status"""
    return dump(store.toggle_subtask(task_id, subtask_id))


@router.delete("/tasks/{task_id}/subtasks/{subtask_id}")
async def delete_subtask(task_id: str, subtask_id: str, store: BoardStore = Depends(get_store)):
    """Delete a subtask"""
    store.remove_subtask(task_id, subtask_id)
    return {"deleted": True}
