"""Task completion rules"""

from typing import Optional, Tuple

from ..models.board import Column, Task


def derive_completed(task: Task, column: Optional[Column]) -> bool:
    """Effective completed flag of a task sitting in column.

    A task in the done column is always complete. Leaving the done column
    keeps a previously set flag; only an explicit update clears it.
    """
    if column is not None and column.is_done:
        return True
    return task.completed


def subtask_progress(task: Task) -> Tuple[int, int]:
    """Return (completed, total) subtask counts"""
    done = sum(1 for s in task.subtasks if s.completed)
    return done, len(task.subtasks)
