"""Task ordering within columns"""

from typing import List, Sequence, Tuple, TypeVar

from ..models.board import Board, Task
from .completion import derive_completed

T = TypeVar("T")


def column_group(tasks: Sequence[Task], board_id: str, column_id: str) -> List[Task]:
    """Tasks of one (board, column) pair sorted by position"""
    group = [t for t in tasks if t.board_id == board_id and t.status == column_id]
    return sorted(group, key=lambda t: t.position)


def next_position(tasks: Sequence[Task], board_id: str, column_id: str) -> int:
    """Position just after the last task of the column, 0 when it is empty"""
    group = column_group(tasks, board_id, column_id)
    return group[-1].position + 1 if group else 0


def array_move(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """Remove the item at old_index and reinsert it at new_index"""
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def renumber(group: Sequence[Task]) -> List[Task]:
    """Assign positions 0..n-1 following the given order"""
    return [
        t if t.position == idx else t.model_copy(update={"position": idx})
        for idx, t in enumerate(group)
    ]


def renormalize(tasks: Sequence[Task], board: Board) -> Tuple[Task, ...]:
    """Walk every column of board and make its positions contiguous.

    Each column's tasks keep their relative order (by existing position, ties
    by list order) and receive positions 0..n-1. Completion is re-derived from
    the column. Tasks of other boards, or whose status names no column, are
    returned unchanged.
    """
    result = list(tasks)
    for column in board.columns:
        members = [
            (idx, t) for idx, t in enumerate(result)
            if t.board_id == board.id and t.status == column.id
        ]
        members.sort(key=lambda pair: pair[1].position)
        for position, (idx, task) in enumerate(members):
            completed = derive_completed(task, column)
            if task.position != position or task.completed != completed:
                result[idx] = task.model_copy(
                    update={"position": position, "completed": completed}
                )
    return tuple(result)
