"""Drag gesture reconciliation

A gesture goes idle -> dragging -> committed or cancelled -> idle. The dragged
element is classified once, at start, as a column or a task of the board. On
drop the (active, over) pair becomes a new board state that is committed
through the store in one replacement.
"""

import logging
from enum import Enum
from typing import Collection, List, NamedTuple, Optional, Sequence

from ..models.board import Board, BoardState, Task
from ..models.drag import Collision, Droppable, Point, Rect
from .collision import detect_collisions
from .columns import reorder_columns
from .completion import derive_completed
from .positions import array_move
from .state import board_tasks, column_by_id, find_board
from .tasks import move_task

logger = logging.getLogger(__name__)

# A column's empty task area is registered as "<column id>-droppable"
DROPPABLE_SUFFIX = "-droppable"


class DragKind(str, Enum):
    COLUMN = "column"
    TASK = "task"


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class DragSubject(NamedTuple):
    kind: DragKind
    id: str


def droppable_id(column_id: str) -> str:
    return f"{column_id}{DROPPABLE_SUFFIX}"


def identify_subject(state: BoardState, board_id: str, active_id: str) -> Optional[DragSubject]:
    """Columns are checked before tasks; unknown ids give None"""
    board = find_board(state, board_id)
    if column_by_id(board, active_id) is not None:
        return DragSubject(DragKind.COLUMN, active_id)
    if any(t.id == active_id for t in state.tasks if t.board_id == board_id):
        return DragSubject(DragKind.TASK, active_id)
    return None


def drop_column(over_id: str, column_ids: Collection[str]) -> Optional[str]:
    """Column id named by a column drop target, if over_id is one"""
    if over_id.endswith(DROPPABLE_SUFFIX):
        column_id = over_id[: -len(DROPPABLE_SUFFIX)]
        return column_id if column_id in column_ids else None
    return over_id if over_id in column_ids else None


def reconcile(
    state: BoardState, board_id: str, subject: Optional[DragSubject], over_id: Optional[str]
) -> Optional[BoardState]:
    """Turn a drop into the next board state, or None to cancel"""
    if subject is None or not over_id:
        return None

    board = find_board(state, board_id)
    if subject.kind is DragKind.COLUMN:
        return _reconcile_column(state, board, subject.id, over_id)
    return _reconcile_task(state, board, subject.id, over_id)


def _reconcile_column(state: BoardState, board: Board, active_id: str, over_id: str) -> Optional[BoardState]:
    ids = [c.id for c in board.columns]
    if active_id == over_id or active_id not in ids or over_id not in ids:
        return None

    columns = array_move(board.columns, ids.index(active_id), ids.index(over_id))
    state = reorder_columns(state, board.id, columns)
    return move_task(state, board.id, board_tasks(state, board.id))


def _reconcile_task(state: BoardState, board: Board, active_id: str, over_id: str) -> Optional[BoardState]:
    tasks = board_tasks(state, board.id)
    active = next((t for t in tasks if t.id == active_id), None)
    if active is None:
        return None

    target_id = drop_column(over_id, [c.id for c in board.columns])
    if target_id is not None:
        column = column_by_id(board, target_id)
        taken = [t.position for t in tasks if t.status == column.id and t.id != active_id]
        position = max(taken) + 1 if taken else 0
        placed = active.model_copy(update={
            "status": column.id,
            "position": position,
            "completed": derive_completed(active, column),
        })
        return move_task(state, board.id, [placed if t.id == active_id else t for t in tasks])

    over = next((t for t in tasks if t.id == over_id), None)
    if over is None or over.id == active.id:
        return None
    column = column_by_id(board, over.status)
    if column is None:
        return None

    group = [t for t in tasks if t.status == column.id]
    if active.status == column.id:
        ids = [t.id for t in group]
        group = array_move(group, ids.index(active.id), ids.index(over.id))
    else:
        group.insert(group.index(over), active)

    placed = {
        t.id: t.model_copy(update={
            "status": column.id,
            "position": idx,
            "completed": derive_completed(t, column),
        })
        for idx, t in enumerate(group)
    }
    return move_task(state, board.id, [placed.get(t.id, t) for t in tasks])


class DragSession:
    """Tracks one drag gesture against a BoardStore

    The store is locked from ``start`` until ``end`` or ``cancel``; nothing is
    written while the gesture is in flight.
    """

    def __init__(self, store):
        self.store = store
        self.phase = DragPhase.IDLE
        self.subject: Optional[DragSubject] = None
        self.board_id: Optional[str] = None
        self.over_id: Optional[str] = None

    @property
    def dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def start(self, active_id: str, board_id: Optional[str] = None) -> Optional[DragSubject]:
        if self.dragging:
            self.cancel()

        state = self.store.state
        board_id = board_id or state.current_board
        subject = identify_subject(state, board_id, active_id)
        if subject is None:
            logger.debug(f"Ignoring drag of unknown element {active_id}")
            self.phase = DragPhase.IDLE
            return None

        self.store.begin_drag()
        self.phase = DragPhase.DRAGGING
        self.subject = subject
        self.board_id = board_id
        self.over_id = None
        logger.debug(f"Drag started: {subject.kind.value} {subject.id}")
        return subject

    def move(
        self,
        collision_rect: Rect,
        droppables: Sequence[Droppable],
        pointer: Optional[Point] = None,
    ) -> List[Collision]:
        """Recompute collisions for the current pointer and dragged rect"""
        if not self.dragging:
            return []

        board = find_board(self.store.state, self.board_id)
        collisions = detect_collisions(
            self.subject.kind is DragKind.COLUMN,
            {c.id for c in board.columns},
            pointer,
            collision_rect,
            droppables,
        )
        self.over_id = collisions[0].id if collisions else None
        return collisions

    def end(self, over_id: Optional[str] = None) -> bool:
        """Drop the dragged element; returns True when a new state was committed"""
        if not self.dragging:
            return False

        over_id = over_id if over_id is not None else self.over_id
        try:
            next_state = reconcile(self.store.state, self.board_id, self.subject, over_id)
        finally:
            self._reset()
        if next_state is None:
            self.phase = DragPhase.CANCELLED
            logger.debug(f"Drag over {over_id} resolved to no change")
            return False

        self.store.commit(next_state)
        self.phase = DragPhase.COMMITTED
        return True

    def cancel(self):
        if self.dragging:
            self._reset()
        self.phase = DragPhase.CANCELLED

    def _reset(self):
        self.store.end_drag()
        self.phase = DragPhase.IDLE
        self.subject = None
        self.board_id = None
        self.over_id = None
