"""Board store - the single source of truth the API reads from

The store owns one immutable ``BoardState``. Each operation computes the next
state with the pure functions of the services package and commits it by
replacing the snapshot, then writes the changed keys through to storage.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..errors import DragInProgress
from ..models.board import Board, BoardState, Column, Subtask, Task, User
from . import boards, columns, tasks, users
from .positions import column_group
from .sample_data import sample_state
from .state import board_tasks, find_board, find_column, find_task
from .storage import Storage

logger = logging.getLogger(__name__)

BOARDS_KEY = "boards"
TASKS_KEY = "tasks"
CURRENT_BOARD_KEY = "currentBoard"


class BoardStore:
    """Commits board state snapshots and persists them write-through"""

    def __init__(self, storage: Storage, seed: bool = True):
        self.storage = storage
        self.seed = seed
        self._state = BoardState()
        self._dragging = False

    def initialize(self):
        """Load the persisted snapshot, seeding sample data on first run"""
        if not self.storage.has(BOARDS_KEY):
            if self.seed:
                logger.info("No saved boards found, seeding sample data")
                self.commit(sample_state(), force=True)
            return

        self._state = BoardState.model_validate({
            "boards": self.storage.load(BOARDS_KEY, []),
            "tasks": self.storage.load(TASKS_KEY, []),
            "currentBoard": self.storage.load(CURRENT_BOARD_KEY, ""),
        })
        logger.info(
            f"Loaded {len(self._state.boards)} board(s) and {len(self._state.tasks)} task(s)"
        )

    @property
    def state(self) -> BoardState:
        return self._state

    # =========================================================================
    # Commit
    # =========================================================================

    @property
    def dragging(self) -> bool:
        return self._dragging

    def begin_drag(self):
        self._dragging = True

    def end_drag(self):
        self._dragging = False

    def commit(self, state: BoardState, force: bool = False) -> BoardState:
        """Replace the snapshot and save every key that changed"""
        if self._dragging:
            raise DragInProgress("Board is read-only while a drag is in progress")

        previous = self._state
        self._state = state
        if force or state.boards != previous.boards:
            self._save(BOARDS_KEY, [b.model_dump(mode="json", by_alias=True) for b in state.boards])
        if force or state.tasks != previous.tasks:
            self._save(TASKS_KEY, [t.model_dump(mode="json", by_alias=True) for t in state.tasks])
        if force or state.current_board != previous.current_board:
            self._save(CURRENT_BOARD_KEY, state.current_board)
        return state

    def _save(self, key: str, value: Any):
        try:
            self.storage.save(key, value)
        except OSError as e:
            logger.error(f"Failed to save '{key}': {e}")

    # =========================================================================
    # Reads
    # =========================================================================

    def get_board(self, board_id: str) -> Board:
        return find_board(self._state, board_id)

    def get_task(self, task_id: str) -> Task:
        return find_task(self._state, task_id)

    def board_tasks(self, board_id: str) -> List[Task]:
        find_board(self._state, board_id)
        return board_tasks(self._state, board_id)

    def column_tasks(self, board_id: str, column_id: str) -> List[Task]:
        return column_group(self._state.tasks, board_id, column_id)

    # =========================================================================
    # Boards
    # =========================================================================

    def add_board(self, name: str) -> Board:
        state, board = boards.add_board(self._state, name)
        self.commit(state)
        return board

    def update_board(self, board_id: str, patch: Dict[str, Any]) -> Board:
        self.commit(boards.update_board(self._state, board_id, patch))
        return self.get_board(board_id)

    def delete_board(self, board_id: str):
        self.commit(boards.delete_board(self._state, board_id))

    def select_board(self, board_id: str):
        self.commit(boards.select_board(self._state, board_id))

    # =========================================================================
    # Columns
    # =========================================================================

    def add_column(self, board_id: str, name: str) -> Column:
        state, column = columns.add_column(self._state, board_id, name)
        self.commit(state)
        return column

    def update_column(self, board_id: str, column_id: str, patch: Dict[str, Any]) -> Column:
        self.commit(columns.update_column(self._state, board_id, column_id, patch))
        return find_column(self.get_board(board_id), column_id)

    def reorder_columns(self, board_id: str, ordered: Sequence[Column]) -> Board:
        self.commit(columns.reorder_columns(self._state, board_id, ordered))
        return self.get_board(board_id)

    def order_columns(self, board_id: str, column_ids: Sequence[str]) -> Board:
        self.commit(columns.order_columns(self._state, board_id, column_ids))
        return self.get_board(board_id)

    def delete_column(
        self, board_id: str, column_id: str, target_column_id: Optional[str] = None
    ) -> bool:
        """Returns False, changing nothing, when the column is the board's last"""
        if self._dragging:
            raise DragInProgress("Board is read-only while a drag is in progress")
        state = columns.delete_column(self._state, board_id, column_id, target_column_id)
        if state is None:
            return False
        self.commit(state)
        return True

    # =========================================================================
    # Tasks
    # =========================================================================

    def add_task(self, board_id: str, data: Dict[str, Any]) -> Task:
        state, task = tasks.add_task(self._state, board_id, data)
        self.commit(state)
        return task

    def update_task(self, task_id: str, patch: Dict[str, Any]) -> Task:
        self.commit(tasks.update_task(self._state, task_id, patch))
        return self.get_task(task_id)

    def delete_task(self, task_id: str):
        self.commit(tasks.delete_task(self._state, task_id))

    def move_task(self, board_id: str, update: Union[str, Sequence[Task]]) -> List[Task]:
        self.commit(tasks.move_task(self._state, board_id, update))
        return self.board_tasks(board_id)

    def add_subtask(self, task_id: str, title: str, completed: bool = False) -> Subtask:
        state, subtask = tasks.add_subtask(self._state, task_id, title, completed)
        self.commit(state)
        return subtask

    def toggle_subtask(self, task_id: str, subtask_id: str) -> Subtask:
        state, subtask = tasks.toggle_subtask(self._state, task_id, subtask_id)
        self.commit(state)
        return subtask

    def remove_subtask(self, task_id: str, subtask_id: str):
        self.commit(tasks.remove_subtask(self._state, task_id, subtask_id))

    # =========================================================================
    # Users
    # =========================================================================

    def add_user(self, board_id: str, email: str) -> User:
        state, user = users.add_user(self._state, board_id, email)
        self.commit(state)
        return user

    def remove_user(self, board_id: str, email: str):
        self.commit(users.remove_user(self._state, board_id, email))
