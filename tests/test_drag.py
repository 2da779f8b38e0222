"""Drag reconciliation tests

Gesture lifecycle, subject classification and the commit rules for column and
task drops.
"""

import pytest

from taskboard.errors import DragInProgress
from taskboard.models.drag import Point
from taskboard.services.drag import (
    DragKind,
    DragPhase,
    DragSubject,
    droppable_id,
    identify_subject,
    reconcile,
)

from tests.factories import add_tasks, done_columns, droppable, positions, rect, titles


def assert_contiguous(store, board_id):
    for column in store.get_board(board_id).columns:
        group = store.column_tasks(board_id, column.id)
        assert sorted(t.position for t in group) == list(range(len(group)))


class TestSubjectClassification:

    def test_column_id(self, store, board, columns):
        subject = identify_subject(store.state, board.id, columns["Done"].id)
        assert subject == DragSubject(DragKind.COLUMN, columns["Done"].id)

    def test_task_id(self, store, board):
        task = store.add_task(board.id, {"title": "A"})
        assert identify_subject(store.state, board.id, task.id).kind is DragKind.TASK

    def test_unknown_id(self, store, board):
        assert identify_subject(store.state, board.id, "nothing") is None

    def test_task_of_other_board_is_unknown(self, store, board):
        other = store.add_board("Other")
        task = store.add_task(other.id, {"title": "A"})
        assert identify_subject(store.state, board.id, task.id) is None


class TestTaskDrops:
    """Dropping a task on a task or on a column's empty area"""

    def test_drag_first_task_onto_second(self, store, board, columns, session):
        """A above B, dropped on B, ends up below it"""
        todo = columns["To Do"].id
        a, b = add_tasks(store, board.id, todo, "A", "B")

        session.start(a.id, board.id)
        assert session.end(b.id) is True
        assert positions(store, board.id, todo) == {"B": 0, "A": 1}

    def test_drag_last_task_onto_first(self, store, board, columns, session):
        todo = columns["To Do"].id
        a, b, c = add_tasks(store, board.id, todo, "A", "B", "C")

        session.start(c.id, board.id)
        session.end(a.id)
        assert titles(store, board.id, todo) == ["C", "A", "B"]
        assert_contiguous(store, board.id)

    def test_drop_on_task_in_other_column_inserts_before_it(self, store, board, columns, session):
        todo, progress = columns["To Do"].id, columns["Progress"].id
        a, b = add_tasks(store, board.id, todo, "A", "B")
        p1, p2 = add_tasks(store, board.id, progress, "P1", "P2")

        session.start(a.id, board.id)
        session.end(p2.id)

        assert titles(store, board.id, progress) == ["P1", "A", "P2"]
        assert positions(store, board.id, todo) == {"B": 0}
        assert store.get_task(a.id).status == progress
        assert_contiguous(store, board.id)

    def test_drop_on_empty_column_area_appends(self, store, board, columns, session):
        todo, progress = columns["To Do"].id, columns["Progress"].id
        a, = add_tasks(store, board.id, todo, "A")
        add_tasks(store, board.id, progress, "P1", "P2")

        session.start(a.id, board.id)
        session.end(droppable_id(progress))

        assert positions(store, board.id, progress) == {"P1": 0, "P2": 1, "A": 2}
        assert store.get_task(a.id).completed is False

    def test_drop_on_column_area_with_gap_appends_last(self, store, board, columns, session):
        """A deleted task leaves To Do at positions 0 and 2; the drop still lands last"""
        todo, progress = columns["To Do"].id, columns["Progress"].id
        a, b, c = add_tasks(store, board.id, todo, "A", "B", "C")
        x, = add_tasks(store, board.id, progress, "X")
        store.delete_task(b.id)

        session.start(x.id, board.id)
        session.end(droppable_id(todo))

        assert titles(store, board.id, todo) == ["A", "C", "X"]
        assert positions(store, board.id, todo) == {"A": 0, "C": 1, "X": 2}

    def test_drop_on_own_column_area_moves_to_end(self, store, board, columns, session):
        todo = columns["To Do"].id
        a, b = add_tasks(store, board.id, todo, "A", "B")
        session.start(a.id, board.id)
        session.end(droppable_id(todo))
        assert titles(store, board.id, todo) == ["B", "A"]

    def test_drop_on_plain_column_id_appends(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        session.start(a.id, board.id)
        session.end(columns["Progress"].id)
        assert titles(store, board.id, columns["Progress"].id) == ["A"]

    def test_drop_in_done_column_completes(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        session.start(a.id, board.id)
        session.end(droppable_id(columns["Done"].id))
        assert store.get_task(a.id).completed is True

    def test_drop_out_of_done_column_stays_completed(self, store, board, columns, session):
        """Completion is sticky across drags out of the done column"""
        d, = add_tasks(store, board.id, columns["Done"].id, "D")
        session.start(d.id, board.id)
        session.end(droppable_id(columns["To Do"].id))
        assert store.get_task(d.id).status == columns["To Do"].id
        assert store.get_task(d.id).completed is True

    def test_drop_renormalizes_untouched_columns(self, store, board, columns, session):
        todo, progress = columns["To Do"].id, columns["Progress"].id
        a, b = add_tasks(store, board.id, todo, "A", "B")
        p1, p2, p3 = add_tasks(store, board.id, progress, "P1", "P2", "P3")
        store.delete_task(p2.id)

        session.start(b.id, board.id)
        session.end(a.id)

        assert positions(store, board.id, progress) == {"P1": 0, "P3": 1}

    def test_drop_on_itself_changes_nothing(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        before = store.state
        session.start(a.id, board.id)
        assert session.end(a.id) is False
        assert store.state is before


class TestColumnDrops:

    def test_column_reorder(self, store, board, columns, session):
        session.start(columns["Done"].id, board.id)
        assert session.end(columns["To Do"].id) is True
        result = store.get_board(board.id)
        assert [c.name for c in result.columns] == ["Done", "To Do", "Progress"]
        assert [c.name for c in done_columns(result)] == ["Done"]

    def test_column_moved_right(self, store, board, columns, session):
        session.start(columns["To Do"].id, board.id)
        session.end(columns["Done"].id)
        assert [c.name for c in store.get_board(board.id).columns] == ["Progress", "Done", "To Do"]

    def test_column_over_task_is_cancelled(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        before = store.state
        session.start(columns["Done"].id, board.id)
        assert session.end(a.id) is False
        assert store.state is before

    def test_column_over_itself_is_cancelled(self, store, board, columns, session):
        session.start(columns["Done"].id, board.id)
        assert session.end(columns["Done"].id) is False
        assert session.phase is DragPhase.CANCELLED


class TestGestureLifecycle:
    """Store locking, cancellation and collision tracking"""

    def test_unknown_element_is_ignored(self, store, board, session):
        assert session.start("ghost", board.id) is None
        assert session.phase is DragPhase.IDLE
        assert store.dragging is False

    def test_store_is_read_only_while_dragging(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        session.start(a.id, board.id)

        with pytest.raises(DragInProgress):
            store.add_task(board.id, {"title": "B"})
        with pytest.raises(DragInProgress):
            store.delete_column(board.id, columns["Progress"].id)

    def test_cancel_restores_nothing_committed(self, store, board, columns, session):
        a, b = add_tasks(store, board.id, columns["To Do"].id, "A", "B")
        before = store.state

        session.start(a.id, board.id)
        session.cancel()

        assert store.state is before
        assert session.phase is DragPhase.CANCELLED
        assert store.dragging is False
        store.add_task(board.id, {"title": "C"})

    def test_end_without_target_is_cancelled(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        session.start(a.id, board.id)
        assert session.end() is False
        assert session.phase is DragPhase.CANCELLED
        assert store.dragging is False

    def test_move_tracks_drop_target(self, store, board, columns, session):
        todo, progress = columns["To Do"].id, columns["Progress"].id
        a, = add_tasks(store, board.id, todo, "A")
        droppables = [
            droppable(todo, 0, 0, 100, 400),
            droppable(droppable_id(progress), 120, 0, 100, 400),
        ]

        session.start(a.id, board.id)
        collisions = session.move(rect(125, 10, 90, 40), droppables, Point(x=170, y=30))

        assert collisions[0].id == droppable_id(progress)
        assert session.end() is True
        assert store.get_task(a.id).status == progress

    def test_start_defaults_to_current_board(self, store, board, columns, session):
        a, = add_tasks(store, board.id, columns["To Do"].id, "A")
        assert session.start(a.id).kind is DragKind.TASK

    def test_commit_is_written_through(self, store, storage, board, columns, session):
        todo = columns["To Do"].id
        a, b = add_tasks(store, board.id, todo, "A", "B")
        session.start(a.id, board.id)
        session.end(b.id)

        saved = {t["title"]: t["position"] for t in storage.load("tasks")}
        assert saved == {"A": 1, "B": 0}


class TestReconcile:

    def test_missing_over_returns_none(self, store, board, columns):
        subject = DragSubject(DragKind.COLUMN, columns["Done"].id)
        assert reconcile(store.state, board.id, subject, None) is None

    def test_missing_subject_returns_none(self, store, board, columns):
        assert reconcile(store.state, board.id, None, columns["Done"].id) is None
