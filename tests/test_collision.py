"""Collision detection tests"""

import pytest

from taskboard.models.drag import Point
from taskboard.services.collision import (
    closest_corners,
    detect_collisions,
    intersection_ratio,
    pointer_within,
    rect_intersection,
)

from tests.factories import droppable, rect


# Three columns side by side, each with a task card and an empty-area region
DROPPABLES = [
    droppable("col-a", 0, 0, 100, 400),
    droppable("col-b", 120, 0, 100, 400),
    droppable("col-c", 240, 0, 100, 400),
    droppable("task-1", 125, 40, 90, 40),
    droppable("col-b-droppable", 120, 100, 100, 300),
]
COLUMN_IDS = {"col-a", "col-b", "col-c"}


class TestStrategies:

    def test_intersection_ratio(self):
        assert intersection_ratio(rect(0, 0), rect(0, 0)) == 1.0
        assert intersection_ratio(rect(0, 0), rect(50, 0)) == pytest.approx(5000 / 15000)
        assert intersection_ratio(rect(0, 0), rect(200, 0)) == 0.0

    def test_pointer_within_keeps_containing_regions(self):
        hits = pointer_within(Point(x=150, y=60), DROPPABLES)
        assert {c.id for c in hits} == {"col-b", "task-1"}
        assert hits[0].id == "task-1"

    def test_pointer_within_without_pointer(self):
        assert pointer_within(None, DROPPABLES) == []

    def test_closest_corners_ranks_all_regions(self):
        hits = closest_corners(rect(235, 0, 100, 400), DROPPABLES)
        assert len(hits) == len(DROPPABLES)
        assert hits[0].id == "col-c"

    def test_rect_intersection_orders_by_overlap(self):
        hits = rect_intersection(rect(125, 45, 90, 40), DROPPABLES)
        assert hits[0].id == "task-1"
        assert "col-a" not in {c.id for c in hits}


class TestCollisionPolicy:
    """Columns prefer pointer containment; tasks use rect intersection"""

    def test_dragged_column_targets_column_under_pointer(self):
        hits = detect_collisions(True, COLUMN_IDS, Point(x=150, y=60), rect(100, 0, 100, 400), DROPPABLES)
        assert [c.id for c in hits] == ["col-b"]

    def test_dragged_column_never_targets_task_under_pointer(self):
        """Pointer sits on a task card inside col-b; the column wins"""
        hits = detect_collisions(True, COLUMN_IDS, Point(x=170, y=60), rect(0, 0, 100, 400), DROPPABLES)
        assert hits[0].id == "col-b"

    def test_dragged_column_falls_back_to_closest_corners(self):
        hits = detect_collisions(True, COLUMN_IDS, Point(x=500, y=500), rect(235, 0, 100, 400), DROPPABLES)
        assert hits[0].id == "col-c"
        assert len(hits) == len(DROPPABLES)

    def test_dragged_task_uses_rect_intersection(self):
        hits = detect_collisions(False, COLUMN_IDS, Point(x=10, y=10), rect(125, 45, 90, 40), DROPPABLES)
        assert hits[0].id == "task-1"

    def test_dragged_task_outside_every_region(self):
        assert detect_collisions(False, COLUMN_IDS, None, rect(1000, 1000), DROPPABLES) == []
