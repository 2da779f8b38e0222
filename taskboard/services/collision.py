"""Collision detection for drag gestures

Three strategies rank the droppable regions under a dragged element:

* pointer_within: regions containing the pointer, nearest corners first
* closest_corners: every region, by mean distance between matching corners
* rect_intersection: regions overlapping the dragged rect, largest overlap first

``detect_collisions`` combines them into the board's policy. A dragged column
prefers a column whose region contains the pointer and falls back to
closest_corners. A dragged task uses rect_intersection only.
"""

import math
from typing import Collection, List, Optional, Sequence, Tuple

from ..models.drag import Collision, Droppable, Point, Rect


def _corners(rect: Rect) -> List[Tuple[float, float]]:
    return [
        (rect.left, rect.top),
        (rect.right, rect.top),
        (rect.left, rect.bottom),
        (rect.right, rect.bottom),
    ]


def _distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def intersection_ratio(entry: Rect, target: Rect) -> float:
    """Overlap area divided by the area of the union of both rects"""
    left = max(target.left, entry.left)
    top = max(target.top, entry.top)
    right = min(target.right, entry.right)
    bottom = min(target.bottom, entry.bottom)
    if left >= right or top >= bottom:
        return 0.0

    overlap = (right - left) * (bottom - top)
    union = target.width * target.height + entry.width * entry.height - overlap
    return overlap / union if union > 0 else 0.0


def pointer_within(pointer: Optional[Point], droppables: Sequence[Droppable]) -> List[Collision]:
    if pointer is None:
        return []

    collisions = []
    for droppable in droppables:
        if not droppable.rect.contains(pointer):
            continue
        distance = sum(_distance(c, (pointer.x, pointer.y)) for c in _corners(droppable.rect)) / 4
        collisions.append(Collision(id=droppable.id, value=distance))
    return sorted(collisions, key=lambda c: c.value)


def closest_corners(collision_rect: Rect, droppables: Sequence[Droppable]) -> List[Collision]:
    dragged = _corners(collision_rect)
    collisions = []
    for droppable in droppables:
        distance = sum(
            _distance(a, b) for a, b in zip(dragged, _corners(droppable.rect))
        ) / 4
        collisions.append(Collision(id=droppable.id, value=distance))
    return sorted(collisions, key=lambda c: c.value)


def rect_intersection(collision_rect: Rect, droppables: Sequence[Droppable]) -> List[Collision]:
    collisions = []
    for droppable in droppables:
        ratio = intersection_ratio(collision_rect, droppable.rect)
        if ratio > 0:
            collisions.append(Collision(id=droppable.id, value=ratio))
    return sorted(collisions, key=lambda c: c.value, reverse=True)


def detect_collisions(
    dragging_column: bool,
    column_ids: Collection[str],
    pointer: Optional[Point],
    collision_rect: Rect,
    droppables: Sequence[Droppable],
) -> List[Collision]:
    """Apply the two-tier policy; the first collision is the drop target"""
    if dragging_column:
        hits = [c for c in pointer_within(pointer, droppables) if c.id in column_ids]
        if hits:
            return [hits[0]]
        return closest_corners(collision_rect, droppables)

    return rect_intersection(collision_rect, droppables)
