"""Drag gesture models"""

from typing import List, Optional

from pydantic import BaseModel

from .board import Payload


class Point(BaseModel):
    x: float
    y: float


class Rect(BaseModel):
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


class Droppable(BaseModel):
    id: str
    rect: Rect


class Collision(BaseModel):
    id: str
    value: float = 0.0


class DragStart(Payload):
    active_id: str
    board_id: Optional[str] = None


class DragOver(Payload):
    pointer: Optional[Point] = None
    collision_rect: Rect
    droppables: List[Droppable] = []


class DragEnd(Payload):
    over_id: Optional[str] = None
