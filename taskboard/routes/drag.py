"""Drag gesture routes"""

from fastapi import APIRouter, Depends

from ..models.drag import DragEnd, DragOver, DragStart
from ..services.drag import DragSession
from .deps import get_drag_session

router = APIRouter()


@router.post("/start")
async def start_drag(data: DragStart, session: DragSession = Depends(get_drag_session)):
    """Begin dragging a column or task; unknown ids are ignored"""
    subject = session.start(data.active_id, data.board_id)
    if subject is None:
        return {"dragging": False, "kind": None, "id": None}
    return {"dragging": True, "kind": subject.kind.value, "id": subject.id}


@router.post("/over")
async def drag_over(data: DragOver, session: DragSession = Depends(get_drag_session)):
    """Report collisions for the current pointer and dragged rect"""
    collisions = session.move(data.collision_rect, data.droppables, data.pointer)
    return {
        "overId": session.over_id,
        "collisions": [c.model_dump() for c in collisions],
    }


@router.post("/end")
async def end_drag(data: DragEnd, session: DragSession = Depends(get_drag_session)):
    """Drop the dragged element and commit the new order"""
    committed = session.end(data.over_id)
    return {"committed": committed, "phase": session.phase.value}


@router.post("/cancel")
async def cancel_drag(session: DragSession = Depends(get_drag_session)):
    """Abandon the gesture without changing anything"""
    session.cancel()
    return {"cancelled": True, "phase": session.phase.value}
