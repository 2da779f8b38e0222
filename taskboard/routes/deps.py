"""Route dependencies"""

from typing import Any, Dict

from fastapi import Request
from pydantic import BaseModel

from ..services.drag import DragSession
from ..services.store import BoardStore


def get_store(request: Request) -> BoardStore:
    return request.app.state.store


def get_drag_session(request: Request) -> DragSession:
    return request.app.state.drag


def patch_fields(data: BaseModel) -> Dict[str, Any]:
    """Fields the client actually sent, with nested models left as models"""
    return {name: getattr(data, name) for name in data.model_fields_set}


def dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)
