"""Services module"""

from .drag import DragSession
from .storage import Storage
from .store import BoardStore

__all__ = ["BoardStore", "DragSession", "Storage"]
