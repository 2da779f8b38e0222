"""TinyDB key-value storage for board snapshots"""

import logging
from pathlib import Path
from typing import Any, Optional

from tinydb import TinyDB, Query
from tinydb.storages import MemoryStorage

logger = logging.getLogger(__name__)


class Storage:
    """Key to JSON value store using TinyDB

    Each key is one document in the ``entries`` table. Without a path the
    database lives in memory, which is what the tests use.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path
        self.db: TinyDB = None

    def initialize(self):
        """Initialize database connection"""
        if self.db is not None:
            return
        if self.db_path is None:
            self.db = TinyDB(storage=MemoryStorage)
        else:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.db = TinyDB(str(self.db_path))
            logger.info(f"Opened board storage at {self.db_path}")

    def close(self):
        if self.db is not None:
            self.db.close()
            self.db = None

    @property
    def entries(self):
        return self.db.table("entries")

    def load(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default when absent"""
        self.initialize()
        doc = self.entries.get(Q.key == key)
        if doc is None:
            return default
        return doc["value"]

    def save(self, key: str, value: Any):
        """Store value under key, replacing any previous value"""
        self.initialize()
        self.entries.upsert({"key": key, "value": value}, Q.key == key)

    def has(self, key: str) -> bool:
        self.initialize()
        return self.entries.contains(Q.key == key)


# Query helper
Q = Query()
