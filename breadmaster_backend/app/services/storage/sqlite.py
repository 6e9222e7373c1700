# breadmaster_backend/app/services/storage/sqlite.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Any, Optional

from anyio import to_thread
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from breadmaster_backend.app.config import resolve_data_file
from breadmaster_backend.app.db.models import StoredItem
from breadmaster_backend.app.db.session import init_db, make_engine
from .base import StorageBackend, StorageConfig, StorageError, StorageProvider

DB_FILENAME = "breadmaster_store.sqlite3"

# Purpose:
# Embedded transactional backend. The database is opened on first use,
# every operation runs in its own session/transaction on a worker thread,
# and one lock per provider keeps those transactions in issue order.


class SQLiteStorageProvider(StorageProvider):
    kind = StorageBackend.SQLITE

    def __init__(
        self,
        config: StorageConfig,
        path: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(config, logger)
        self._path = path
        self._engine: Optional[Engine] = None
        self._lock = RLock()

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = resolve_data_file("storage", DB_FILENAME)
        return self._path

    # ---- sync side (worker thread) ----

    def _open(self) -> Engine:
        with self._lock:
            if self._engine is None:
                engine = make_engine(self.path)
                init_db(engine)
                self._engine = engine
            return self._engine

    def _read(self, key: str) -> Optional[str]:
        with self._lock, Session(self._open()) as s:
            row = s.get(StoredItem, self._key(key))
            return None if row is None else row.value

    def _write(self, key: str, text: str) -> None:
        with self._lock, Session(self._open()) as s:
            row = s.get(StoredItem, self._key(key))
            if row is None:
                s.add(StoredItem(key=self._key(key), value=text))
            else:
                row.value = text
                s.add(row)
            s.commit()

    def _delete(self, key: str) -> None:
        with self._lock, Session(self._open()) as s:
            row = s.get(StoredItem, self._key(key))
            if row is not None:
                s.delete(row)
                s.commit()

    def _clear_prefix(self) -> None:
        with self._lock, Session(self._open()) as s:
            stmt = select(StoredItem).where(col(StoredItem.key).startswith(self.prefix, autoescape=True))
            for row in s.exec(stmt).all():
                s.delete(row)
            s.commit()

    def _drop_database(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
            for suffix in ("", "-journal", "-wal", "-shm"):
                Path(f"{self.path}{suffix}").unlink(missing_ok=True)

    # ---- async contract ----

    async def init(self) -> None:
        """Open (and if needed create) the database now instead of on first use."""
        try:
            await to_thread.run_sync(self._open)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"cannot open {self.path}: {e}") from e

    async def get_item(self, key: str, default: Any = None) -> Any:
        try:
            raw = await to_thread.run_sync(self._read, key)
        except (SQLAlchemyError, OSError) as e:
            self.log.error("Error getting item from %s: %s (%s)", self.path.name, key, e)
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            self.log.error("Error parsing item with key %s: %s", key, e)
            return default

    async def set_item(self, key: str, value: Any) -> None:
        try:
            text = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"value for {key} is not JSON-serializable: {e}") from e
        try:
            await to_thread.run_sync(self._write, key, text)
        except (SQLAlchemyError, OSError) as e:
            self.log.error("Error saving item to %s: %s (%s)", self.path.name, key, e)
            raise StorageError(f"failed to save {key}: {e}") from e

    async def remove_item(self, key: str) -> None:
        try:
            await to_thread.run_sync(self._delete, key)
        except (SQLAlchemyError, OSError) as e:
            self.log.error("Error removing item from %s: %s (%s)", self.path.name, key, e)
            raise StorageError(f"failed to remove {key}: {e}") from e

    async def clear(self, clear_all: bool = False) -> None:
        try:
            if clear_all:
                await to_thread.run_sync(self._drop_database)
            else:
                await to_thread.run_sync(self._clear_prefix)
        except (SQLAlchemyError, OSError) as e:
            self.log.error("Error clearing %s: %s", self.path.name, e)
            raise StorageError(f"failed to clear {self.path.name}: {e}") from e
