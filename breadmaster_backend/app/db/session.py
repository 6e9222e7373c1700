# breadmaster_backend/app/db/session.py

# [DB Session] Engine + versioned schema
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

SCHEMA_VERSION = 1

def make_engine(path: Path) -> Engine:
    path.parent.mkdir(parents=True, exist_ok=True)
    # Calls arrive from worker threads; the provider serializes them itself
    connect_args = {"check_same_thread": False}
    return create_engine(f"sqlite:///{path}", echo=False, connect_args=connect_args)

def init_db(engine: Engine) -> int:
    """
    Create the item table if absent and stamp the schema version.
    Safe to call repeatedly.
    """
    from . import models  # noqa: F401

    with engine.begin() as conn:
        version = conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
        if version < SCHEMA_VERSION:
            SQLModel.metadata.create_all(conn, tables=[models.StoredItem.__table__])
            conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
            version = SCHEMA_VERSION
    return int(version)
