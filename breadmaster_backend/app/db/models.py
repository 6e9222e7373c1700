# models.py  (embedded item store)

from __future__ import annotations
from sqlmodel import SQLModel, Field


# One row per stored item. `key` already carries the provider prefix,
# so several app instances can share a database file.
class StoredItem(SQLModel, table=True):
    __tablename__ = "bread_app_store"

    key: str = Field(primary_key=True)
    value: str                           # JSON text
