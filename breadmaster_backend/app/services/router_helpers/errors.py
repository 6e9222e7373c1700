# breadmaster_backend/app/services/router_helpers/errors.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status
from pydantic import ValidationError

from breadmaster_backend.app.services.storage import StorageError
from breadmaster_backend.app.utils.logs import get_logger

log = get_logger("api")

# What it does:
# Map store/storage failures onto HTTP:
#   KeyError (unknown id)      -> 404
#   ValidationError (bad data) -> 422
#   StorageError (write)       -> 502, the backend is the thing that failed
# HTTPExceptions raised inside the block pass through untouched.
@contextmanager
def store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except KeyError as e:
        detail = e.args[0] if e.args else str(e)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{action} failed: {detail}")
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"{action} failed: {e}")
    except StorageError as e:
        log.error("%s failed in storage: %s", action, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"{action} failed: {e}")
