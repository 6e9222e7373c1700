# breadmaster_backend/app/services/data_stores/bake_sessions.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from breadmaster_backend.app.schemas import (
    BakeCompletion, BakeSession, BakingStage, Recipe, StageProgress,
    StageProgressUpdate, new_id, utc_now,
)
from breadmaster_backend.app.services.baking import default_stages
from breadmaster_backend.app.services.storage import StorageService
from .recipes import _coerce_list

BAKE_SESSIONS_KEY = "bakeSessions"

# Purpose:
# Bake-session bookkeeping: which stage is running, when each one started
# and ended, and the post-bake ratings. Stage completion only moves forward.


def _minutes_between(start: Optional[datetime], end: datetime) -> Optional[float]:
    if start is None:
        return None
    return (end - start).total_seconds() / 60

def _included(stages: List[BakingStage]) -> List[BakingStage]:
    # included=None comes from records written before the flag existed
    return sorted((s for s in stages if s.included is not False), key=lambda s: s.order)


class BakeSessionStore:
    def __init__(self, storage: StorageService):
        self.storage = storage
        self._sessions: List[BakeSession] = []
        self.loaded = False

    async def load(self) -> List[BakeSession]:
        raw = await self.storage.get_item(BAKE_SESSIONS_KEY, [])
        self._sessions = _coerce_list(raw, BakeSession, "bake session")
        self.loaded = True
        return self.list()

    async def _commit(self, sessions: List[BakeSession]) -> None:
        self._sessions = sessions
        await self.storage.set_item(BAKE_SESSIONS_KEY, [s.to_doc() for s in sessions])

    async def _replace(self, session: BakeSession) -> BakeSession:
        await self._commit([session if s.id == session.id else s for s in self._sessions])
        return session

    # ---- reads ----

    def list(
        self,
        recipe_id: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> List[BakeSession]:
        out = list(self._sessions)
        if recipe_id:
            out = [s for s in out if s.recipe_id == recipe_id]
        if active is True:
            out = [s for s in out if not s.is_completed]
        elif active is False:
            out = [s for s in out if s.is_completed]
        return out

    def get(self, session_id: str) -> Optional[BakeSession]:
        for s in self._sessions:
            if s.id == session_id:
                return s
        return None

    def require(self, session_id: str) -> BakeSession:
        s = self.get(session_id)
        if s is None:
            raise KeyError(f"bake session not found: {session_id}")
        return s

    # ---- mutations ----

    async def start(self, recipe: Recipe) -> BakeSession:
        """
        New session for `recipe`. Stage names are copied now, so renaming a
        recipe stage later does not rewrite this bake's history.
        """
        now = utc_now()
        stages = _included(recipe.stages) if recipe.stages else _included(default_stages())
        progress = [
            StageProgress(
                id=new_id(),
                stage_id=stage.id,
                stage_name=stage.name,
                order=stage.order,
                start_time=now if i == 0 else None,
                last_updated=now,
            )
            for i, stage in enumerate(stages)
        ]
        session = BakeSession(
            id=new_id(),
            recipe_id=recipe.id,
            start_time=now,
            created=now,
            updated=now,
            stage_progress=progress,
        )
        await self._commit(self._sessions + [session])
        return session

    async def update(self, session_id: str, data: Mapping[str, Any]) -> BakeSession:
        current = self.require(session_id)
        merged = BakeSession.model_validate({
            **current.model_dump(),
            **dict(data),
            "id": current.id,
            "updated": utc_now(),
        })
        return await self._replace(merged)

    def _edit_stage(
        self,
        session_id: str,
        progress_id: str,
        edit: Callable[[int, StageProgress, List[StageProgress]], None],
    ) -> BakeSession:
        session = self.require(session_id).model_copy(deep=True)
        for i, p in enumerate(session.stage_progress):
            if p.id == progress_id:
                edit(i, p, session.stage_progress)
                session.updated = utc_now()
                return session
        raise KeyError(f"stage not found in bake {session_id}: {progress_id}")

    async def update_stage_progress(
        self,
        session_id: str,
        progress_id: str,
        data: Mapping[str, Any] | StageProgressUpdate,
    ) -> BakeSession:
        upd = data if isinstance(data, StageProgressUpdate) else StageProgressUpdate.model_validate(dict(data))
        changes: Dict[str, Any] = upd.model_dump(exclude_unset=True)

        def edit(i: int, p: StageProgress, _all: List[StageProgress]) -> None:
            if p.completed and changes.get("completed") is False:
                changes.pop("completed")       # completed stages never reopen
            for k, v in changes.items():
                setattr(p, k, v)
            p.last_updated = utc_now()

        return await self._replace(self._edit_stage(session_id, progress_id, edit))

    async def mark_stage_complete(self, session_id: str, progress_id: str) -> BakeSession:
        """
        Close a stage and start the next one. Completing an already
        completed stage changes nothing.
        """
        now = utc_now()

        def edit(i: int, p: StageProgress, stages: List[StageProgress]) -> None:
            if p.completed:
                return
            p.completed = True
            p.end_time = now
            p.duration = _minutes_between(p.start_time, now)
            p.last_updated = now
            if i + 1 < len(stages) and stages[i + 1].start_time is None:
                stages[i + 1].start_time = now
                stages[i + 1].last_updated = now

        return await self._replace(self._edit_stage(session_id, progress_id, edit))

    async def complete(self, session_id: str, data: Optional[BakeCompletion] = None) -> BakeSession:
        current = self.require(session_id)
        now = utc_now()
        changes: Dict[str, Any] = {"end_time": now, "updated": now}
        if data is not None:
            if data.ratings is not None:
                changes["ratings"] = data.ratings
            if data.notes is not None:
                changes["notes"] = data.notes
            if data.photos is not None:
                changes["photos"] = list(data.photos)
        return await self._replace(current.model_copy(update=changes))

    async def delete(self, session_id: str) -> None:
        self.require(session_id)
        await self._commit([s for s in self._sessions if s.id != session_id])
