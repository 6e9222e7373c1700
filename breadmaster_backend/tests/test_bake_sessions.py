# breadmaster_backend/tests/test_bake_sessions.py
from __future__ import annotations

import pytest

from breadmaster_backend.app.schemas import BakeCompletion, BakeRatings, Recipe
from breadmaster_backend.app.services.data_stores import BAKE_SESSIONS_KEY, BakeSessionStore
from breadmaster_backend.app.services.storage import StorageService

pytestmark = pytest.mark.anyio

@pytest.fixture
async def store():
    s = BakeSessionStore(StorageService(backend="session"))
    await s.load()
    return s

def _recipe(**over):
    data = {
        "name": "Loaf",
        "stages": [
            {"id": "s-shape", "name": "Shape", "order": 1, "included": True},
            {"id": "s-mix", "name": "Mix", "order": 0, "included": True},
            {"id": "s-skip", "name": "Autolyse", "order": 2, "included": False},
            {"id": "s-bake", "name": "Bake", "order": 3, "included": None},
        ],
    }
    data.update(over)
    return Recipe.model_validate(data)

async def test_start_uses_included_stages_in_order(store):
    recipe = _recipe()
    s = await store.start(recipe)
    assert [p.stage_name for p in s.stage_progress] == ["Mix", "Shape", "Bake"]
    assert s.stage_progress[0].start_time is not None
    assert all(p.start_time is None for p in s.stage_progress[1:])
    assert s.recipe_id == recipe.id
    assert not s.is_completed

async def test_start_without_stages_uses_defaults(store):
    s = await store.start(_recipe(stages=[]))
    assert [p.stage_name for p in s.stage_progress] == [
        "Autolyse", "Mix", "Bulk Ferment", "Shape", "Proof", "Bake",
    ]

# Purpose:
# Completing a stage closes it, starts the next, and is idempotent.
async def test_mark_stage_complete_advances_and_is_monotonic(store):
    s = await store.start(_recipe())
    first, second = s.stage_progress[0], s.stage_progress[1]

    s = await store.mark_stage_complete(s.id, first.id)
    done = s.stage_progress[0]
    assert done.completed and done.end_time is not None
    assert done.duration is not None and done.duration >= 0
    assert s.stage_progress[1].start_time is not None

    again = await store.mark_stage_complete(s.id, first.id)
    assert again.stage_progress[0].end_time == done.end_time
    assert again.stage_progress[1].start_time == s.stage_progress[1].start_time
    assert second.id == again.stage_progress[1].id

async def test_stage_update_never_reopens_a_completed_stage(store):
    s = await store.start(_recipe())
    pid = s.stage_progress[0].id
    await store.mark_stage_complete(s.id, pid)
    s = await store.update_stage_progress(s.id, pid, {"completed": False, "notes": "sticky"})
    assert s.stage_progress[0].completed is True
    assert s.stage_progress[0].notes == "sticky"

async def test_stage_update_accepts_camel_case(store):
    s = await store.start(_recipe())
    s = await store.update_stage_progress(s.id, s.stage_progress[1].id, {"elapsedSeconds": 90})
    assert s.stage_progress[1].elapsed_seconds == 90

async def test_unknown_stage_or_session_raises(store):
    s = await store.start(_recipe())
    with pytest.raises(KeyError):
        await store.mark_stage_complete(s.id, "nope")
    with pytest.raises(KeyError):
        await store.complete("nope")

async def test_complete_and_filters(store):
    r1, r2 = _recipe(), _recipe()
    a = await store.start(r1)
    b = await store.start(r2)
    done = await store.complete(a.id, BakeCompletion(
        ratings=BakeRatings(crumb=5, crust=4, flavor=3),
        photos=["crumb.jpg"],
    ))
    assert done.is_completed
    assert done.ratings.average == 4
    assert done.photos == ["crumb.jpg"]

    assert [s.id for s in store.list(active=True)] == [b.id]
    assert [s.id for s in store.list(active=False)] == [a.id]
    assert [s.id for s in store.list(recipe_id=r2.id)] == [b.id]

async def test_update_and_delete_persist(store):
    s = await store.start(_recipe())
    await store.update(s.id, {"photos": ["a.jpg"]})
    stored = await store.storage.get_item(BAKE_SESSIONS_KEY)
    assert stored[0]["photos"] == ["a.jpg"]
    assert "stageProgress" in stored[0]

    await store.delete(s.id)
    assert await store.storage.get_item(BAKE_SESSIONS_KEY) == []
    with pytest.raises(KeyError):
        await store.delete(s.id)
