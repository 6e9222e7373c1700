# breadmaster_backend/tests/test_recipe_store.py
from __future__ import annotations

import logging

import pytest

from breadmaster_backend.app.services.data_stores import RECIPES_KEY, RecipeStore
from breadmaster_backend.app.services.storage import StorageService

pytestmark = pytest.mark.anyio

@pytest.fixture
async def store():
    s = RecipeStore(StorageService(backend="session"))
    await s.load()
    return s

async def test_create_fills_defaults(store):
    r = await store.create({})
    assert r.name == "New Recipe"
    assert (r.dough_weight, r.number_of_loaves, r.hydration, r.salt_percentage) == (1000, 1, 70, 2)
    assert r.yeast_type.value == "Instant"
    assert r.bread_type == "Boule"
    assert [(f.name, f.percentage) for f in r.flour_types] == [
        ("Bread Flour", 80), ("Whole Wheat Flour", 20), ("Rye Flour", 0), ("All-Purpose Flour", 0),
    ]
    assert r.stages == []

async def test_mutations_write_the_whole_list(store):
    r1 = await store.create({"name": "A"})
    await store.create({"name": "B"})
    stored = await store.storage.get_item(RECIPES_KEY)
    assert [d["name"] for d in stored] == ["A", "B"]
    assert stored[0]["id"] == r1.id
    assert "doughWeight" in stored[0] and "flourTypes" in stored[0]

async def test_update_is_partial_and_refreshes_updated(store):
    r = await store.create({"name": "A", "hydration": 65})
    u = await store.update(r.id, {"hydration": 78})
    assert u.name == "A" and u.hydration == 78
    assert u.created == r.created
    assert u.updated >= r.updated

async def test_check_hook_can_refuse_a_save(store):
    def refuse(recipe):
        raise ValueError("no")

    with pytest.raises(ValueError):
        await store.create({"name": "A"}, check=refuse)
    assert store.list() == []

async def test_duplicate_gets_fresh_ids(store):
    r = await store.create({
        "name": "Rye",
        "stages": [{"name": "Mix", "order": 0}],
        "flourTypes": [{"name": "Rye Flour", "percentage": 100}],
    })
    d = await store.duplicate(r.id)
    assert d.name == "Rye (Copy)"
    assert d.id != r.id
    assert d.stages[0].id != r.stages[0].id
    assert d.flour_types[0].id != r.flour_types[0].id
    assert len(store.list()) == 2

async def test_unknown_ids_raise_key_error(store):
    with pytest.raises(KeyError):
        await store.update("nope", {"name": "x"})
    with pytest.raises(KeyError):
        await store.delete("nope")
    with pytest.raises(KeyError):
        await store.duplicate("nope")

async def test_search_and_bread_types(store):
    await store.create({"name": "Country Loaf", "breadType": "Boule"})
    await store.create({"name": "Seeded", "breadType": "Batard",
                        "flourTypes": [{"name": "Spelt Flour", "percentage": 100}]})
    assert [r.name for r in store.search("spelt")] == ["Seeded"]
    assert [r.name for r in store.search("BATARD")] == ["Seeded"]
    assert len(store.search("  ")) == 2
    assert store.bread_types() == ["Boule", "Batard"]

# Purpose:
# Rehydration tolerates junk: non-list collections are empty, bad records skipped.
async def test_load_skips_bad_records(caplog):
    svc = StorageService(backend="session")
    await svc.set_item(RECIPES_KEY, [{"name": "ok"}, {"hydration": "very wet"}])
    with caplog.at_level(logging.ERROR):
        loaded = await RecipeStore(svc).load()
    assert [r.name for r in loaded] == ["ok"]
    assert "Skipping unreadable recipe" in caplog.text

    await svc.set_item(RECIPES_KEY, {"not": "a list"})
    assert await RecipeStore(svc).load() == []

async def test_reload_sees_persisted_recipes():
    svc = StorageService(backend="local")
    r = await RecipeStore(svc).create({"name": "Keeper"})
    again = RecipeStore(StorageService(backend="local"))
    await again.load()
    assert again.require(r.id).name == "Keeper"
