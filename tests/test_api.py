"""
HTTP boundary, no database – the store runs on an in-memory collaborator.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.meal_store import STORAGE_KEY, TARGET_KCAL, MealStore
from core.quick_add import QuickAddForm
from main import app
from services.kv_store import InMemoryKeyValueStore
from services.state import get_meal_store, get_quick_add_form, get_target_kcal


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def client(kv):
    store = MealStore(kv)
    store.initialize()
    form = QuickAddForm(store)

    app.dependency_overrides[get_meal_store] = lambda: store
    app.dependency_overrides[get_quick_add_form] = lambda: form
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ── meals ───────────────────────────────────────────────────────────
def test_board_for_fresh_checklist(client):
    board = client.get("/api/v1/meals").json()
    assert [m["id"] for m in board["meals"]] == [1, 2, 3, 4]
    assert board["total_kcal"] == 0
    assert board["remaining_kcal"] == 1200
    assert board["message"] == "Need = 1200 - 0 = 1200 Kcal more!"


def test_board_target_is_the_core_constant(client):
    board = client.get("/api/v1/meals").json()
    assert get_target_kcal() == TARGET_KCAL == board["target_kcal"] == 1200


def test_toggle_and_confirmed_delete(client):
    board = client.post("/api/v1/meals/2/toggle").json()
    assert board["total_kcal"] == 310
    assert board["remaining_kcal"] == 890

    r = client.delete("/api/v1/meals/3", params={"confirm": "true"})
    assert r.status_code == 200
    board = r.json()
    assert len(board["meals"]) == 3
    assert board["total_kcal"] == 310


def test_delete_without_confirmation_is_refused(client):
    r = client.delete("/api/v1/meals/1")
    assert r.status_code == 409
    assert '"Leamon water"' in r.json()["detail"]
    assert len(client.get("/api/v1/meals").json()["meals"]) == 4


def test_stale_id_is_harmless(client):
    assert client.post("/api/v1/meals/999/toggle").status_code == 200
    r = client.delete("/api/v1/meals/999", params={"confirm": "true"})
    assert r.status_code == 200
    assert len(r.json()["meals"]) == 4


def test_target_reached_message(client):
    for meal_id in (2, 3, 4):
        board = client.post(f"/api/v1/meals/{meal_id}/toggle").json()
    assert board["target_reached"] is True
    assert board["message"] == "Target Reached!"


# ── quick add ───────────────────────────────────────────────────────
def test_quick_add_flow(client, kv):
    for field, value in [("title", "Tea"), ("kcal", "50"), ("meal_time", "6 AM")]:
        assert client.patch("/api/v1/quick-add", json={"field": field, "value": value}).status_code == 200

    out = client.post("/api/v1/quick-add/submit").json()
    assert out["accepted"] is True
    assert out["meal"]["details"] == "P 0g . C 0g . F 0g"
    assert out["draft"]["title"] == "" and out["draft"]["meal_time"] == "7 AM"
    assert '"Tea"' in kv.get(STORAGE_KEY)


def test_quick_add_rejection_keeps_draft(client):
    client.patch("/api/v1/quick-add", json={"field": "kcal", "value": "50"})
    out = client.post("/api/v1/quick-add/submit").json()
    assert out["accepted"] is False
    assert out["meal"] is None
    assert out["draft"]["kcal"] == "50"


def test_quick_add_rejects_bad_slot(client):
    r = client.patch("/api/v1/quick-add", json={"field": "meal_time", "value": "13 PM"})
    assert r.status_code == 422


def test_time_slots_in_order(client):
    slots = client.get("/api/v1/quick-add/time-slots").json()
    assert len(slots) == 24
    assert slots[0] == "12 AM" and slots[12] == "12 PM" and slots[-1] == "11 PM"


# ── meta ────────────────────────────────────────────────────────────
def test_clock_and_health(client):
    clock = client.get("/api/v1/clock").json()
    assert set(clock) == {"now", "date", "time", "greeting"}
    assert client.get("/health").json()["status"] == "ok"


def test_corrupt_storage_surfaces_as_503():
    def _broken() -> MealStore:
        store = MealStore(InMemoryKeyValueStore({STORAGE_KEY: "oops"}))
        store.initialize()
        return store

    app.dependency_overrides[get_meal_store] = _broken
    try:
        with TestClient(app) as c:
            r = c.get("/api/v1/meals")
        assert r.status_code == 503
        assert "unreadable" in r.json()["detail"]
    finally:
        app.dependency_overrides.clear()
