import pytest
from fastapi.testclient import TestClient

from foryou.core.app import app
from foryou.core.config import settings
from foryou.services.feed import FeedRegistry, get_feed_registry
from foryou.services.record_store import MemoryRecordStore


class FixedRemote:
    async def fetch(self):
        return {"recommendWeights": {"maxItems": 5, "wRecency": "oops"}}

    async def close(self):
        pass


@pytest.fixture
def client(make_play_record, make_favorite):
    def store_factory(user_id: str) -> MemoryRecordStore:
        return MemoryRecordStore(
            favorites={"f1": make_favorite(title="Fav")},
            play_records={"h1": make_play_record(title="Half", play_time=50, total_time=100)},
        )

    registry = FeedRegistry(remote=FixedRemote(), store_factory=store_factory)
    app.dependency_overrides[get_feed_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_for_you_row(client):
    response = client.get("/user-1/for-you.json")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "For You"
    assert data["phase"] == "remote_applied"
    assert data["weights"] == {"wFav": 3.0, "wRecency": 2.0, "wProgress": 1.5, "decayDays": 7.0, "maxItems": 5}
    assert [item["key"] for item in data["items"]] == ["f1", "h1"]
    assert data["items"][1]["remarks"] == "Watched 50%"
    assert set(data["items"][0]) == {
        "key",
        "title",
        "cover",
        "source_name",
        "year",
        "episodes",
        "progress_ratio",
        "score",
        "remarks",
    }


def test_slider_patch_reranks(client):
    client.patch("/user-1/weights", json={"field": "wFav", "value": 0})
    response = client.patch("/user-1/weights", json={"field": "wProgress", "value": 9})

    assert response.status_code == 200
    data = response.json()
    assert data["phase"] == "user_overridden"
    assert data["weights"]["wFav"] == 0.0
    assert data["weights"]["wProgress"] == 5.0
    assert [item["key"] for item in data["items"]] == ["h1", "f1"]


def test_repeated_requests_reuse_the_session(client):
    first = client.get("/user-1/for-you.json")
    second = client.get("/user-1/for-you.json")
    patched = client.patch("/user-1/weights", json={"field": "wRecency", "value": 1})

    assert [r.status_code for r in (first, second, patched)] == [200, 200, 200]
    assert second.json() == first.json()
    assert patched.json()["weights"]["wRecency"] == 1.0


def test_unknown_slider_is_rejected(client):
    response = client.patch("/user-1/weights", json={"field": "maxItems", "value": 3})
    assert response.status_code == 422


def test_ending_session_resets_weights(client):
    client.patch("/user-1/weights", json={"field": "wFav", "value": 1})

    assert client.delete("/user-1/session").status_code == 204

    data = client.get("/user-1/for-you.json").json()
    assert data["weights"]["wFav"] == 3.0


def test_admin_weights_only_include_configured_fields(client, monkeypatch):
    monkeypatch.setattr(settings, "RECOMMEND_W_FAV", 1.0)
    monkeypatch.setattr(settings, "RECOMMEND_MAX_ITEMS", 20)

    assert client.get("/api/admin/ai-recommend").json() == {"recommendWeights": {"wFav": 1.0, "maxItems": 20}}


def test_unexpected_slider_error_is_a_server_error():
    def broken_store(user_id: str):
        raise RuntimeError("store unavailable")

    registry = FeedRegistry(remote=None, store_factory=broken_store)
    app.dependency_overrides[get_feed_registry] = lambda: registry
    try:
        with TestClient(app) as test_client:
            response = test_client.patch("/user-1/weights", json={"field": "wFav", "value": 1})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "store unavailable"}
