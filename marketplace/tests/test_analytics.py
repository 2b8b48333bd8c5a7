from __future__ import annotations

from fastapi.testclient import TestClient

from marketplace.analytics.store import clear_events, get_events, record_event
from marketplace.app import app
from marketplace.catalog.data_store import reset_catalog
from marketplace.rentals.store import clear_rentals

client = TestClient(app)


def _login_admin(c):
    c.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})


def test_get_events_filters_by_type():
    clear_events()
    record_event("search", {"query": "a"})
    record_event("related", {"listing_id": "1"})
    assert [e["type"] for e in get_events()] == ["search", "related"]
    assert [e["query"] for e in get_events("search")] == ["a"]
    clear_events()


def test_analytics_returns_empty_initially():
    clear_events()
    clear_rentals()
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["total_searches"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["zero_result_rate"] == 0.0
    assert body["related_requests"] == 0
    assert body["rentals_by_status"] == {}


def test_analytics_tracks_searches():
    clear_events()
    reset_catalog()
    c = TestClient(app)
    c.post("/listings/search", json={"q": "Bebek Arabası"})
    c.post("/listings/search", json={"q": "bebek arabasi", "tags": ["seyahat"]})
    c.post("/listings/search", json={"q": "zzzzqqqq"})

    _login_admin(client)
    body = client.get("/analytics").json()

    assert body["total_searches"] == 3
    assert body["top_queries"][0] == {"name": "bebek arabasi", "count": 2}
    assert body["top_tags"] == [{"name": "seyahat", "count": 1}]
    assert body["zero_result_rate"] == 33.3


def test_analytics_tracks_related_requests():
    clear_events()
    reset_catalog()
    TestClient(app).get("/listings/3/related")
    _login_admin(client)
    assert client.get("/analytics").json()["related_requests"] == 1


def test_analytics_counts_rentals_by_status():
    clear_events()
    clear_rentals()
    reset_catalog()
    renter = TestClient(app)
    renter.post("/auth/login", json={"email": "mehmet@example.com", "password": "mehmet123"})
    renter.post("/rentals", json={"listing_id": "1", "start_date": "2025-05-01", "end_date": "2025-05-03"})

    _login_admin(client)
    assert client.get("/analytics").json()["rentals_by_status"] == {"pending": 1}
