"""
End-to-end tests for the composition router over HTTP.
"""

from datetime import timedelta

MANUAL_SHELF = {
    "id": "s-picks",
    "title": "Editor picks",
    "strategy": "MANUAL",
    "domain": "CONTENT",
    "selectedItems": ["v1", "v2", "v3"],
}

HOME_PAGE = {
    "id": "home-page",
    "name": "home",
    "shelves": [
        {"id": "ps-1", "shelfId": "s1", "shelfTitle": "Trending Now", "order": 0},
        {"id": "ps-2", "shelfId": "s2", "shelfTitle": "Featured Collections", "order": 1},
    ],
}


def test_move_manual_item(client):
    response = client.post(
        "/composition/shelves/items/move",
        json={"config": MANUAL_SHELF, "activeId": "v1", "overId": "v3"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is True
    assert data["config"]["selectedItems"] == ["v2", "v3", "v1"]


def test_add_duplicate_shelf_to_page(client):
    response = client.post(
        "/composition/pages/shelves/add",
        json={"page": HOME_PAGE, "shelf": {"id": "s1", "title": "Trending Now"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is False
    assert data["reason"] == "DUPLICATE_SHELF"
    assert data["page"] == HOME_PAGE


def test_reorder_page_shelves(client):
    response = client.post(
        "/composition/pages/shelves/reorder",
        json={"page": HOME_PAGE, "activeId": "ps-2", "overId": "ps-1"},
    )

    shelves = response.json()["page"]["shelves"]
    assert [s["shelfId"] for s in shelves] == ["s2", "s1"]
    assert [s["order"] for s in shelves] == [0, 1]


def test_switch_automatic_to_personalized(client):
    config = {
        "id": "s-latest",
        "title": "Latest",
        "strategy": "AUTOMATIC",
        "filterDomain": "CONTENT",
        "filterRule": "RECENT",
        "limit": 12,
    }

    response = client.post(
        "/composition/shelves/strategy", json={"config": config, "strategy": "PERSONALIZED"}
    )

    data = response.json()
    assert data["strategy"] == "PERSONALIZED"
    assert data["filterRule"] is None
    assert data["filterDomain"] is None
    assert data["filterField"] is None
    assert data["filterValue"] is None
    assert data["algorithm"] is None
    assert data["limit"] == 12


def test_validate_reports_field_issues(client):
    config = {"id": "s", "title": "Bad", "strategy": "PERSONALIZED", "domain": "BANNER", "limit": 500}

    response = client.post("/composition/shelves/validate", json=config)

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert {issue["field"] for issue in data["issues"]} == {"domain", "algorithm", "limit"}


def test_resolve_manual_shelf_drops_unknown_items(client):
    config = dict(MANUAL_SHELF, selectedItems=["v2", "deleted", "v1"])

    response = client.post("/composition/shelves/resolve", json=config)

    data = response.json()
    assert data["shelfId"] == "s-picks"
    assert [item["id"] for item in data["items"]] == ["v2", "v1"]


def test_schedule_gate_over_http(client, now):
    future = (now + timedelta(days=1)).isoformat()

    evaluated = client.post(
        "/composition/schedule/evaluate", json={"enabled": True, "scheduleDate": future}
    ).json()
    assert evaluated["state"] == "SCHEDULED_PENDING"
    assert evaluated["effectiveEnabled"] is False
    assert evaluated["editable"] is False

    entity = {"id": "v1", "kind": "VIDEO", "enabled": True, "scheduleDate": future}
    disabled = client.post("/composition/schedule/toggle", json={"entity": entity, "enabled": False}).json()
    assert disabled["accepted"] is True
    assert disabled["entity"]["enabled"] is False
    assert disabled["status"]["effectiveEnabled"] is False

    enabled = client.post("/composition/schedule/toggle", json={"entity": entity, "enabled": True}).json()
    assert enabled["accepted"] is False
    assert enabled["reason"] == "SCHEDULE_LOCKED"


def test_malformed_strategy_is_rejected(client):
    response = client.post(
        "/composition/shelves/strategy", json={"config": MANUAL_SHELF, "strategy": "RANKED"}
    )
    assert response.status_code == 422
