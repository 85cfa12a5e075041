# tests/test_handlers.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskstats.app import create_app
from taskstats.handlers import api_handler, get_registered_handlers
from taskstats.handlers import stats as stats_handlers


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture()
def use_manager(monkeypatch):
    def _use(manager):
        monkeypatch.setattr(stats_handlers, "get_stats_manager", lambda: manager)

    return _use


def test_stats_routes_registered():
    paths = {info["path"] for info in get_registered_handlers().values()}
    assert {
        "/stats/overview",
        "/stats/quadrant",
        "/stats/time-series",
        "/stats/year-heatmap",
        "/stats/categories",
        "/stats/projects",
        "/stats/project-tasks",
        "/stats/duration-ranking",
    } <= paths


def test_overview_envelope(client, use_manager, manager, seeded):
    use_manager(manager)

    response = client.post("/api/stats/overview", json={"userId": 1, "period": "week"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["data"]["total"] == 5
    assert payload["data"]["inProgress"] == 1
    assert payload["data"]["completionRate"] == pytest.approx(20.0)
    assert "timestamp" in payload


def test_project_stats_fraction(client, use_manager, manager, seeded):
    use_manager(manager)

    payload = client.post("/api/stats/projects", json={"userId": 1}).json()
    assert payload["data"]["completionRate"] == pytest.approx(0.25)


def test_time_series_accepts_target_date(client, use_manager, manager, seeded):
    use_manager(manager)

    payload = client.post(
        "/api/stats/time-series",
        json={"userId": 1, "period": "week", "targetDate": "2024-06-12"},
    ).json()

    assert payload["success"] is True
    assert [point["date"] for point in payload["data"]][0] == "2024-06-10"
    assert len(payload["data"]) == 7


def test_year_heatmap(client, use_manager, manager, seeded):
    use_manager(manager)

    payload = client.post("/api/stats/year-heatmap", json={"userId": 1, "year": 2024}).json()
    assert len(payload["data"]) == 366
    assert "subtaskCreated" in payload["data"][0]


def test_duration_ranking_limit(client, use_manager, manager, seeded):
    use_manager(manager)

    payload = client.post(
        "/api/stats/duration-ranking", json={"userId": 1, "year": 2024, "limit": 1}
    ).json()

    assert [item["taskTitle"] for item in payload["data"]] == ["Pay bills"]
    assert payload["data"][0]["durationDays"] == 23
    assert payload["data"][0]["startDate"].startswith("2024-05-20")


def test_missing_user_id_is_rejected(client):
    response = client.post("/api/stats/overview", json={"period": "month"})
    assert response.status_code == 422


def test_store_failure_envelopes(client, use_manager, failing_manager):
    use_manager(failing_manager)

    overview = client.post("/api/stats/overview", json={"userId": 1}).json()
    assert overview["success"] is False
    assert overview["message"].startswith("Failed to get task statistics")

    series = client.post("/api/stats/time-series", json={"userId": 1}).json()
    assert series == {"success": True, "data": [], "timestamp": series["timestamp"]}

    heatmap = client.post("/api/stats/year-heatmap", json={"userId": 1}).json()
    assert heatmap["data"] == []


def test_root_endpoint(client):
    assert client.get("/").json()["service"] == "taskstats API"


def test_registry_keeps_route_info_only():
    info = get_registered_handlers()["get_task_overview"]
    assert set(info) == {"func", "method", "path", "tags", "summary", "description"}
    assert info["method"] == "POST"


def test_unsupported_method_is_refused():
    with pytest.raises(ValueError, match="Unsupported HTTP method"):
        api_handler(method="TRACE")


# --- Lenient request values -------------------------------------------------

@pytest.mark.parametrize("year", ["abc", "", -5, None])
def test_heatmap_malformed_year_uses_current_year(client, use_manager, manager, seeded, year):
    use_manager(manager)

    response = client.post("/api/stats/year-heatmap", json={"userId": 1, "year": year})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 366
    assert data[0]["date"] == "2024-01-01"


def test_duration_ranking_malformed_year_uses_current_year(client, use_manager, manager, seeded):
    use_manager(manager)

    response = client.post("/api/stats/duration-ranking", json={"userId": 1, "year": "abc"})

    assert response.status_code == 200
    assert len(response.json()["data"]) == 4


def test_duration_ranking_numeric_string_year(client, use_manager, manager, seeded):
    use_manager(manager)

    payload = client.post(
        "/api/stats/duration-ranking", json={"userId": 1, "year": "2023"}
    ).json()
    assert payload == {"success": True, "data": [], "timestamp": payload["timestamp"]}


def test_time_series_accepts_datetime_target(client, use_manager, manager, seeded):
    use_manager(manager)

    response = client.post(
        "/api/stats/time-series",
        json={"userId": 1, "period": "week", "targetDate": "2024-06-12T10:00:00"},
    )

    assert response.status_code == 200
    dates = [point["date"] for point in response.json()["data"]]
    assert dates[0] == "2024-06-10"
    assert dates[-1] == "2024-06-16"
