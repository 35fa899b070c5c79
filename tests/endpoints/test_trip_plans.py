"""
Unit tests for trip plans endpoint.
"""

import logging

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def legs(make_route):
    return [
        make_route(
            "leg1", fare=25, time=40, distance=6.5, transfers=1, origin="A", destination="B"
        ),
        make_route(
            "leg2", fare=15, time=20, distance=0.8, transfers=0, origin="B", destination="C"
        ),
    ]


def create_plan(client: TestClient, route) -> dict:
    response = client.post("/api/v1/trip-plans", json={"route": route.model_dump(mode="json")})
    assert response.status_code == 201
    return response.json()["trip_plan"]


def test_create_trip_plan(client: TestClient, legs):
    response = client.post("/api/v1/trip-plans", json={"route": legs[0].model_dump(mode="json")})

    assert response.status_code == 201
    data = response.json()
    plan = data["trip_plan"]

    assert plan["id"]
    assert [route["id"] for route in plan["routes"]] == ["leg1"]
    assert [place["name"] for place in plan["destinations"]] == ["Cubao", "Quiapo"]
    assert plan["total_fare"] == 25

    assert data["summary"] == {
        "fare": "₱25.00",
        "time": "40 min",
        "time_range": "34-46 min",
        "distance": "6.5 km",
        "stops": 1,
    }


def test_add_route(client: TestClient, legs):
    plan = create_plan(client, legs[0])

    response = client.post(
        "/api/v1/trip-plans/routes",
        json={"trip_plan": plan, "route": legs[1].model_dump(mode="json")},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["trip_plan"]["id"] == plan["id"]
    assert [route["id"] for route in data["trip_plan"]["routes"]] == ["leg1", "leg2"]
    assert [place["name"] for place in data["trip_plan"]["destinations"]] == [
        "Cubao",
        "Quiapo",
        "Makati",
    ]
    assert data["trip_plan"]["total_fare"] == 40
    assert data["summary"]["time"] == "1 hr"
    assert data["summary"]["distance"] == "7.3 km"
    assert data["summary"]["stops"] == 2


def test_remove_route(client: TestClient, legs):
    plan = create_plan(client, legs[0])
    plan = client.post(
        "/api/v1/trip-plans/routes",
        json={"trip_plan": plan, "route": legs[1].model_dump(mode="json")},
    ).json()["trip_plan"]

    response = client.post(
        "/api/v1/trip-plans/routes/remove", json={"trip_plan": plan, "route_id": "leg1"}
    )

    data = response.json()
    assert [route["id"] for route in data["trip_plan"]["routes"]] == ["leg2"]
    assert [place["name"] for place in data["trip_plan"]["destinations"]] == ["Cubao", "Makati"]
    assert data["trip_plan"]["total_fare"] == 15
    assert data["summary"]["distance"] == "800 m"


def test_remove_unknown_route(client: TestClient, legs):
    plan = create_plan(client, legs[0])

    response = client.post(
        "/api/v1/trip-plans/routes/remove", json={"trip_plan": plan, "route_id": "missing"}
    )

    assert response.status_code == 200
    assert response.json()["trip_plan"] == plan


def test_remove_only_route(client: TestClient, legs):
    plan = create_plan(client, legs[0])

    response = client.post(
        "/api/v1/trip-plans/routes/remove", json={"trip_plan": plan, "route_id": "leg1"}
    )

    data = response.json()
    assert data["trip_plan"]["routes"] == []
    assert data["trip_plan"]["total_fare"] == 0
    assert data["summary"]["stops"] == 0
    assert data["summary"]["time"] == "0 min"


def test_update_destinations(client: TestClient, legs, places):
    plan = create_plan(client, legs[0])
    destinations = [places["A"].model_dump(mode="json"), places["D"].model_dump(mode="json")]

    response = client.put(
        "/api/v1/trip-plans/destinations",
        json={"trip_plan": plan, "destinations": destinations},
    )

    data = response.json()
    assert [place["name"] for place in data["trip_plan"]["destinations"]] == ["Cubao", "Pasay"]
    assert data["trip_plan"]["routes"] == plan["routes"]
    assert data["trip_plan"]["total_fare"] == plan["total_fare"]


def test_create_trip_plan_requires_route(client: TestClient):
    response = client.post("/api/v1/trip-plans", json={})

    assert response.status_code == 422


def test_trip_plan_requests_are_logged(client: TestClient, legs, caplog):
    with caplog.at_level(logging.INFO, logger="app.api.v1.endpoints.trip_plans"):
        plan = create_plan(client, legs[0])
        client.post(
            "/api/v1/trip-plans/routes/remove", json={"trip_plan": plan, "route_id": "leg1"}
        )

    messages = [record.getMessage() for record in caplog.records]
    assert f"Trip plan created: id={plan['id']}, route=leg1" in messages
    assert f"Remove route request: trip_plan={plan['id']}, route=leg1" in messages
