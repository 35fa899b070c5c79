"""
Unit tests for the trip planner.
"""

import pytest

from app.services.trip_planner import (
    TripPlanner,
    add_route,
    clear_trip_plan,
    create_trip_plan,
    remove_route,
    update_destinations,
)


@pytest.fixture
def first_leg(make_route):
    return make_route(
        "leg1", fare=25, time=40, distance=6.5, transfers=1, origin="A", destination="B"
    )


@pytest.fixture
def second_leg(make_route):
    return make_route(
        "leg2", fare=15, time=20, distance=3.0, transfers=0, origin="B", destination="C"
    )


@pytest.fixture
def third_leg(make_route):
    return make_route(
        "leg3", fare=30, time=35, distance=8.0, transfers=1, origin="C", destination="D"
    )


def test_create_trip_plan_seeds_destinations(first_leg, places):
    plan = create_trip_plan(first_leg)

    assert plan.routes == [first_leg]
    assert plan.destinations == [places["A"], places["B"]]
    assert plan.total_fare == 25
    assert plan.total_time == 40
    assert plan.total_distance == 6.5
    assert plan.id


def test_create_trip_plan_with_id(first_leg):
    assert create_trip_plan(first_leg, plan_id="trip-1").id == "trip-1"


def test_create_trip_plan_generates_unique_ids(first_leg):
    assert create_trip_plan(first_leg).id != create_trip_plan(first_leg).id


def test_add_route_without_plan_is_noop(first_leg):
    assert add_route(None, first_leg) is None


def test_add_route_appends_leg(first_leg, second_leg, places):
    plan = create_trip_plan(first_leg)

    updated = add_route(plan, second_leg)

    assert [route.id for route in updated.routes] == ["leg1", "leg2"]
    assert updated.destinations == [places["A"], places["B"], places["C"]]
    assert updated.total_fare == 40
    assert updated.total_time == 60
    assert updated.total_distance == pytest.approx(9.5)
    assert updated.id == plan.id


def test_add_route_does_not_modify_input(first_leg, second_leg):
    plan = create_trip_plan(first_leg)

    add_route(plan, second_leg)

    assert len(plan.routes) == 1
    assert len(plan.destinations) == 2
    assert plan.total_fare == 25


def test_destinations_track_routes(first_leg, second_leg, third_leg):
    plan = create_trip_plan(first_leg)
    for leg in (second_leg, third_leg):
        plan = add_route(plan, leg)
        assert len(plan.destinations) == len(plan.routes) + 1

    assert plan.total_fare == sum(route.total_fare for route in plan.routes)
    assert plan.total_time == sum(route.total_time for route in plan.routes)


def test_remove_first_route_keeps_origin(first_leg, second_leg, places):
    plan = add_route(create_trip_plan(first_leg), second_leg)

    updated = remove_route(plan, "leg1")

    assert [route.id for route in updated.routes] == ["leg2"]
    assert updated.destinations == [places["A"], places["C"]]
    assert updated.total_fare == plan.total_fare - first_leg.total_fare
    assert updated.total_time == plan.total_time - first_leg.total_time
    assert updated.total_distance == pytest.approx(plan.total_distance - first_leg.total_distance)


def test_remove_middle_route(first_leg, second_leg, third_leg, places):
    plan = create_trip_plan(first_leg)
    plan = add_route(add_route(plan, second_leg), third_leg)

    updated = remove_route(plan, "leg2")

    assert [route.id for route in updated.routes] == ["leg1", "leg3"]
    assert updated.destinations == [places["A"], places["B"], places["D"]]


def test_remove_last_route(first_leg, second_leg, places):
    plan = add_route(create_trip_plan(first_leg), second_leg)

    updated = remove_route(plan, "leg2")

    assert updated.routes == [first_leg]
    assert updated.destinations == [places["A"], places["B"]]
    assert updated.total_fare == 25


def test_remove_unknown_route_is_noop(first_leg):
    plan = create_trip_plan(first_leg)

    assert remove_route(plan, "missing") == plan
    assert remove_route(None, "leg1") is None


def test_remove_only_route_leaves_active_empty_plan(first_leg, places):
    plan = create_trip_plan(first_leg)

    updated = remove_route(plan, "leg1")

    assert updated is not None
    assert updated.routes == []
    assert updated.destinations == [places["A"]]
    assert updated.total_fare == 0


def test_update_destinations_replaces_only_destinations(first_leg, places):
    plan = create_trip_plan(first_leg)

    updated = update_destinations(plan, [places["A"], places["D"]])

    assert updated.destinations == [places["A"], places["D"]]
    assert updated.routes == plan.routes
    assert updated.total_fare == plan.total_fare
    assert update_destinations(None, [places["A"]]) is None


def test_clear_trip_plan(first_leg):
    assert clear_trip_plan(create_trip_plan(first_leg)) is None


def test_trip_planner_lifecycle(first_leg, second_leg, places):
    planner = TripPlanner()
    assert planner.is_active is False

    planner.add_route(second_leg)
    assert planner.trip_plan is None

    planner = TripPlanner(first_leg)
    planner.add_route(second_leg)
    assert planner.trip_plan.destinations == [places["A"], places["B"], places["C"]]

    planner.remove_route("leg1")
    assert planner.trip_plan.destinations == [places["A"], places["C"]]

    planner.update_destinations([places["A"], places["D"]])
    assert planner.trip_plan.destinations == [places["A"], places["D"]]

    planner.clear()
    assert planner.is_active is False
