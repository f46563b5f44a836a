import pytest

from src.planvisit.models.domain import Waypoint
from src.planvisit.services.planning.assembler import assemble_plan
from src.planvisit.services.planning.models import MANEUVER_IS_DONE
from src.planvisit.services.waypoints import WaypointSet


def _assert_linear_chain(plan):
    ids = [maneuver.maneuver_id for maneuver in plan.maneuvers]
    assert len(set(ids)) == len(ids)
    assert len(plan.transitions) == len(plan.maneuvers) - 1
    assert plan.start_man_id == ids[0]
    for position, transition in enumerate(plan.transitions):
        assert transition.source_man == ids[position]
        assert transition.dest_man == ids[position + 1]
        assert transition.conditions == MANEUVER_IS_DONE


def test_plan_follows_route_then_returns_to_depot():
    depot = Waypoint.from_degrees(0.0, 0.0)
    waypoints = WaypointSet.from_degrees([1.0, 0.0, 0.0, 1.0, 1.0, 1.0])

    plan = assemble_plan((3, 1, 2), waypoints, depot)

    assert [m.maneuver_id for m in plan.maneuvers] == ["Goto0", "Goto1", "Goto2", "Goto3"]
    targets = [(m.data.latitude, m.data.longitude) for m in plan.maneuvers]
    assert targets == [
        (waypoints[2].latitude, waypoints[2].longitude),
        (waypoints[0].latitude, waypoints[0].longitude),
        (waypoints[1].latitude, waypoints[1].longitude),
        (depot.latitude, depot.longitude),
    ]
    _assert_linear_chain(plan)


def test_plan_uses_configured_defaults():
    depot = Waypoint.from_degrees(41.185, -8.706)
    waypoints = WaypointSet.from_degrees([41.19, -8.70])

    plan = assemble_plan((1,), waypoints, depot)

    assert plan.plan_id == "PlanVisit"
    for maneuver in plan.maneuvers:
        assert maneuver.data.speed == pytest.approx(1.6)
        assert maneuver.data.speed_units == "meters_ps"
        assert maneuver.data.z == 0.0
        assert maneuver.data.z_units == "depth"


def test_plan_overrides():
    depot = Waypoint.from_degrees(41.185, -8.706)
    waypoints = WaypointSet.from_degrees([41.19, -8.70])

    plan = assemble_plan((1,), waypoints, depot, plan_id="Survey", speed=2.0, z=5.0, z_units="altitude")

    assert plan.plan_id == "Survey"
    assert plan.maneuvers[0].data.speed == 2.0
    assert plan.maneuvers[1].data.z == 5.0
    assert plan.maneuvers[1].data.z_units == "altitude"


def test_empty_route_only_returns_to_depot():
    depot = Waypoint.from_degrees(41.185, -8.706)

    plan = assemble_plan((), WaypointSet.from_degrees([]), depot)

    assert len(plan.maneuvers) == 1
    assert plan.transitions == []
    assert plan.start_man_id == "Goto0"
    assert plan.maneuvers[0].data.latitude == depot.latitude


@pytest.mark.parametrize("count", [1, 2, 5])
def test_directive_and_transition_counts(count):
    depot = Waypoint.from_degrees(0.0, 0.0)
    values = []
    for index in range(count):
        values.extend([0.1 * (index + 1), 0.0])
    waypoints = WaypointSet.from_degrees(values)

    plan = assemble_plan(tuple(range(1, count + 1)), waypoints, depot)

    assert len(plan.maneuvers) == count + 1
    assert len(plan.transitions) == count
    _assert_linear_chain(plan)


def test_route_index_outside_waypoints_raises():
    with pytest.raises(IndexError):
        assemble_plan((0,), WaypointSet.from_degrees([1.0, 1.0]), Waypoint(0.0, 0.0))
