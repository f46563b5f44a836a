import pytest

from src.planvisit.config import Settings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("41.185,-8.706,41.19,-8.70", (41.185, -8.706, 41.19, -8.70)),
        ("[41.185, -8.706]", (41.185, -8.706)),
        ("", ()),
    ],
)
def test_points_to_visit_from_environment(monkeypatch, raw, expected):
    monkeypatch.setenv("PLANVISIT_POINTS_TO_VISIT", raw)

    assert Settings().points_to_visit == expected


def test_points_to_visit_from_list():
    assert Settings(points_to_visit=[1, 2]).points_to_visit == (1.0, 2.0)


def test_defaults():
    config = Settings(_env_file=None)

    assert config.plan_id == "PlanVisit"
    assert config.cruise_speed_mps == pytest.approx(1.6)
    assert config.z_units == "depth"
    assert config.range_model == "wgs84"
    assert config.poll_interval_seconds == 1.0
    assert config.rearm_on_success is False
