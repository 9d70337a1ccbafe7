import pytest

from k6_mcp.schemas.generate import ScenarioType
from k6_mcp.services.generation.stage_planner import plan_stages, resolve_scenario_type


class TestPlanStages:
    """시나리오 유형별 stage 계획"""

    @pytest.mark.parametrize("scenario_type", [kind.value for kind in ScenarioType])
    def test_every_topology_starts_above_zero_and_ends_at_zero(self, scenario_type):
        stages = plan_stages(scenario_type, 10, "5m")

        assert stages
        assert stages[0].target > 0
        assert stages[-1].target == 0

    def test_ramping_stages(self):
        stages = plan_stages("ramping", 10, "3m")

        assert [(s.duration, s.target) for s in stages] == [
            ("30s", 5), ("30s", 10), ("3m", 10), ("30s", 0),
        ]

    def test_ramping_with_single_vu_starts_at_one(self):
        stages = plan_stages("ramping", 1, "1m")

        assert stages[0].target == 1

    def test_spike_reaches_three_times_base_load(self):
        stages = plan_stages("spike", 20, "1m")

        assert max(s.target for s in stages) == 60
        assert [s.target for s in stages] == [20, 20, 60, 60, 20, 20, 0]

    def test_spike_and_stress_ignore_duration(self):
        assert plan_stages("spike", 10, "1m") == plan_stages("spike", 10, "1h")
        assert plan_stages("stress", 10, "1m") == plan_stages("stress", 10, "1h")

    def test_stress_ramps_monotonically_before_ramp_down(self):
        targets = [s.target for s in plan_stages("stress", 10, "1m")]

        assert targets == [10, 10, 20, 20, 30, 30, 0]
        assert targets[:-1] == sorted(targets[:-1])

    def test_soak_holds_for_requested_duration(self):
        stages = plan_stages("soak", 50, "2h")

        assert [(s.duration, s.target) for s in stages] == [("2m", 50), ("2h", 50), ("2m", 0)]

    def test_unknown_scenario_falls_back_to_ramping(self):
        assert plan_stages("tsunami", 10, "1m") == plan_stages("ramping", 10, "1m")
        assert plan_stages(None, 10, "1m") == plan_stages("ramping", 10, "1m")


class TestResolveScenarioType:

    def test_known_value(self):
        assert resolve_scenario_type("soak") == ScenarioType.SOAK

    def test_enum_is_returned_as_is(self):
        assert resolve_scenario_type(ScenarioType.SPIKE) is ScenarioType.SPIKE

    def test_unknown_value(self):
        assert resolve_scenario_type("unknown") == ScenarioType.RAMPING
