"""
부하 형태(stage) 계획 모듈

시나리오 유형과 기준 VU 수로부터 k6 options.stages 에 들어갈
(duration, target) 단계 목록을 계산합니다.
"""
import logging
from typing import List, Optional, Union

from k6_mcp.schemas.generate import PlannedStage, ScenarioType

logger = logging.getLogger(__name__)


def resolve_scenario_type(scenario_type: Optional[Union[str, ScenarioType]]) -> ScenarioType:
    """알 수 없는 시나리오 유형은 ramping 으로 대체"""
    if isinstance(scenario_type, ScenarioType):
        return scenario_type
    try:
        return ScenarioType(scenario_type)
    except ValueError:
        logger.info(f"Unknown scenario type {scenario_type!r}, falling back to ramping")
        return ScenarioType.RAMPING


def plan_stages(
    scenario_type: Optional[Union[str, ScenarioType]],
    vus: int,
    duration: str
) -> List[PlannedStage]:
    """
    시나리오 유형별 stage 목록 생성

    Args:
        scenario_type: ramping, spike, stress, soak (그 외 값은 ramping)
        vus: 기준 가상 사용자 수
        duration: 유지 구간 길이 (ramping, soak 에서만 사용)

    Returns:
        List[PlannedStage]: 마지막 stage 의 target 은 항상 0
    """
    resolved = resolve_scenario_type(scenario_type)

    if resolved == ScenarioType.SPIKE:
        return _spike_stages(vus)
    if resolved == ScenarioType.STRESS:
        return _stress_stages(vus)
    if resolved == ScenarioType.SOAK:
        return _soak_stages(vus, duration)
    return _ramping_stages(vus, duration)


def _ramping_stages(vus: int, duration: str) -> List[PlannedStage]:
    # vus 가 1 이면 절반이 0 이 되므로 첫 stage 는 vus 그대로 사용
    half = vus // 2 if vus > 1 else vus
    return [
        PlannedStage(duration="30s", target=half, note="Ramp to 50%"),
        PlannedStage(duration="30s", target=vus, note="Ramp to 100%"),
        PlannedStage(duration=duration, target=vus, note="Stay at target"),
        PlannedStage(duration="30s", target=0, note="Ramp down"),
    ]


def _spike_stages(vus: int) -> List[PlannedStage]:
    # duration 인자는 사용하지 않음 (고정 구간만 사용)
    return [
        PlannedStage(duration="30s", target=vus, note="Ramp up"),
        PlannedStage(duration="1m", target=vus, note="Stay at normal load"),
        PlannedStage(duration="10s", target=vus * 3, note="Spike to 3x load"),
        PlannedStage(duration="1m", target=vus * 3, note="Stay at spike"),
        PlannedStage(duration="10s", target=vus, note="Back to normal"),
        PlannedStage(duration="1m", target=vus, note="Stay at normal"),
        PlannedStage(duration="30s", target=0, note="Ramp down"),
    ]


def _stress_stages(vus: int) -> List[PlannedStage]:
    # duration 인자는 사용하지 않음 (고정 구간만 사용)
    return [
        PlannedStage(duration="1m", target=vus, note="Ramp up to normal"),
        PlannedStage(duration="2m", target=vus, note="Stay at normal"),
        PlannedStage(duration="1m", target=vus * 2, note="Ramp to 2x"),
        PlannedStage(duration="2m", target=vus * 2, note="Stay at 2x"),
        PlannedStage(duration="1m", target=vus * 3, note="Ramp to 3x"),
        PlannedStage(duration="2m", target=vus * 3, note="Stay at 3x"),
        PlannedStage(duration="1m", target=0, note="Ramp down"),
    ]


def _soak_stages(vus: int, duration: str) -> List[PlannedStage]:
    return [
        PlannedStage(duration="2m", target=vus, note="Ramp up"),
        PlannedStage(duration=duration, target=vus, note="Stay at target (long duration)"),
        PlannedStage(duration="2m", target=0, note="Ramp down"),
    ]
