from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    """스크립트 생성 소스 유형"""
    BASIC = "basic"
    API = "api"
    HAR = "har"
    OPENAPI = "openapi"


class ScenarioType(str, Enum):
    """부하 형태 유형 (basic 소스 전용)"""
    RAMPING = "ramping"
    SPIKE = "spike"
    STRESS = "stress"
    SOAK = "soak"


class StageConfig(BaseModel):
    duration: str = "10s"
    target: int = 10


class PlannedStage(StageConfig):
    note: str = ""         # 생성 스크립트에 붙는 주석 (예: "Ramp up")


class GenerateOptions(BaseModel):
    """k6_generate 도구의 options 인자"""
    vus: Optional[int] = Field(None, description="Number of virtual users (default: 10)")
    duration: Optional[str] = Field(
        None,
        description="Duration literal such as '30s' or '5m' (default: 2m basic, 1m api, 5m har/openapi)"
    )
    scenarios: Optional[List[str]] = Field(
        None,
        description="Load shapes for the basic template; the first entry is used (ramping, spike, stress, soak)"
    )
    think_time: Optional[float] = Field(None, alias="thinkTime", description="Think time in seconds (default: 1)")
    assertions: Optional[bool] = Field(None, description="Include checks (always emitted by the templates)")
    endpoints: Optional[List[str]] = Field(None, description="Endpoint paths for the api template")

    model_config = {
        "populate_by_name": True
    }


class GenerationRequest(BaseModel):
    """템플릿 엔진 입력 (정규화된 생성 요청)"""
    source_kind: SourceKind
    target: Optional[str] = None           # basic/api: base URL, har/openapi: 입력 파일
    vus: int = 10
    duration: str
    think_time: float = 1
    scenario_type: Optional[str] = ScenarioType.RAMPING.value
    endpoints: Optional[List[str]] = None  # None이면 api 템플릿 기본 경로 사용
    generated_at: str                      # 요청당 한 번만 캡처한 타임스탬프
