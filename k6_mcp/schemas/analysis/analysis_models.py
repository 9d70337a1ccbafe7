from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ParsedMetrics(BaseModel):
    """k6 텍스트 리포트에서 추출한 메트릭"""
    avg_response_time: Optional[float] = Field(None, alias="avgResponseTime")
    p95_response_time: Optional[float] = Field(None, alias="p95ResponseTime")
    p99_response_time: Optional[float] = Field(None, alias="p99ResponseTime")
    requests_per_second: Optional[float] = Field(None, alias="requestsPerSecond")
    error_rate: Optional[float] = Field(None, alias="errorRate")         # 단위: %
    avg_wait_time: Optional[float] = Field(None, alias="avgWaitTime")
    avg_connect_time: Optional[float] = Field(None, alias="avgConnectTime")

    model_config = {
        "populate_by_name": True
    }

    def to_payload(self) -> Dict[str, Any]:
        """추출된 값만 camelCase 키로 반환"""
        return self.model_dump(by_alias=True, exclude_none=True)


class AnalysisIssue(BaseModel):
    """임계값을 넘은 메트릭"""
    severity: str          # "medium", "high", "critical"
    metric: str
    value: float
    threshold: float
    description: str


class AnalysisSummary(BaseModel):
    """성능 등급 요약"""
    performance: str       # excellent / good / fair / poor / unknown
    reliability: str       # excellent / good / fair / poor / unknown
    throughput: str        # high / medium / low / unknown


class BasicAnalysis(BaseModel):
    """App Server 없이 수행한 기본 분석 결과"""
    issues: List[AnalysisIssue] = []
    recommendations: List[str] = []
    summary: AnalysisSummary
