from typing import List, Optional, Tuple

from k6_mcp.schemas.analysis import AnalysisIssue, AnalysisSummary, BasicAnalysis, ParsedMetrics

UNKNOWN = "unknown"

# (상한값, 등급) - 값이 상한값 미만이면 해당 등급
PERFORMANCE_BANDS: List[Tuple[float, str]] = [(500, "excellent"), (1000, "good"), (2000, "fair")]
RELIABILITY_BANDS: List[Tuple[float, str]] = [(0.1, "excellent"), (1, "good"), (5, "fair")]
# (하한값, 등급) - 값이 하한값 초과면 해당 등급
THROUGHPUT_BANDS: List[Tuple[float, str]] = [(100, "high"), (50, "medium")]

P95_THRESHOLD_MS = 1000
ERROR_RATE_THRESHOLD_PERCENT = 1
CONNECT_TIME_THRESHOLD_MS = 100


def classify_below(value: Optional[float], bands: List[Tuple[float, str]], fallback: str) -> str:
    if value is None:
        return UNKNOWN
    for limit, label in bands:
        if value < limit:
            return label
    return fallback


def classify_above(value: Optional[float], bands: List[Tuple[float, str]], fallback: str) -> str:
    if value is None:
        return UNKNOWN
    for limit, label in bands:
        if value > limit:
            return label
    return fallback


def classify_performance(p95_response_time: Optional[float]) -> str:
    return classify_below(p95_response_time, PERFORMANCE_BANDS, "poor")


def classify_reliability(error_rate: Optional[float]) -> str:
    return classify_below(error_rate, RELIABILITY_BANDS, "poor")


def classify_throughput(requests_per_second: Optional[float]) -> str:
    return classify_above(requests_per_second, THROUGHPUT_BANDS, "low")


def perform_basic_analysis(metrics: ParsedMetrics) -> BasicAnalysis:
    """App Server 분석기 없이 고정 임계값으로 이슈와 등급 산출"""
    issues: List[AnalysisIssue] = []
    recommendations: List[str] = []

    if metrics.p95_response_time is not None and metrics.p95_response_time > P95_THRESHOLD_MS:
        issues.append(AnalysisIssue(
            severity="high",
            metric="p95ResponseTime",
            value=metrics.p95_response_time,
            threshold=P95_THRESHOLD_MS,
            description="P95 response time exceeds 1 second",
        ))
        recommendations.append("Optimize slow endpoints or database queries")

    if metrics.error_rate is not None and metrics.error_rate > ERROR_RATE_THRESHOLD_PERCENT:
        issues.append(AnalysisIssue(
            severity="critical",
            metric="errorRate",
            value=metrics.error_rate,
            threshold=ERROR_RATE_THRESHOLD_PERCENT,
            description="Error rate exceeds 1%",
        ))
        recommendations.append("Investigate and fix failing requests")

    if metrics.avg_connect_time is not None and metrics.avg_connect_time > CONNECT_TIME_THRESHOLD_MS:
        issues.append(AnalysisIssue(
            severity="medium",
            metric="avgConnectTime",
            value=metrics.avg_connect_time,
            threshold=CONNECT_TIME_THRESHOLD_MS,
            description="Connection time is high",
        ))
        recommendations.append("Consider connection pooling or CDN")

    summary = AnalysisSummary(
        performance=classify_performance(metrics.p95_response_time),
        reliability=classify_reliability(metrics.error_rate),
        throughput=classify_throughput(metrics.requests_per_second),
    )
    return BasicAnalysis(issues=issues, recommendations=recommendations, summary=summary)
