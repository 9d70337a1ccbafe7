"""
k6 테스트 출력 조회 모듈

App Server 가 보관 중인 표준 출력/에러 출력을 가져와 읽기 쉬운 리포트로 정리합니다.
긴 출력은 마지막 부분(가장 최근 출력)만 남기도록 잘라냅니다.
"""
import json
import logging
from typing import Any, Dict, Optional, Tuple

from k6_mcp.schemas.testing import OutputRequest
from k6_mcp.services.execution.app_server_client import API_PREFIX, AppServerClient

logger = logging.getLogger(__name__)

MAX_OUTPUT_LENGTH = 10000
TRUNCATION_MARKER = "... (output truncated) ...\n"
HEAVY_RULE = "=" * 60
LIGHT_RULE = "-" * 40


async def get_test_output(
    client: AppServerClient,
    request: OutputRequest,
    max_output_length: int = MAX_OUTPUT_LENGTH
) -> Dict[str, Any]:
    """
    테스트 출력 조회

    follow 는 App Server 에 그대로 전달만 하며 실시간 스트림은 제공하지 않음
    """
    await client.ensure_available()

    logger.info(f"Fetching output for test {request.test_id}")
    response = await client.get(f"{API_PREFIX}/{request.test_id}/output", params=request.query_params())
    client.raise_for_status(response, test_id=request.test_id)
    data = client.parse_json(response)

    return format_output(data, request.test_id, max_output_length)


def truncate_output(output: str, max_length: int = MAX_OUTPUT_LENGTH) -> Tuple[str, bool]:
    """최대 길이를 넘으면 뒤쪽 max_length 글자만 유지"""
    if len(output) > max_length:
        return output[-max_length:], True
    return output, False


def format_output(data: Dict[str, Any], test_id: str, max_output_length: int = MAX_OUTPUT_LENGTH) -> Dict[str, Any]:
    output = data.get("output") or ""
    error_output = data.get("errorOutput") or ""
    status = data.get("status")
    metrics = data.get("metrics")
    summary = data.get("summary")

    visible_output, truncated = truncate_output(output, max_output_length)
    formatted_summary = format_summary(summary) if summary and status == "completed" else None

    return {
        "testId": test_id,
        "status": status,
        "quickMetrics": quick_metrics(metrics),
        "output": visible_output,
        "outputTruncated": truncated,
        "errorOutput": error_output if error_output.strip() else None,
        "summary": formatted_summary,
        "report": build_report(
            test_id, status, metrics, visible_output, truncated, error_output, formatted_summary
        ),
    }


def quick_metrics(metrics: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not metrics:
        return None
    return {
        "requests": metrics.get("http_reqs"),
        "avgResponseTimeMs": metrics.get("http_req_duration"),
        "errorRatePercent": metrics.get("http_req_failed"),
    }


def build_report(
    test_id: str,
    status: Optional[str],
    metrics: Optional[Dict[str, Any]],
    output: str,
    truncated: bool,
    error_output: str,
    formatted_summary: Optional[str]
) -> str:
    """사람이 읽는 텍스트 리포트"""
    lines = [HEAVY_RULE, f"Test ID: {test_id}", f"Status: {status}", HEAVY_RULE, ""]

    if metrics:
        lines.extend(["Quick Metrics:", LIGHT_RULE])
        if metrics.get("http_reqs"):
            lines.append(f"* Requests: {metrics['http_reqs']}")
        if metrics.get("http_req_duration"):
            lines.append(f"* Avg Response Time: {metrics['http_req_duration']}ms")
        if metrics.get("http_req_failed"):
            lines.append(f"* Error Rate: {metrics['http_req_failed']}%")
        lines.append("")

    text = "\n".join(lines) + "\n"

    if output:
        text += "Standard Output:\n" + LIGHT_RULE + "\n"
        if truncated:
            text += TRUNCATION_MARKER
        text += output
        if not output.endswith("\n"):
            text += "\n"

    if error_output.strip():
        text += "\nError Output:\n" + LIGHT_RULE + "\n" + error_output
        if not error_output.endswith("\n"):
            text += "\n"

    if formatted_summary:
        text += "\nTest Summary:\n" + LIGHT_RULE + "\n" + formatted_summary

    return text + "\n" + HEAVY_RULE


def format_summary(summary: Any) -> str:
    if isinstance(summary, str):
        return summary
    if not isinstance(summary, dict):
        return json.dumps(summary, indent=2)

    formatted = ""
    checks = summary.get("checks")
    if checks:
        formatted += f"* Checks Passed: {checks.get('passed')}/{checks.get('total')}\n"

    thresholds = summary.get("thresholds")
    if thresholds:
        formatted += f"* Thresholds: {'All passed' if thresholds.get('passed') else 'Some failed'}\n"

    for key, label in (("duration", "Duration"), ("data_received", "Data Received"), ("data_sent", "Data Sent")):
        if summary.get(key):
            formatted += f"* {label}: {summary[key]}\n"

    return formatted or json.dumps(summary, indent=2)
