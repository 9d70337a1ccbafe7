"""
k6 텍스트 리포트 파싱 모듈

k6 가 콘솔에 출력하는 요약 리포트의 각 줄을 패턴 매칭하여 주요 메트릭을 추출합니다.
"""
import re
import logging

from k6_mcp.schemas.analysis import ParsedMetrics

logger = logging.getLogger(__name__)

DURATION_PATTERN = re.compile(r'avg=([0-9.]+)ms.*p\(95\)=([0-9.]+)ms.*p\(99\)=([0-9.]+)ms')
RATE_PATTERN = re.compile(r'([0-9.]+)/s')
PERCENT_PATTERN = re.compile(r'([0-9.]+)%')
AVG_PATTERN = re.compile(r'avg=([0-9.]+)ms')


def _to_float(value: str):
    try:
        return float(value)
    except ValueError:
        return None


def parse_metrics_from_output(output: str) -> ParsedMetrics:
    """
    k6 출력에서 메트릭 추출

    추출 대상:
        - http_req_duration: avg, p(95), p(99) 응답시간 (ms)
        - http_reqs: 초당 요청 수
        - http_req_failed: 에러율 (%)
        - http_req_waiting / http_req_connecting: 평균 대기/연결 시간 (ms)
    """
    values = {}

    for line in output.splitlines():
        if 'http_req_duration' in line:
            match = DURATION_PATTERN.search(line)
            if match:
                values['avg_response_time'] = _to_float(match.group(1))
                values['p95_response_time'] = _to_float(match.group(2))
                values['p99_response_time'] = _to_float(match.group(3))

        if 'http_reqs' in line:
            match = RATE_PATTERN.search(line)
            if match:
                values['requests_per_second'] = _to_float(match.group(1))

        if 'http_req_failed' in line:
            match = PERCENT_PATTERN.search(line)
            if match:
                values['error_rate'] = _to_float(match.group(1))

        if 'http_req_waiting' in line:
            match = AVG_PATTERN.search(line)
            if match:
                values['avg_wait_time'] = _to_float(match.group(1))

        if 'http_req_connecting' in line:
            match = AVG_PATTERN.search(line)
            if match:
                values['avg_connect_time'] = _to_float(match.group(1))

    logger.info(f"Parsed {len([v for v in values.values() if v is not None])} metrics from k6 output")
    return ParsedMetrics(**values)
