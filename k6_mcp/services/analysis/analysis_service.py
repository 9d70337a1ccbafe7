"""
k6 결과 분석 서비스

1. 테스트 ID: App Server 에서 결과를 받아 App Server 분석기로 분석
2. 결과 파일: 텍스트 리포트를 파싱한 뒤 App Server 분석기, 사용할 수 없으면 로컬 기본 분석
"""
import asyncio
import logging
from typing import Any, Dict, Optional

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.response.code import FailureCode
from k6_mcp.services.analysis.basic_analyzer import perform_basic_analysis
from k6_mcp.services.analysis.result_parser import parse_metrics_from_output
from k6_mcp.services.execution.app_server_client import API_PREFIX, APP_SERVER_START_HINT, AppServerClient
from k6_mcp.utils.file_writer import FileWriter

logger = logging.getLogger(__name__)

ANALYSIS_FIELDS = ("metrics", "issues", "recommendations", "summary")


async def analyze_results(
    client: AppServerClient,
    test_id: Optional[str] = None,
    result_file: Optional[str] = None
) -> Dict[str, Any]:
    """
    테스트 결과 분석

    test_id 와 result_file 이 모두 있으면 App Server 가 사용 가능할 때 test_id 를 우선함

    Raises:
        ApiException: 인자 누락(VALIDATION_ERROR), App Server 미사용(SERVICE_UNAVAILABLE),
            테스트 없음(NOT_FOUND), 파일 읽기 실패(IO_FAILURE), App Server 오류(UPSTREAM_ERROR)
    """
    if not test_id and not result_file:
        raise ApiException(
            FailureCode.VALIDATION_ERROR,
            "Either testId or resultFile must be provided"
        )

    server_available = await client.is_available()

    if test_id and server_available:
        return await analyze_from_test_id(client, test_id)
    if result_file:
        return await analyze_from_file(client, result_file, server_available)

    raise ApiException(
        FailureCode.SERVICE_UNAVAILABLE,
        f"K6 App Server is not available at {client.base_url}; "
        "analyzing by testId requires it (pass resultFile for offline analysis)",
        hint=APP_SERVER_START_HINT
    )


async def analyze_from_test_id(client: AppServerClient, test_id: str) -> Dict[str, Any]:
    logger.info(f"Fetching test results from App Server: {test_id}")

    results_response = await client.get(f"{API_PREFIX}/{test_id}/results")
    client.raise_for_status(results_response, test_id=test_id)
    results = client.parse_json(results_response)

    # 202: 아직 실행 중
    if results_response.status_code == 202:
        return {
            "testId": test_id,
            "status": "running",
            "message": results.get("message"),
        }

    analysis = await request_analysis(client, {"testId": test_id, "metrics": results.get("metrics")})
    return {
        "testId": test_id,
        "status": results.get("status"),
        **analysis,
    }


async def analyze_from_file(client: AppServerClient, result_file: str, server_available: bool) -> Dict[str, Any]:
    try:
        output = await asyncio.to_thread(FileWriter.read_from_path, result_file)
    except (OSError, UnicodeDecodeError) as e:
        raise ApiException(FailureCode.IO_FAILURE, f"Could not read result file {result_file}: {e}")

    metrics = parse_metrics_from_output(output)

    if server_available:
        analysis = await request_analysis(client, {"metrics": metrics.to_payload()})
        return {
            "source": "file",
            "file": result_file,
            **analysis,
        }

    # App Server 없이 기본 분석
    logger.info(f"K6 App Server unavailable, running basic analysis for {result_file}")
    basic = perform_basic_analysis(metrics)
    return {
        "source": "file",
        "file": result_file,
        "metrics": metrics.to_payload(),
        **basic.model_dump(),
        "note": "Basic analysis without App Server",
    }


async def request_analysis(client: AppServerClient, body: Dict[str, Any]) -> Dict[str, Any]:
    """App Server 분석기 호출 (POST /api/tests/analyze)"""
    response = await client.post(f"{API_PREFIX}/analyze", json=body)
    client.raise_for_status(response, test_id=body.get("testId"))
    data = client.parse_json(response)
    return {field: data.get(field) for field in ANALYSIS_FIELDS}
