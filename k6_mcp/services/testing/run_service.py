import logging
from typing import Any, Dict

from k6_mcp.schemas.testing import RunTestRequest
from k6_mcp.services.execution.app_server_client import API_PREFIX, AppServerClient

logger = logging.getLogger(__name__)


async def start_test(client: AppServerClient, request: RunTestRequest) -> Dict[str, Any]:
    """
    App Server 에 k6 테스트 실행 요청

    Returns:
        Dict: 테스트 ID, 실행 설정, 상태/결과/출력/스트림 조회 URL
    """
    await client.ensure_available()

    logger.info(f"Starting K6 test via App Server: {request.script}")
    response = await client.post(f"{API_PREFIX}/run", json=request.model_dump())
    client.raise_for_status(response)
    data = client.parse_json(response)

    test_id = data.get("testId")
    logger.info(f"Test started: {test_id}")

    return {
        "test": {
            "id": test_id,
            "status": "running",
            "script": request.script,
            "configuration": {
                "vus": request.vus,
                "duration": request.duration,
                "env": request.env,
            },
        },
        "endpoints": {
            name: _absolute_url(client, data.get(key))
            for name, key in (
                ("status", "statusUrl"),
                ("results", "resultsUrl"),
                ("output", "outputUrl"),
                ("stream", "streamUrl"),
            )
        },
    }


def _absolute_url(client: AppServerClient, path) -> Any:
    if not path:
        return None
    if str(path).startswith(("http://", "https://")):
        return path
    return f"{client.base_url}{path}"
