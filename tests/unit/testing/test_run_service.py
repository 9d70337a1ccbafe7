import json

import httpx
import pytest

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.response.code import FailureCode
from k6_mcp.schemas.testing import RunTestRequest
from k6_mcp.services.testing.run_service import start_test
from tests.conftest import APP_SERVER_URL, unhealthy


def started(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={
        "testId": "test-1",
        "statusUrl": "/api/tests/test-1/status",
        "resultsUrl": "/api/tests/test-1/results",
        "outputUrl": "/api/tests/test-1/output",
        "streamUrl": "/api/tests/test-1/stream",
    })


class TestStartTest:

    @pytest.mark.asyncio
    async def test_forwards_request_body(self, make_client):
        client = make_client({("POST", "/api/tests/run"): started})
        request = RunTestRequest(script="scripts/load.js", vus=5, duration="1m", env={"BASE_URL": "http://x"})

        result = await start_test(client, request)

        run_request = client.requests[-1]
        assert json.loads(run_request.content) == {
            "script": "scripts/load.js", "vus": 5, "duration": "1m", "env": {"BASE_URL": "http://x"},
        }
        assert result["test"]["id"] == "test-1"
        assert result["test"]["status"] == "running"
        assert result["test"]["configuration"]["vus"] == 5

    @pytest.mark.asyncio
    async def test_endpoints_are_absolute(self, make_client):
        client = make_client({("POST", "/api/tests/run"): started})

        result = await start_test(client, RunTestRequest(script="load.js"))

        assert result["endpoints"]["status"] == f"{APP_SERVER_URL}/api/tests/test-1/status"
        assert result["endpoints"]["stream"] == f"{APP_SERVER_URL}/api/tests/test-1/stream"

    @pytest.mark.asyncio
    async def test_unavailable_server_is_not_called(self, make_client):
        client = make_client({("POST", "/api/tests/run"): started}, health=unhealthy)

        with pytest.raises(ApiException) as exc_info:
            await start_test(client, RunTestRequest(script="load.js"))

        assert exc_info.value.code == FailureCode.SERVICE_UNAVAILABLE
        assert [request.url.path for request in client.requests] == ["/health"]

    @pytest.mark.asyncio
    async def test_upstream_rejection(self, make_client):
        client = make_client({
            ("POST", "/api/tests/run"): lambda request: httpx.Response(400, json={"error": "Script not found"}),
        })

        with pytest.raises(ApiException) as exc_info:
            await start_test(client, RunTestRequest(script="missing.js"))

        assert exc_info.value.code == FailureCode.UPSTREAM_ERROR
        assert exc_info.value.message == "Script not found"
