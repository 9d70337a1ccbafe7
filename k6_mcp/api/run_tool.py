from typing import Annotated, Dict, Optional

from fastmcp import FastMCP
from pydantic import Field

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.exception.validation import validate_model
from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.code import FailureCode, SuccessCode
from k6_mcp.common.response.response_template import ResponseTemplate
from k6_mcp.schemas.testing import RunTestRequest
from k6_mcp.services.execution.app_server_client import AppServerClient
from k6_mcp.services.testing.run_service import start_test

TOOL_NAME = "k6_run"
TOOL_DESCRIPTION = (
    "Run a K6 test script through the K6 App Server. Returns the test ID and the URLs "
    "for status, results, output and live stream. Use k6_status or k6_output to follow progress."
)


@handle_tool_errors("Failed to start K6 test", echo=("script",))
async def k6_run(
    client: AppServerClient,
    script: Optional[str],
    vus: int = 10,
    duration: str = "30s",
    env: Optional[Dict[str, str]] = None
) -> str:
    if not script:
        raise ApiException(FailureCode.VALIDATION_ERROR, "script is required")

    request = validate_model(RunTestRequest, script=script, vus=vus, duration=duration, env=env or {})
    result = await start_test(client, request)
    return ResponseTemplate.success(result, SuccessCode.TEST_STARTED)


def register(mcp: FastMCP, client: AppServerClient):

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def run_tool(
        script: Annotated[str, Field(description="Path to the K6 test script")],
        vus: Annotated[int, Field(description="Number of virtual users")] = 10,
        duration: Annotated[str, Field(description="Test duration (e.g. '30s', '5m')")] = "30s",
        env: Annotated[Optional[Dict[str, str]], Field(
            description="Environment variables passed to the test"
        )] = None,
    ) -> str:
        return await k6_run(client, script, vus, duration, env)
