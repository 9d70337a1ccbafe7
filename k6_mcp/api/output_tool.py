from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.code import FailureCode
from k6_mcp.common.response.response_template import ResponseTemplate
from k6_mcp.schemas.testing import OutputRequest
from k6_mcp.services.execution.app_server_client import AppServerClient
from k6_mcp.services.testing.output_service import MAX_OUTPUT_LENGTH, get_test_output

TOOL_NAME = "k6_output"
TOOL_DESCRIPTION = (
    "Get the console output of a K6 test. Long output keeps only the most recent part. "
    "'follow' is passed to the App Server but the response is never streamed."
)


@handle_tool_errors("Failed to get test output", echo={"test_id": "testId"})
async def k6_output(
    client: AppServerClient,
    test_id: Optional[str],
    tail: Optional[int] = None,
    follow: Optional[bool] = None,
    max_output_length: int = MAX_OUTPUT_LENGTH
) -> str:
    if not test_id:
        raise ApiException(FailureCode.VALIDATION_ERROR, "testId is required")

    request = OutputRequest(test_id=test_id, tail=tail, follow=follow)
    result = await get_test_output(client, request, max_output_length)
    return ResponseTemplate.success(result)


def register(mcp: FastMCP, client: AppServerClient, max_output_length: int = MAX_OUTPUT_LENGTH):

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def output_tool(
        testId: Annotated[str, Field(description="Test ID returned by k6_run")],
        tail: Annotated[Optional[int], Field(description="Only return the last N lines")] = None,
        follow: Annotated[Optional[bool], Field(description="Forwarded to the App Server only")] = None,
    ) -> str:
        return await k6_output(client, testId, tail, follow, max_output_length)
