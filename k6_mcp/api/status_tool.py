from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.response_template import ResponseTemplate
from k6_mcp.services.execution.app_server_client import AppServerClient
from k6_mcp.services.testing.status_service import get_test_status

TOOL_NAME = "k6_status"
TOOL_DESCRIPTION = (
    "Get the status of one K6 test by ID, or of all tests grouped by status "
    "(running, completed, failed) when no ID is given."
)


@handle_tool_errors("Failed to get test status", echo={"test_id": "testId"})
async def k6_status(client: AppServerClient, test_id: Optional[str] = None) -> str:
    result = await get_test_status(client, test_id)
    return ResponseTemplate.success(result)


def register(mcp: FastMCP, client: AppServerClient):

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def status_tool(
        testId: Annotated[Optional[str], Field(description="Test ID; omit to list all tests")] = None,
    ) -> str:
        return await k6_status(client, testId)
