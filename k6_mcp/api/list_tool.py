from fastmcp import FastMCP

from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.response_template import ResponseTemplate
from k6_mcp.services.execution.app_server_client import AppServerClient
from k6_mcp.services.testing.list_service import list_available_tests

TOOL_NAME = "k6_list"
TOOL_DESCRIPTION = "List the K6 test scripts known to the K6 App Server with their stages, total duration and max VUs."


@handle_tool_errors("Failed to list K6 scripts")
async def k6_list(client: AppServerClient) -> str:
    result = await list_available_tests(client)
    return ResponseTemplate.success(result)


def register(mcp: FastMCP, client: AppServerClient):

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def list_tool() -> str:
        return await k6_list(client)
