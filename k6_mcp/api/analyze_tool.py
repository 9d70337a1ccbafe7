from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.response_template import ResponseTemplate
from k6_mcp.services.analysis.analysis_service import analyze_results
from k6_mcp.services.execution.app_server_client import AppServerClient

TOOL_NAME = "k6_analyze"
TOOL_DESCRIPTION = (
    "Analyze K6 results by test ID (via the K6 App Server) or from a saved text report file. "
    "Without the App Server a result file still gets a basic performance/reliability/throughput analysis. "
    "Provide exactly one of testId or resultFile."
)


@handle_tool_errors(
    "Failed to analyze K6 results",
    echo={"test_id": "testId", "result_file": "resultFile"}
)
async def k6_analyze(
    client: AppServerClient,
    test_id: Optional[str] = None,
    result_file: Optional[str] = None
) -> str:
    result = await analyze_results(client, test_id, result_file)
    return ResponseTemplate.success(result)


def register(mcp: FastMCP, client: AppServerClient):

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def analyze_tool(
        testId: Annotated[Optional[str], Field(description="Test ID to analyze")] = None,
        resultFile: Annotated[Optional[str], Field(description="Path to a K6 text report")] = None,
    ) -> str:
        return await k6_analyze(client, testId, resultFile)
