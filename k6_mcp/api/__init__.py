from fastmcp import FastMCP

from k6_mcp.api import analyze_tool, generate_tool, list_tool, output_tool, run_tool, status_tool
from k6_mcp.core.config import Settings
from k6_mcp.services.execution.app_server_client import AppServerClient

TOOL_NAMES = [
    generate_tool.TOOL_NAME,
    run_tool.TOOL_NAME,
    list_tool.TOOL_NAME,
    status_tool.TOOL_NAME,
    output_tool.TOOL_NAME,
    analyze_tool.TOOL_NAME,
]


def register_tools(mcp: FastMCP, app_settings: Settings, client: AppServerClient):
    """6개 k6 도구 등록"""
    generate_tool.register(mcp, app_settings)
    run_tool.register(mcp, client)
    list_tool.register(mcp, client)
    status_tool.register(mcp, client)
    output_tool.register(mcp, client, app_settings.OUTPUT_MAX_LENGTH)
    analyze_tool.register(mcp, client)
