"""
k6_generate 도구

basic/api 템플릿으로 k6 스크립트를 생성해 test-scripts 디렉터리에 저장합니다.
har/openapi 는 아직 변환을 지원하지 않아 placeholder 스크립트를 생성합니다.
"""
from typing import Annotated, Any, Dict, Optional

from fastmcp import FastMCP
from pydantic import Field

from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.code import SuccessCode
from k6_mcp.common.response.response_template import ResponseTemplate
from k6_mcp.core.config import Settings, settings
from k6_mcp.schemas.generate import SourceKind
from k6_mcp.services.generation.generate_service import PREVIEW_LENGTH, generate_script
from k6_mcp.services.generation.script_templates import DEFAULT_TARGET_URL

TOOL_NAME = "k6_generate"
TOOL_DESCRIPTION = """Generate a K6 load test script and save it under the test-scripts directory.

Sources:
- basic: homepage, API and user-journey groups with a staged load shape (ramping, spike, stress, soak)
- api: iterates over a list of endpoint paths
- har / openapi: placeholder script only, conversion is not implemented yet

Options: vus (default 10), duration (default 2m basic, 1m api, 5m har/openapi),
scenarios (first entry picks the load shape), thinkTime (seconds, default 1),
assertions, endpoints (api only)."""


@handle_tool_errors("Failed to generate K6 script", echo=("source", "input"))
async def k6_generate(
    source: Optional[str],
    input: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
    scripts_dir: str = settings.K6_SCRIPT_FILE_FOLDER,
    default_target_url: str = DEFAULT_TARGET_URL,
    preview_length: int = PREVIEW_LENGTH
) -> str:
    result = await generate_script(
        source,
        input,
        options,
        scripts_dir=scripts_dir,
        default_target_url=default_target_url,
        preview_length=preview_length,
    )
    return ResponseTemplate.success(result, SuccessCode.SCRIPT_GENERATED)


def register(mcp: FastMCP, app_settings: Settings):
    generation_config = app_settings.get_generation_config()

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def generate_tool(
        source: Annotated[str, Field(
            description="Script source type",
            json_schema_extra={"enum": [kind.value for kind in SourceKind]}
        )],
        input: Annotated[Optional[str], Field(
            description="Base URL for basic/api, or the input file path for har/openapi"
        )] = None,
        options: Annotated[Optional[Dict[str, Any]], Field(
            description="Generation options: {vus, duration, scenarios, thinkTime, assertions, endpoints}"
        )] = None,
    ) -> str:
        return await k6_generate(source, input, options, **generation_config)
