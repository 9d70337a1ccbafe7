import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from k6_mcp import __version__
from k6_mcp.api import TOOL_NAMES, register_tools
from k6_mcp.core.config import Settings, settings
from k6_mcp.services.execution.app_server_client import AppServerClient, AppServerConfig


def resolve_log_level(name: str) -> int:
    """알 수 없는 로그 레벨 이름은 INFO"""
    level = getattr(logging, str(name).upper(), None)
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    return logging.INFO


# 로깅 설정 (stdout 은 MCP stdio 전송에 쓰이므로 기본 stderr 사용)
logging.basicConfig(
    level=resolve_log_level(settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SERVER_NAME = "k6-mcp-server"


def create_server(app_settings: Settings = settings) -> FastMCP:
    """설정값을 주입해 MCP 서버와 App Server 클라이언트 구성"""
    if not app_settings.validate_app_server_config():
        logger.warning(f"Invalid K6 App Server configuration: {app_settings.get_app_server_config()}")

    client = AppServerClient(AppServerConfig.from_settings(app_settings))

    @asynccontextmanager
    async def lifespan(server: FastMCP):
        """MCP 서버 라이프사이클 관리"""
        # 시작 시 실행
        logger.info(f"Starting K6 MCP Server v{__version__}...")
        logger.info(f"Available tools: {', '.join(TOOL_NAMES)}")
        logger.info(f"Scripts directory: {app_settings.K6_SCRIPT_FILE_FOLDER}")

        # App Server 연결 확인 (실패해도 서버는 계속 실행)
        if await client.is_available():
            logger.info(f"K6 App Server is available at {client.base_url}")
        else:
            logger.warning(
                f"K6 App Server is not available at {client.base_url}. "
                "k6_generate and k6_analyze with resultFile still work; other tools need the App Server."
            )

        yield

        # 종료 시 실행
        logger.info("Shutting down K6 MCP Server...")
        await client.aclose()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)
    register_tools(mcp, app_settings, client)
    return mcp


def main():
    mcp = create_server()
    mcp.run()


if __name__ == "__main__":
    main()
