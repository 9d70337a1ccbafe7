"""
K6 App Server API 클라이언트 모듈

테스트 실행/결과 저장을 담당하는 외부 K6 App Server 와의 HTTP 통신을 담당하며,
모든 도구가 호출 전에 사용하는 가용성 확인(health probe)을 제공합니다.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.response.code import FailureCode


logger = logging.getLogger(__name__)

API_PREFIX = "/api/tests"
APP_SERVER_START_HINT = "Start the K6 App Server with: cd k6-app-server && npm start"


def not_found_hint(test_id: str) -> str:
    return f"Test {test_id} not found. Use k6_status to list available tests."


@dataclass
class AppServerConfig:
    """App Server 클라이언트 설정"""
    base_url: str = "http://localhost:3001"
    timeout_seconds: Optional[float] = None      # None 이면 전달 호출에 타임아웃 없음
    health_timeout_seconds: float = 5.0

    @classmethod
    def from_settings(cls, app_settings=None):
        """settings에서 설정값을 가져와서 AppServerConfig 생성"""
        if app_settings is None:
            from k6_mcp.core.config import settings as app_settings
        app_server_config = app_settings.get_app_server_config()
        return cls(
            base_url=app_server_config['base_url'],
            timeout_seconds=app_server_config['timeout_seconds'],
            health_timeout_seconds=app_server_config['health_timeout_seconds']
        )


class AppServerClient:
    """K6 App Server API 클라이언트"""

    def __init__(
        self,
        config: Optional[AppServerConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config or AppServerConfig()
        self.client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.aclose()

    async def aclose(self):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def _ensure_client(self):
        """HTTP 클라이언트 생성 (필요시)"""
        if self.client is None or self.client.is_closed:
            timeout = httpx.Timeout(self.config.timeout_seconds)
            self.client = httpx.AsyncClient(timeout=timeout, transport=self._transport)

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip('/')

    async def is_available(self) -> bool:
        """
        App Server 연결 가능 여부 확인

        GET /health 응답 본문의 status 가 "healthy" 일 때만 True.
        연결 실패, 타임아웃, 2xx 이외 응답, 잘못된 본문은 모두 False (예외를 던지지 않음)
        """
        try:
            await self._ensure_client()

            response = await self.client.get(
                f"{self.base_url}/health",
                timeout=self.config.health_timeout_seconds
            )
            if not response.is_success:
                logger.warning(f"K6 App Server health check returned status {response.status_code}")
                return False

            data = response.json()
            if isinstance(data, dict) and data.get("status") == "healthy":
                return True

            logger.warning(f"K6 App Server is not healthy: {data!r}")
            return False

        except Exception as e:
            logger.warning(f"K6 App Server not available at {self.base_url}: {e}")
            return False

    async def ensure_available(self):
        """App Server 를 사용할 수 없으면 SERVICE_UNAVAILABLE 예외"""
        if not await self.is_available():
            raise ApiException(
                FailureCode.SERVICE_UNAVAILABLE,
                f"K6 App Server is not available at {self.base_url}",
                hint=APP_SERVER_START_HINT
            )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self._request("POST", path, json=json)

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        await self._ensure_client()
        url = f"{self.base_url}{path}"
        try:
            return await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Request to K6 App Server failed: {method} {url} - {e}")
            raise ApiException(
                FailureCode.UPSTREAM_ERROR,
                f"Request to K6 App Server failed: {e}"
            )

    @staticmethod
    def extract_error_message(response: httpx.Response) -> str:
        """응답 본문의 error 필드, 없으면 상태코드와 본문"""
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("error"):
                return str(data["error"])
        except ValueError:
            pass
        return f"HTTP {response.status_code}: {response.text}"

    def raise_for_status(self, response: httpx.Response, test_id: Optional[str] = None):
        """
        2xx 이외 응답을 ApiException 으로 변환

        test_id 가 주어진 요청의 404 는 NOT_FOUND, 그 외 실패는 UPSTREAM_ERROR
        """
        if response.is_success:
            return

        if response.status_code == 404 and test_id is not None:
            raise ApiException(
                FailureCode.NOT_FOUND,
                f"Test {test_id} not found",
                hint=not_found_hint(test_id)
            )

        message = self.extract_error_message(response)
        logger.error(f"K6 App Server error {response.status_code}: {message}")
        raise ApiException(FailureCode.UPSTREAM_ERROR, message)

    @staticmethod
    def parse_json(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            raise ApiException(
                FailureCode.UPSTREAM_ERROR,
                f"K6 App Server returned a non-JSON body (HTTP {response.status_code})"
            )
        if not isinstance(data, dict):
            raise ApiException(FailureCode.UPSTREAM_ERROR, "K6 App Server returned an unexpected body")
        return data
