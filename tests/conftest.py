"""공통 테스트 픽스처"""
from typing import Callable, Dict, Tuple

import httpx
import pytest

from k6_mcp.services.execution.app_server_client import AppServerClient, AppServerConfig

APP_SERVER_URL = "http://k6-app-server:3001"

Route = Tuple[str, str]
RouteResponse = Callable[[httpx.Request], httpx.Response]


def healthy(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"status": "healthy"})


def unhealthy(request: httpx.Request) -> httpx.Response:
    return httpx.Response(503, json={"status": "down"})


@pytest.fixture
def make_client():
    """
    (method, path) -> 응답 함수 매핑으로 App Server 를 흉내내는 클라이언트 생성

    health 기본 응답은 healthy, 등록되지 않은 경로는 404.
    호출된 요청은 client.requests 에 기록됨
    """
    def factory(routes: Dict[Route, RouteResponse], health: RouteResponse = healthy) -> AppServerClient:
        recorded = []

        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            if request.url.path == "/health":
                return health(request)
            route = routes.get((request.method, request.url.path))
            if route is None:
                return httpx.Response(404, json={"error": "Not found"})
            return route(request)

        client = AppServerClient(
            AppServerConfig(base_url=APP_SERVER_URL, health_timeout_seconds=1.0),
            transport=httpx.MockTransport(handler)
        )
        client.requests = recorded
        return client

    return factory
