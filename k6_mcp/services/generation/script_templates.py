"""
k6 스크립트 템플릿 엔진

GenerationRequest 를 받아 완결된 k6 스크립트 소스를 반환하는 순수 함수 모음입니다.
파일 저장이나 시각 조회는 하지 않으며, 소스 유형(source_kind)별 렌더러를 선택해 호출합니다.
"""
from typing import Callable, Dict, List

from k6_mcp.schemas.generate import GeneratedScript, GenerationRequest, PlannedStage, SourceKind
from k6_mcp.services.generation.stage_planner import plan_stages
from k6_mcp.services.generation.summary_handler import generate_summary_handler
from k6_mcp.utils.js_literal import comment_text, js_array, js_number, js_string

DEFAULT_TARGET_URL = "http://localhost:3000"
DEFAULT_API_ENDPOINTS = ["/api/products", "/api/users", "/api/orders"]

# basic 템플릿의 고정 본문 (그룹 3개)
_BASIC_SCENARIO_BODY = r"""// Helper function for random think time (+/-50% variation)
function randomThinkTime() {
  const min = THINK_TIME * 0.5;
  const max = THINK_TIME * 1.5;
  return Math.random() * (max - min) + min;
}

// Main test scenario
export default function () {
  // Group 1: Homepage and basic navigation
  group('Homepage', function () {
    const homeRes = http.get(`${BASE_URL}/`, {
      tags: { name: 'Homepage' },
    });

    const homeCheck = check(homeRes, {
      'homepage status is 200': (r) => r.status === 200,
      'homepage loads quickly': (r) => r.timings.duration < 500,
      'homepage has content': (r) => r.body && r.body.length > 0,
    });

    if (!homeCheck) {
      errorRate.add(1);
    } else {
      successRate.add(1);
    }

    apiTrend.add(homeRes.timings.duration);
  });

  sleep(randomThinkTime());

  // Group 2: API endpoints
  group('API Endpoints', function () {
    const endpoints = [
      { path: '/api/health', name: 'Health Check' },
      { path: '/api/products', name: 'Products List' },
      { path: '/api/users', name: 'Users List' },
    ];

    endpoints.forEach(endpoint => {
      const res = http.get(`${BASE_URL}${endpoint.path}`, {
        tags: { name: endpoint.name },
      });

      const checkResult = check(res, {
        [`${endpoint.name} status ok`]: (r) => r.status === 200 || r.status === 404,
        [`${endpoint.name} response time ok`]: (r) => r.timings.duration < 1000,
      });

      if (!checkResult || res.status >= 400) {
        errorRate.add(1);
      } else {
        successRate.add(1);
      }

      apiTrend.add(res.timings.duration, { endpoint: endpoint.name });

      sleep(randomThinkTime() * 0.5); // Shorter pause between API calls
    });
  });

  sleep(randomThinkTime());

  // Group 3: Simulated user journey
  group('User Journey', function () {
    const searchRes = http.get(`${BASE_URL}/search?q=test`, {
      tags: { name: 'Search' },
    });

    check(searchRes, {
      'search works': (r) => r.status === 200 || r.status === 404,
    }) || errorRate.add(1);
  });

  // Final think time before next iteration
  sleep(randomThinkTime());
}"""

_API_SCENARIO_LOOP = r"""  for (const endpoint of endpoints) {
    const res = http.get(`${BASE_URL}${endpoint}`);

    const success = check(res, {
      'status is 200': (r) => r.status === 200,
      'response time < 1000ms': (r) => r.timings.duration < 1000,
    });

    if (!success) {
      errorRate.add(1);
    }

    sleep(Math.random() * THINK_TIME * 2 + THINK_TIME * 0.5);
  }
}"""


def render(request: GenerationRequest) -> GeneratedScript:
    """source_kind 에 맞는 렌더러로 스크립트 생성"""
    renderer = RENDERERS[SourceKind(request.source_kind)]
    return renderer(request)


def render_basic(request: GenerationRequest) -> GeneratedScript:
    """단계별 VU 증감, 커스텀 메트릭, 그룹, handleSummary 를 포함한 기본 스크립트"""
    base_url = request.target or DEFAULT_TARGET_URL
    stages = plan_stages(request.scenario_type, request.vus, request.duration)

    script_lines = [
        "// Generated K6 test script",
        f"// Generated at: {comment_text(request.generated_at)}",
        "// Source: Basic template",
        f"// Scenario: {comment_text(request.scenario_type)}",
        f"// Configuration: {request.vus} VUs, {comment_text(request.duration)} duration, "
        f"{js_number(request.think_time)}s think time",
        "",
        "import http from 'k6/http';",
        "import { check, sleep, group } from 'k6';",
        "import { Rate, Trend } from 'k6/metrics';",
        "",
        "// Custom metrics",
        "const errorRate = new Rate('errors');",
        "const successRate = new Rate('successful_requests');",
        "const apiTrend = new Trend('api_duration', true);",
        "",
        "// Test configuration",
        "export const options = {",
        "  stages: [",
    ]
    script_lines.extend(format_stage_lines(stages))
    script_lines.extend([
        "  ],",
        "  thresholds: {",
        "    'http_req_duration': ['p(95)<1000', 'p(99)<2000'], // Response time thresholds",
        "    'http_req_failed': ['rate<0.1'],                    // Error rate < 10%",
        "    'errors': ['rate<0.1'],                             // Custom error rate < 10%",
        "    'successful_requests': ['rate>0.9'],                // Success rate > 90%",
        "  },",
        "};",
        "",
        "// Configuration",
        f"const BASE_URL = __ENV.BASE_URL || {js_string(base_url)};",
        f"const THINK_TIME = Number(__ENV.THINK_TIME || {js_number(request.think_time)});",
        "",
        _BASIC_SCENARIO_BODY,
        "",
        generate_summary_handler(request.scenario_type, request.vus, request.duration),
    ])

    return GeneratedScript(source_text="\n".join(script_lines), stages=stages)


def render_api(request: GenerationRequest) -> GeneratedScript:
    """엔드포인트 목록을 순서대로 호출하는 API 스크립트 (stage 없음)"""
    base_url = request.target or DEFAULT_TARGET_URL
    endpoints = DEFAULT_API_ENDPOINTS if request.endpoints is None else request.endpoints

    script_lines = [
        "// Generated K6 API test script",
        f"// Generated at: {comment_text(request.generated_at)}",
        f"// Target: {comment_text(base_url)}",
        f"// Configuration: {request.vus} VUs, {comment_text(request.duration)} duration",
        "",
        "import http from 'k6/http';",
        "import { check, sleep } from 'k6';",
        "import { Rate } from 'k6/metrics';",
        "",
        "const errorRate = new Rate('errors');",
        "",
        "export const options = {",
        f"  vus: {request.vus},",
        f"  duration: {js_string(request.duration)},",
        "  thresholds: {",
        "    errors: ['rate<0.1'],",
        "    http_req_duration: ['p(95)<1000'],",
        "  },",
        "};",
        "",
        f"const BASE_URL = __ENV.BASE_URL || {js_string(base_url)};",
        f"const THINK_TIME = Number(__ENV.THINK_TIME || {js_number(request.think_time)});",
        "",
        "export default function () {",
        "  // Test endpoints",
        f"  const endpoints = {js_array(list(endpoints))};",
        "",
        _API_SCENARIO_LOOP,
    ]

    return GeneratedScript(source_text="\n".join(script_lines))


def render_har(request: GenerationRequest) -> GeneratedScript:
    """HAR 변환 미구현: 메시지만 출력하는 스크립트"""
    return _render_placeholder(request, "HAR file", "HAR")


def render_openapi(request: GenerationRequest) -> GeneratedScript:
    """OpenAPI 변환 미구현: 메시지만 출력하는 스크립트"""
    return _render_placeholder(request, "OpenAPI specification", "OpenAPI")


def _render_placeholder(request: GenerationRequest, source_label: str, format_name: str) -> GeneratedScript:
    script_lines = [
        f"// Generated K6 test from {source_label}",
        f"// Generated at: {comment_text(request.generated_at)}",
        f"// Source: {comment_text(request.target or '(not provided)')}",
        f"// Note: {format_name} conversion not yet implemented",
        "",
        "import http from 'k6/http';",
        "import { check, sleep } from 'k6';",
        "",
        "export const options = {",
        f"  vus: {request.vus},",
        f"  duration: {js_string(request.duration)},",
        "  thresholds: {",
        "    http_req_duration: ['p(95)<1000'],",
        "    http_req_failed: ['rate<0.1'],",
        "  },",
        "};",
        "",
        "export default function () {",
        f"  console.log('{format_name} conversion not yet implemented');",
        "  sleep(1);",
        "}",
    ]
    return GeneratedScript(source_text="\n".join(script_lines), placeholder=True)


def format_stage_lines(stages: List[PlannedStage]) -> List[str]:
    """stage 목록을 options.stages 배열 항목 줄로 변환"""
    entries = [
        f"    {{ duration: {js_string(stage.duration)}, target: {stage.target} }},"
        for stage in stages
    ]
    width = max(len(entry) for entry in entries)
    return [
        f"{entry.ljust(width)} // {stage.note}" if stage.note else entry
        for entry, stage in zip(entries, stages)
    ]


RENDERERS: Dict[SourceKind, Callable[[GenerationRequest], GeneratedScript]] = {
    SourceKind.BASIC: render_basic,
    SourceKind.API: render_api,
    SourceKind.HAR: render_har,
    SourceKind.OPENAPI: render_openapi,
}
