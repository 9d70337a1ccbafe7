from typing import Optional

from k6_mcp.utils.js_literal import js_string

# handleSummary 본문 중 요청 값과 무관한 부분
_SUMMARY_BODY = r"""
  // Request metrics
  if (metrics.http_reqs) {
    summary += `Total Requests: ${metrics.http_reqs.values.count}\n`;
    summary += `Request Rate: ${metrics.http_reqs.values.rate?.toFixed(2)}/s\n`;
  }

  // Response time metrics
  if (metrics.http_req_duration) {
    summary += `\nResponse Times:\n`;
    summary += `  Median: ${metrics.http_req_duration.values['p(50)']?.toFixed(2)}ms\n`;
    summary += `  95th percentile: ${metrics.http_req_duration.values['p(95)']?.toFixed(2)}ms\n`;
    summary += `  99th percentile: ${metrics.http_req_duration.values['p(99)']?.toFixed(2)}ms\n`;
  }

  // Error metrics
  if (metrics.errors) {
    summary += `\nError Rate: ${(metrics.errors.values.rate * 100).toFixed(2)}%\n`;
  }

  if (metrics.successful_requests) {
    summary += `Success Rate: ${(metrics.successful_requests.values.rate * 100).toFixed(2)}%\n`;
  }

  // Threshold results
  summary += '\nThreshold Results:\n';
  for (const [name, metric] of Object.entries(metrics)) {
    if (metric.thresholds) {
      const passed = Object.values(metric.thresholds).every(t => t.ok);
      summary += `  ${name}: ${passed ? 'PASS' : 'FAIL'}\n`;
    }
  }

  return {
    'stdout': summary,
    'summary.json': JSON.stringify(data),
  };
}"""


def generate_summary_handler(scenario_type: Optional[str], vus: int, duration: str) -> str:
    """
    k6 handleSummary 함수 생성

    요청 수, 처리율, p50/p95/p99 응답시간, 에러율/성공률, 임계값 통과 여부를
    사람이 읽을 수 있는 요약으로 출력하고 원본 데이터는 summary.json 으로 저장
    """
    lines = [
        "// Custom summary handler",
        "export function handleSummary(data) {",
        "  const { metrics } = data;",
        "  let summary = '\\n=== Test Summary ===\\n\\n';",
        f"  summary += 'Scenario: ' + {js_string(scenario_type or 'ramping')} + '\\n';",
        f"  summary += 'Target VUs: ' + {vus} + '\\n';",
        f"  summary += 'Duration: ' + {js_string(duration)} + '\\n\\n';",
    ]
    return "\n".join(lines) + "\n" + _SUMMARY_BODY
