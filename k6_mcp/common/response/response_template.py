import json
from typing import Any, Dict, Optional

from pydantic import TypeAdapter

from k6_mcp.common.response.code import BaseCode

_BODY_ADAPTER = TypeAdapter(Dict[str, Any])


class ResponseTemplate:
    """MCP 도구 응답 템플릿 (JSON 문서를 담은 단일 텍스트)"""

    @staticmethod
    def render(body: Dict[str, Any]) -> str:
        return json.dumps(_BODY_ADAPTER.dump_python(body, mode="json"), indent=2, ensure_ascii=False)

    @classmethod
    def success(cls, data: Dict[str, Any], code: Optional[BaseCode] = None) -> str:
        response_body: Dict[str, Any] = {}
        if code is not None:
            response_body["success"] = True
            response_body["message"] = code.message()
        response_body.update(data)
        return cls.render(response_body)

    @classmethod
    def fail(
        cls,
        code: BaseCode,
        title: str,
        custom_message: str = None,
        hint: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> str:
        response_body: Dict[str, Any] = {
            "error": title,
            "message": custom_message or code.message(),
            "code": code.name,
        }
        if data:
            response_body.update(data)
        # hint는 조치 방법이 있을 때만 포함
        if hint:
            response_body["hint"] = hint
        return cls.render(response_body)
