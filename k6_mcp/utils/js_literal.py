"""
생성 스크립트(JavaScript)에 값을 안전하게 삽입하기 위한 유틸리티
"""
import json
from typing import List, Union


def js_string(value: str) -> str:
    """작은따옴표 JS 문자열 리터럴로 변환"""
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f"'{escaped}'"


def js_number(value: Union[int, float]) -> str:
    """JS 숫자 리터럴 (1.0 -> 1)"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def js_array(values: List[str], indent: str = "  ") -> str:
    """
    문자열 배열 리터럴 생성

    첫 줄을 제외한 나머지 줄에 indent 를 붙여 이미 들여쓰기 된 위치에 그대로 삽입할 수 있도록 함
    """
    lines = json.dumps(values, indent=2, ensure_ascii=False).split("\n")
    return "\n".join(line if i == 0 else indent + line for i, line in enumerate(lines))


def comment_text(value) -> str:
    """한 줄 주석(//) 안에 들어갈 텍스트 (줄바꿈 제거)"""
    return " ".join(str(value).splitlines())
