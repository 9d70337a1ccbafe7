import functools
import inspect
import logging
import traceback
from typing import Any, Awaitable, Callable, Dict, Mapping, Sequence, Union

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.response.code import FailureCode
from k6_mcp.common.response.response_template import ResponseTemplate

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[str]]


def handle_tool_errors(
    title: str,
    echo: Union[Sequence[str], Mapping[str, str]] = ()
) -> Callable[[ToolHandler], ToolHandler]:
    """
    도구 핸들러의 모든 예외를 구조화된 실패 응답으로 변환하는 데코레이터

    Args:
        title: 실패 응답의 error 필드에 들어갈 제목
        echo: 실패 응답에 그대로 되돌려줄 핸들러 인자 이름들
            (Mapping 이면 인자 이름 -> 응답 필드 이름)
    """
    def decorator(handler: ToolHandler) -> ToolHandler:
        signature = inspect.signature(handler)
        echo_fields = dict(echo) if isinstance(echo, Mapping) else {name: name for name in echo}

        def _echoed_arguments(args, kwargs) -> Dict[str, Any]:
            try:
                bound = signature.bind_partial(*args, **kwargs)
            except TypeError:
                return {}
            return {field: bound.arguments.get(name) for name, field in echo_fields.items()}

        @functools.wraps(handler)
        async def wrapper(*args, **kwargs) -> str:
            try:
                return await handler(*args, **kwargs)

            # 사용자 정의 예외(ApiException) 처리
            except ApiException as exc:
                logger.error(f"ApiException occurred in {handler.__name__}: {exc.code.name} - {exc.message}",
                             exc_info=True)
                return ResponseTemplate.fail(
                    code=exc.code,
                    title=title,
                    custom_message=exc.message,
                    hint=exc.hint,
                    data=_echoed_arguments(args, kwargs),
                )

            # 예상치 못한 모든 예외 처리
            except Exception as exc:
                tb_str = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
                logger.error(f"Unhandled exception in {handler.__name__}: {exc}\nStack trace:\n{tb_str}")
                return ResponseTemplate.fail(
                    code=FailureCode.INTERNAL_ERROR,
                    title=title,
                    custom_message=str(exc) or FailureCode.INTERNAL_ERROR.message(),
                    data=_echoed_arguments(args, kwargs),
                )

        return wrapper

    return decorator
