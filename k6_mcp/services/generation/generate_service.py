"""
k6 스크립트 생성 조정 모듈

요청 검증 -> 옵션 기본값 적용 -> 템플릿 렌더링 -> 파일 저장 -> 결과 요약 순으로 처리합니다.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.exception.validation import validate_model
from k6_mcp.common.response.code import FailureCode, NoticeCode
from k6_mcp.schemas.generate import (
    GenerateOptions, GenerationRequest, GeneratedScript, PersistedArtifact, ScenarioType, SourceKind
)
from k6_mcp.services.generation.script_templates import DEFAULT_TARGET_URL, render
from k6_mcp.utils.file_writer import FileWriter
from k6_mcp.utils.time_formatter import to_epoch_millis, to_iso_millis, utc_now

logger = logging.getLogger(__name__)

DEFAULT_VUS = 10
DEFAULT_THINK_TIME = 1
DEFAULT_DURATIONS = {
    SourceKind.BASIC: "2m",
    SourceKind.API: "1m",
    SourceKind.HAR: "5m",
    SourceKind.OPENAPI: "5m",
}
PREVIEW_LENGTH = 500


def parse_source_kind(source: Union[str, SourceKind, None]) -> SourceKind:
    try:
        return SourceKind(source)
    except ValueError:
        expected = ", ".join(kind.value for kind in SourceKind)
        raise ApiException(
            FailureCode.VALIDATION_ERROR,
            f"Unknown source type: {source}. Expected one of: {expected}"
        )


def parse_options(options: Union[GenerateOptions, Dict[str, Any], None]) -> GenerateOptions:
    """options 인자를 GenerateOptions 로 검증"""
    if options is None:
        return GenerateOptions()
    if isinstance(options, GenerateOptions):
        parsed = options
    elif isinstance(options, dict):
        parsed = validate_model(GenerateOptions, **options)
    else:
        raise ApiException(FailureCode.VALIDATION_ERROR, "options must be an object")

    if parsed.vus is not None and parsed.vus < 1:
        raise ApiException(FailureCode.VALIDATION_ERROR, f"vus must be a positive integer, got {parsed.vus}")
    if parsed.think_time is not None and parsed.think_time < 0:
        raise ApiException(FailureCode.VALIDATION_ERROR, f"thinkTime must not be negative, got {parsed.think_time}")
    return parsed


def build_generation_request(
    source_kind: SourceKind,
    input: Optional[str],
    options: GenerateOptions,
    generated_at: str,
    default_target_url: str = DEFAULT_TARGET_URL
) -> GenerationRequest:
    """기본값을 적용한 템플릿 엔진 입력 생성"""
    if source_kind in (SourceKind.BASIC, SourceKind.API):
        target = input or default_target_url
    else:
        target = input

    scenario_type = options.scenarios[0] if options.scenarios else ScenarioType.RAMPING.value

    return GenerationRequest(
        source_kind=source_kind,
        target=target,
        vus=options.vus if options.vus is not None else DEFAULT_VUS,
        duration=options.duration or DEFAULT_DURATIONS[source_kind],
        think_time=options.think_time if options.think_time is not None else DEFAULT_THINK_TIME,
        scenario_type=scenario_type,
        endpoints=options.endpoints,
        generated_at=generated_at,
    )


async def save_generated_script(
    script: GeneratedScript,
    source_kind: SourceKind,
    generated: datetime,
    scripts_dir: str
) -> PersistedArtifact:
    """생성 스크립트를 generated_<source>_<epochMillis>.js 로 저장"""
    file_name = f"generated_{source_kind.value}_{to_epoch_millis(generated)}.js"

    try:
        absolute_path = await asyncio.to_thread(
            FileWriter.write_to_path, script.source_text, file_name, scripts_dir
        )
    except OSError as e:
        raise ApiException(FailureCode.IO_FAILURE, str(e))

    return PersistedArtifact(
        absolute_path=absolute_path,
        file_name=file_name,
        directory=str(scripts_dir),
    )


async def generate_script(
    source: Union[str, SourceKind, None],
    input: Optional[str],
    options: Union[GenerateOptions, Dict[str, Any], None],
    scripts_dir: str,
    clock: Callable[[], datetime] = utc_now,
    default_target_url: str = DEFAULT_TARGET_URL,
    preview_length: int = PREVIEW_LENGTH
) -> Dict[str, Any]:
    """
    k6 스크립트 생성 및 저장

    Args:
        source: basic, api, har, openapi
        input: base URL (basic/api) 또는 입력 파일 경로 (har/openapi)
        options: 생성 옵션
        scripts_dir: 스크립트 저장 디렉터리
        clock: 생성 시각 조회 함수 (요청당 한 번 호출)

    Returns:
        Dict: 저장된 파일 정보, 적용된 설정, 미리보기

    Raises:
        ApiException: 검증 실패(VALIDATION_ERROR) 또는 저장 실패(IO_FAILURE)
    """
    source_kind = parse_source_kind(source)
    parsed_options = parse_options(options)

    generated = clock()
    generated_at = to_iso_millis(generated)

    request = build_generation_request(
        source_kind, input, parsed_options, generated_at, default_target_url
    )
    script = render(request)
    artifact = await save_generated_script(script, source_kind, generated, scripts_dir)

    logger.info(f"Generated {source_kind.value} script: {artifact.absolute_path}")

    result: Dict[str, Any] = {
        "file": {
            "path": artifact.absolute_path,
            "name": artifact.file_name,
            "directory": artifact.directory,
            "source": source_kind.value,
            "generated_at": generated_at,
        },
        "configuration": {
            "vus": request.vus,
            "duration": request.duration,
            "scenarios": parsed_options.scenarios or ["default"],
            "thinkTime": request.think_time,
            "assertions": parsed_options.assertions,
        },
    }

    if script.stages is not None:
        result["stages"] = [stage.model_dump() for stage in script.stages]

    if script.placeholder:
        result["placeholder"] = True
        result["notice"] = NoticeCode.SCOPE_LIMITATION.message()

    # 응답 크기 제한용 미리보기 (저장 파일에는 영향 없음)
    result["preview"] = script.source_text[:preview_length] + "..."
    return result
