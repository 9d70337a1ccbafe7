from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.response.code import FailureCode

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_model(model_cls: Type[ModelT], **values) -> ModelT:
    """pydantic 검증 실패를 VALIDATION_ERROR 로 변환"""
    try:
        return model_cls(**values)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ApiException(FailureCode.VALIDATION_ERROR, f"Invalid arguments - {details}")
