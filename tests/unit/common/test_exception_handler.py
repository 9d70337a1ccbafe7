import json

import pytest

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.exception.validation import validate_model
from k6_mcp.common.exceptionhandler.exception_handler import handle_tool_errors
from k6_mcp.common.response.code import FailureCode
from k6_mcp.schemas.testing import RunTestRequest


@handle_tool_errors("Failed to do things", echo={"test_id": "testId"})
async def failing_handler(test_id=None, error=None):
    if error:
        raise error
    return "ok"


class TestHandleToolErrors:

    @pytest.mark.asyncio
    async def test_success_passes_through(self):
        assert await failing_handler("t1") == "ok"

    @pytest.mark.asyncio
    async def test_api_exception(self):
        error = ApiException(FailureCode.NOT_FOUND, "Test t1 not found", hint="Use k6_status")

        body = json.loads(await failing_handler("t1", error=error))

        assert body == {
            "error": "Failed to do things",
            "message": "Test t1 not found",
            "code": "NOT_FOUND",
            "testId": "t1",
            "hint": "Use k6_status",
        }

    @pytest.mark.asyncio
    async def test_unexpected_exception(self):
        body = json.loads(await failing_handler(test_id="t2", error=KeyError("boom")))

        assert body["code"] == "INTERNAL_ERROR"
        assert body["testId"] == "t2"
        assert "boom" in body["message"]

    @pytest.mark.asyncio
    async def test_wrapped_function_keeps_name(self):
        assert failing_handler.__name__ == "failing_handler"


class TestValidateModel:

    def test_valid(self):
        assert validate_model(RunTestRequest, script="a.js").vus == 10

    def test_invalid(self):
        with pytest.raises(ApiException) as exc_info:
            validate_model(RunTestRequest, script="a.js", vus="lots")

        assert exc_info.value.code == FailureCode.VALIDATION_ERROR
        assert exc_info.value.message.startswith("Invalid arguments - vus:")
