from datetime import timedelta

import httpx
import pytest

from k6_mcp.common.exception.api_exception import ApiException
from k6_mcp.common.response.code import FailureCode
from k6_mcp.services.testing.status_service import enhance_test, get_test_status, group_by_status
from k6_mcp.utils.time_formatter import to_iso_millis, utc_now


class TestGetTestStatus:

    @pytest.mark.asyncio
    async def test_completed_test_gets_total_duration(self, make_client):
        body = {
            "testId": "t1",
            "status": "completed",
            "startTime": "2024-05-01T09:00:00.000Z",
            "endTime": "2024-05-01T09:02:05.000Z",
        }
        client = make_client({("GET", "/api/tests/t1/status"): lambda request: httpx.Response(200, json=body)})

        result = await get_test_status(client, "t1")

        assert result["totalDuration"] == "2m 5s"
        assert "runningFor" not in result

    @pytest.mark.asyncio
    async def test_running_test_gets_elapsed_time(self, make_client):
        started = to_iso_millis(utc_now() - timedelta(seconds=90))
        body = {"testId": "t1", "status": "running", "startTime": started}
        client = make_client({("GET", "/api/tests/t1/status"): lambda request: httpx.Response(200, json=body)})

        result = await get_test_status(client, "t1")

        assert result["runningFor"].startswith("1m ")

    @pytest.mark.asyncio
    async def test_unknown_test(self, make_client):
        client = make_client({})

        with pytest.raises(ApiException) as exc_info:
            await get_test_status(client, "nope")

        assert exc_info.value.code == FailureCode.NOT_FOUND
        assert exc_info.value.hint == "Test nope not found. Use k6_status to list available tests."

    @pytest.mark.asyncio
    async def test_all_tests_are_grouped(self, make_client):
        tests = [
            {"id": "a", "status": "running", "startTime": to_iso_millis(utc_now())},
            {"id": "b", "status": "completed", "duration": 65000},
            {"id": "c", "status": "failed"},
            {"id": "d", "status": "completed", "duration": 1000},
        ]
        client = make_client({("GET", "/api/tests/"): lambda request: httpx.Response(200, json={"tests": tests})})

        result = await get_test_status(client)

        assert result["summary"] == {"total": 4, "running": 1, "completed": 2, "failed": 1}
        assert [test["id"] for test in result["groupedByStatus"]["completed"]] == ["b", "d"]
        assert result["tests"][1]["duration"] == "1m 5s"


class TestHelpers:

    def test_enhance_test_does_not_mutate_input(self):
        test = {"status": "completed", "duration": 3723000}

        enhanced = enhance_test(test)

        assert enhanced["duration"] == "1h 2m 3s"
        assert test["duration"] == 3723000

    def test_group_by_status_ignores_other_statuses(self):
        grouped = group_by_status([{"status": "queued"}])

        assert grouped["total"] == 1
        assert grouped["running"] == grouped["completed"] == grouped["failed"] == []
