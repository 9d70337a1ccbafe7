from k6_mcp.common.response.code.base_code import BaseCode
from k6_mcp.common.response.code.failure_code import FailureCode
from k6_mcp.common.response.code.notice_code import NoticeCode
from k6_mcp.common.response.code.success_code import SuccessCode

__all__ = [
    'FailureCode',
    'NoticeCode',
    'SuccessCode',
    'BaseCode',
]
