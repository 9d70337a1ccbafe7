from typing import Optional

from k6_mcp.common.response.code.base_code import BaseCode

class ApiException(Exception):
    def __init__(self, code: BaseCode, message: str = None, hint: Optional[str] = None):
        self.code = code
        self.message = message or code.message()
        self.hint = hint
        super().__init__(self.message)
