from k6_mcp.common.response.code.base_code import BaseCode

class SuccessCode(BaseCode):
    SCRIPT_GENERATED = "K6 script generated and saved successfully"
    TEST_STARTED = "K6 test started successfully"
