from k6_mcp.common.response.code.base_code import BaseCode

class FailureCode(BaseCode):
    SERVICE_UNAVAILABLE = "K6 App Server is not available"
    NOT_FOUND = "Test not found"
    VALIDATION_ERROR = "Invalid tool arguments"
    IO_FAILURE = "Failed to read or write file"
    UPSTREAM_ERROR = "K6 App Server returned an error"
    INTERNAL_ERROR = "Unexpected error"
