from .test_request import (
    RunTestRequest,
    OutputRequest
)
