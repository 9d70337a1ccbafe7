from k6_mcp.common.response.code.base_code import BaseCode

class NoticeCode(BaseCode):
    # 변환기가 아직 구현되지 않은 소스 (har, openapi)
    SCOPE_LIMITATION = (
        "Placeholder script: conversion from this source is not implemented yet. "
        "The generated script only logs a message and sleeps; it does not exercise the target."
    )
