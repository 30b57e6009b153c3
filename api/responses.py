"""
Response helpers for the quote service API.
"""

import json
from typing import Any, Dict

from fastapi.responses import JSONResponse

from utils.exceptions import create_error_response, http_status_for, QuoteServiceError, ErrorKind

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Content-Type": "application/json",
}


class PrettyJSONResponse(JSONResponse):
    """两空格缩进的JSON响应"""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def error_response(error: BaseException) -> JSONResponse:
    """根据异常类型生成错误响应"""
    if isinstance(error, QuoteServiceError):
        status_code = error.status_code
    else:
        status_code = http_status_for(ErrorKind.INTERNAL)

    return JSONResponse(status_code=status_code, content=create_error_response(error))
