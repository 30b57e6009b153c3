"""
Middleware for the quote service API.
Provides request logging, CORS headers and preflight handling, the GET-only
method guard, and error-to-response mapping.
"""

import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from utils import api_logger
from utils.exceptions import QuoteServiceError, MethodNotAllowedError

from .responses import CORS_HEADERS, error_response

ALLOWED_METHODS = ("GET",)


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        api_logger.debug(f"[API] {request.method} {request.url}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url} - ERROR - {process_time:.3f}s - {str(e)}")
            raise

        process_time = time.time() - start_time
        api_logger.info(f"[API] {request.method} {request.url} - {response.status_code} - {process_time:.3f}s")

        # 添加处理时间到响应头
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """CORS中间件：处理预检请求，并为所有响应添加CORS头"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


class MethodGuardMiddleware(BaseHTTPMiddleware):
    """只允许GET请求（无论路径是否存在）"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method not in ALLOWED_METHODS:
            api_logger.warning(f"[API] Rejected {request.method} {request.url.path}")
            return error_response(MethodNotAllowedError(
                "Method not allowed. Only GET requests are supported.",
                context={'method': request.method}
            ))

        return await call_next(request)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except QuoteServiceError as e:
            if e.status_code >= 500:
                api_logger.error(f"[API] {e}")
            else:
                api_logger.warning(f"[API] {e}")
            return error_response(e)

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            return error_response(e)


def setup_middleware(app):
    """设置所有中间件"""
    # 后添加的中间件位于外层
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(MethodGuardMiddleware)
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    api_logger.info("[API] Middleware setup completed")
