"""
统一异常定义模块
提供带类型标记的异常类，以及错误类型到HTTP状态码的映射
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """错误类型枚举"""
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_GAME = "INVALID_GAME"
    UPSTREAM_FETCH_FAILURE = "UPSTREAM_FETCH_FAILURE"
    NO_QUOTES_FOUND = "NO_QUOTES_FOUND"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


# 每种错误类型对应唯一的状态码
HTTP_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INVALID_GAME: 400,
    ErrorKind.UPSTREAM_FETCH_FAILURE: 500,
    ErrorKind.NO_QUOTES_FOUND: 500,
    ErrorKind.MALFORMED_RESPONSE: 500,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class QuoteServiceError(Exception):
    """语录服务基础异常类"""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, kind: Optional[ErrorKind] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.context = context or {}

    @property
    def status_code(self) -> int:
        return http_status_for(self.kind)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class MethodNotAllowedError(QuoteServiceError):
    """请求方法不被允许"""
    kind = ErrorKind.METHOD_NOT_ALLOWED


class InvalidGameError(QuoteServiceError):
    """游戏标识不在注册表中"""
    kind = ErrorKind.INVALID_GAME


class UpstreamFetchError(QuoteServiceError):
    """上游静态文件获取失败"""
    kind = ErrorKind.UPSTREAM_FETCH_FAILURE


class NoQuotesFoundError(QuoteServiceError):
    """语录文件中没有可用语录"""
    kind = ErrorKind.NO_QUOTES_FOUND


class MalformedResponseError(QuoteServiceError):
    """上游返回的内容无法解析"""
    kind = ErrorKind.MALFORMED_RESPONSE


class NotFoundError(QuoteServiceError):
    """路径不存在"""
    kind = ErrorKind.NOT_FOUND


class ConfigurationError(Exception):
    """配置相关错误"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_MISSING_KEY = "CONFIG_003"
    CONFIG_LOAD_ERROR = "CONFIG_004"


def http_status_for(kind: ErrorKind) -> int:
    """根据错误类型获取HTTP状态码"""
    try:
        return HTTP_STATUS_BY_KIND[kind]
    except KeyError:
        raise ValueError(f"Unmapped error kind: {kind}") from None


def error_message(error: BaseException) -> str:
    """获取用于响应体的错误信息"""
    if isinstance(error, QuoteServiceError):
        return error.message or "Internal server error"
    return str(error) or "Internal server error"


def create_error_response(error: BaseException) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    return {"error": error_message(error)}
