"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    LoggingConfig,
    QuoteServiceConfig,
    ApiConfig
)
from .exceptions import (
    ErrorKind,
    HTTP_STATUS_BY_KIND,
    QuoteServiceError,
    MethodNotAllowedError,
    InvalidGameError,
    UpstreamFetchError,
    NoQuotesFoundError,
    MalformedResponseError,
    NotFoundError,
    ConfigurationError,
    ErrorCodes,
    http_status_for,
    error_message,
    create_error_response
)
from .logging_manager import (
    LogContext,
    log_execution,
    logging_manager,
    logger,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    api_logger,
    service_logger,
    source_logger,
    config_logger,
    cli_logger
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "LoggingConfig",
    "QuoteServiceConfig",
    "ApiConfig",

    # 异常处理
    "ErrorKind",
    "HTTP_STATUS_BY_KIND",
    "QuoteServiceError",
    "MethodNotAllowedError",
    "InvalidGameError",
    "UpstreamFetchError",
    "NoQuotesFoundError",
    "MalformedResponseError",
    "NotFoundError",
    "ConfigurationError",
    "ErrorCodes",
    "http_status_for",
    "error_message",
    "create_error_response",

    # 日志工具
    "LogContext",
    "log_execution",
    "logging_manager",
    "logger",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "api_logger",
    "service_logger",
    "source_logger",
    "config_logger",
    "cli_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
]
