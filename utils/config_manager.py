"""
统一的配置管理模块
整合底层配置操作和应用层类型安全访问
"""

import json
import logging
import os
from typing import Any, Optional, Dict, Tuple, TypeVar
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError, ErrorCodes
from .path_utils import CONFIG_DIR

# 获取配置专用日志器
config_logger = logging.getLogger("Config")

# 为泛型类型定义一个TypeVar
T = TypeVar('T')

DEFAULT_BASE_URL = "https://haloquotes.teamrespawntv.com/quotes"

# 按游戏发行时间排序
DEFAULT_GAMES: Tuple[Tuple[str, str], ...] = (
    ("halo-ce", "halo-ce.json"),
    ("halo-2", "halo-2.json"),
    ("halo-3", "halo-3.json"),
    ("halo-wars", "halo-wars.json"),
    ("halo-odst", "halo-odst.json"),
    ("halo-reach", "halo-reach.json"),
    ("halo-4", "halo-4.json"),
    ("halo-5", "halo-5.json"),
    ("halo-wars-2", "halo-wars-2.json"),
    ("halo-infinite", "halo-infinite.json"),
    ("halo-multiplayer", "halo-multiplayer.json"),
)

# ============================================================================
# 配置数据类型定义
# ============================================================================

@dataclass
class LoggingModuleConfig:
    """模块日志配置"""
    level: str = "INFO"
    enabled: bool = True

@dataclass
class FileLoggingConfig:
    """文件日志配置"""
    enabled: bool = True
    directory: str = "log"
    filename: str = "sys.log"
    rotation: Optional[Dict[str, Any]] = None

@dataclass
class ConsoleLoggingConfig:
    """控制台日志配置"""
    enabled: bool = True

@dataclass
class LoggingConfig:
    """完整日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_config: FileLoggingConfig = field(default_factory=FileLoggingConfig)
    console_config: ConsoleLoggingConfig = field(default_factory=ConsoleLoggingConfig)
    modules: Dict[str, LoggingModuleConfig] = field(default_factory=dict)

@dataclass(frozen=True)
class QuoteServiceConfig:
    """语录服务配置（只读）"""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0
    games: Tuple[Tuple[str, str], ...] = DEFAULT_GAMES
    api_name: str = "Halo Quotes API"
    api_version: str = "1.0.0"

@dataclass(frozen=True)
class ApiConfig:
    """API配置"""
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    reload: bool = False


# ============================================================================
# 统一配置管理器
# ============================================================================

class UnifiedConfigManager:
    """统一配置管理器 - 整合底层操作和应用层抽象"""

    def __init__(self, config_dir: Optional[str] = None):
        self._config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self._config_data: Dict[str, Any] = {}

        # 类型化配置缓存
        self._typed_cache: Dict[str, Any] = {}

        # 初始化配置
        self._load_config()

    def _load_config(self) -> None:
        """加载配置文件"""
        merged_config = {}
        config_logger.info(f"Loading configuration from directory: {self._config_dir}")

        if not self._config_dir.is_dir():
            # 没有配置目录时使用内置默认值
            config_logger.warning(f"Configuration directory not found, using defaults: {self._config_dir}")
            self._config_data = {}
            self._typed_cache.clear()
            return

        # 按文件名排序加载，确保加载顺序一致
        config_files = sorted(self._config_dir.glob('*.json'))
        for config_file in config_files:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                ) from e
            except OSError as e:
                raise ConfigurationError(
                    f"Failed to read configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_LOAD_ERROR
                ) from e

            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file.name} must contain a JSON object",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )
            merged_config.update(data)
            config_logger.debug(f"Loaded and merged: {config_file.name}")

        self._config_data = merged_config
        config_logger.info(f"Configuration loaded and merged from {len(config_files)} files.")
        # 清除类型化缓存
        self._typed_cache.clear()

    def reload_config(self) -> None:
        """重新加载配置"""
        config_logger.info("Reloading configuration...")
        self._load_config()

    # ========================================================================
    # 底层访问方法
    # ========================================================================

    def get_nested(self, path: str, default: Optional[T] = None) -> Optional[T]:
        """获取嵌套配置值，支持点分隔路径"""
        keys = path.split('.')
        current = self._config_data

        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    # ========================================================================
    # 类型安全访问方法
    # ========================================================================

    def get_logging_config(self) -> LoggingConfig:
        """获取日志配置（类型安全）"""
        if 'logging_config' not in self._typed_cache:
            logging_data = self.get_nested('logging_config', {})

            file_data = logging_data.get('file_config', {})
            file_config = FileLoggingConfig(
                enabled=file_data.get('enabled', True),
                directory=file_data.get('directory', 'log'),
                filename=file_data.get('filename', 'sys.log'),
                rotation=file_data.get('rotation')
            )

            console_data = logging_data.get('console_config', {})
            console_config = ConsoleLoggingConfig(
                enabled=console_data.get('enabled', True)
            )

            modules = {}
            for module_name, module_data in logging_data.get('modules', {}).items():
                modules[module_name] = LoggingModuleConfig(
                    level=module_data.get('level', 'INFO'),
                    enabled=module_data.get('enabled', True)
                )

            defaults = LoggingConfig()
            self._typed_cache['logging_config'] = LoggingConfig(
                level=os.environ.get('LOG_LEVEL') or logging_data.get('level', defaults.level),
                format=logging_data.get('format', defaults.format),
                date_format=logging_data.get('date_format', defaults.date_format),
                file_config=file_config,
                console_config=console_config,
                modules=modules
            )

        return self._typed_cache['logging_config']

    def get_quote_service_config(self) -> QuoteServiceConfig:
        """获取语录服务配置（类型安全）"""
        if 'quote_service_config' not in self._typed_cache:
            service_data = self.get_nested('quote_service_config', {})
            defaults = QuoteServiceConfig()

            games_data = service_data.get('games')
            if games_data is None:
                games = defaults.games
            else:
                games = self._parse_games(games_data)

            base_url = os.environ.get('QUOTES_BASE_URL') or service_data.get('base_url', defaults.base_url)

            self._typed_cache['quote_service_config'] = QuoteServiceConfig(
                base_url=base_url.rstrip('/'),
                request_timeout=float(service_data.get('request_timeout', defaults.request_timeout)),
                games=games,
                api_name=service_data.get('api_name', defaults.api_name),
                api_version=service_data.get('api_version', defaults.api_version)
            )

        return self._typed_cache['quote_service_config']

    def get_api_config(self) -> ApiConfig:
        """获取API配置（类型安全）"""
        if 'api_config' not in self._typed_cache:
            api_data = self.get_nested('api_config', {})
            defaults = ApiConfig()
            self._typed_cache['api_config'] = ApiConfig(
                host=api_data.get('host', defaults.host),
                port=int(api_data.get('port', defaults.port)),
                workers=int(api_data.get('workers', defaults.workers)),
                reload=bool(api_data.get('reload', defaults.reload))
            )

        return self._typed_cache['api_config']

    @staticmethod
    def _parse_games(games_data: Any) -> Tuple[Tuple[str, str], ...]:
        """解析游戏注册表配置"""
        if not isinstance(games_data, list) or not games_data:
            raise ConfigurationError(
                "quote_service_config.games must be a non-empty list",
                ErrorCodes.CONFIG_INVALID_FORMAT
            )

        games = []
        for entry in games_data:
            if not isinstance(entry, dict) or 'id' not in entry or 'file' not in entry:
                raise ConfigurationError(
                    f"Invalid game entry (expected {{'id', 'file'}}): {entry!r}",
                    ErrorCodes.CONFIG_MISSING_KEY
                )
            games.append((str(entry['id']), str(entry['file'])))

        return tuple(games)

    # ========================================================================
    # 便捷方法
    # ========================================================================

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """从字典更新配置"""
        self._config_data.update(config_dict)
        self._typed_cache.clear()
        config_logger.info("Configuration updated from dict")


# ============================================================================
# 全局单例实例
# ============================================================================

config_manager = UnifiedConfigManager()
