"""
Game registry for the quote service.
Immutable, ordered mapping from game identifier to remote quote filename.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from utils.config_manager import QuoteServiceConfig
from utils.exceptions import ConfigurationError, ErrorCodes


class GameRegistry:
    """游戏注册表（只读，保持发行顺序）"""

    __slots__ = ('_entries', '_files')

    def __init__(self, entries: Iterable[Tuple[str, str]]):
        entries = tuple((str(game_id), str(filename)) for game_id, filename in entries)
        if not entries:
            raise ConfigurationError("Game registry must contain at least one game",
                                     ErrorCodes.CONFIG_MISSING_KEY)

        files = {}
        for game_id, filename in entries:
            if game_id in files:
                raise ConfigurationError(f"Duplicate game identifier in registry: {game_id}",
                                         ErrorCodes.CONFIG_INVALID_FORMAT)
            files[game_id] = filename

        object.__setattr__(self, '_entries', entries)
        object.__setattr__(self, '_files', MappingProxyType(files))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is read-only")

    @classmethod
    def from_config(cls, config: QuoteServiceConfig) -> "GameRegistry":
        """从服务配置构建注册表"""
        return cls(config.games)

    @property
    def files(self) -> Mapping[str, str]:
        """标识到文件名的只读映射"""
        return self._files

    def game_ids(self) -> List[str]:
        """按发行顺序返回游戏标识"""
        return [game_id for game_id, _ in self._entries]

    def entries(self) -> Tuple[Tuple[str, str], ...]:
        return self._entries

    def filename_for(self, game_id: str) -> Optional[str]:
        """精确匹配（区分大小写）"""
        return self._files.get(game_id)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._files

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"GameRegistry({', '.join(self.game_ids())})"
