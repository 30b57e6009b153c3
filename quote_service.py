"""
Quote Service for the Halo quotes API.
Provides the business operations behind the HTTP endpoints: random quote
selection (for one game or across all games), per-game statistics gathered
by concurrent fetches, and the API info document.
"""

from __future__ import annotations
import asyncio
import random
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from utils import service_logger, config_manager, LogContext, error_message
from utils.config_manager import QuoteServiceConfig
from utils.exceptions import InvalidGameError, NoQuotesFoundError
from data_sources.game_registry import GameRegistry
from data_sources.quote_source import QuoteSource


ENDPOINTS = {
    '/quote': 'Get a random quote from all games',
    '/quote?game=<game-id>': 'Get a random quote from a specific game',
    '/stats': 'Get statistics about total quotes and quotes per game',
}


@dataclass(frozen=True)
class QuoteResult:
    """单条随机语录"""
    quote: str
    game: str
    game_id: str

    def to_dict(self) -> Dict[str, str]:
        return {'quote': self.quote, 'game': self.game, 'gameId': self.game_id}


@dataclass(frozen=True)
class GameStats:
    """单个游戏的统计结果（成功或失败记录）"""
    game_id: str
    game_name: str
    count: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        entry = {'gameName': self.game_name, 'count': self.count}
        if self.error is not None:
            entry['error'] = self.error
        return entry


@dataclass(frozen=True)
class StatsResult:
    """语录统计"""
    total_quotes: int
    total_games: int
    games: List[GameStats]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalQuotes': self.total_quotes,
            'totalGames': self.total_games,
            'quotesPerGame': {stats.game_id: stats.to_dict() for stats in self.games},
        }


def extract_quotes(data: Dict[str, Any], game_id: str) -> List[str]:
    """校验语录文件并返回语录列表"""
    quotes = data.get('quotes')
    if (not isinstance(quotes, list) or not quotes
            or not all(isinstance(quote, str) for quote in quotes)):
        raise NoQuotesFoundError(f"No quotes found in {game_id}", context={'game_id': game_id})
    return quotes


def game_name_for(data: Dict[str, Any], game_id: str) -> str:
    """语录文件中的游戏名称；缺失或不是字符串时使用游戏标识"""
    game_name = data.get('gameName')
    if isinstance(game_name, str) and game_name:
        return game_name
    return game_id


class QuoteService:
    """语录服务"""

    def __init__(self, config: QuoteServiceConfig = None, source: QuoteSource = None,
                 rng: random.Random = None):
        self.config = config or config_manager.get_quote_service_config()
        self.registry = GameRegistry.from_config(self.config)
        self.source = source or QuoteSource.from_config(self.config)
        self._rng = rng or random.Random()

    async def initialize(self):
        """初始化数据源连接"""
        await self.source.initialize()
        service_logger.info(f"[QuoteService] Initialized with {len(self.registry)} games")

    async def close(self):
        await self.source.close()

    # ------------------------------------------------------------------
    # 随机语录
    # ------------------------------------------------------------------

    async def get_random_quote(self, game_id: Optional[str] = None) -> QuoteResult:
        """获取随机语录；未指定游戏时从全部游戏中随机选择"""
        if game_id:
            return await self.get_random_quote_from_game(game_id)
        return await self.get_random_quote_from_all_games()

    async def get_random_quote_from_game(self, game_id: str) -> QuoteResult:
        """从指定游戏中获取随机语录"""
        filename = self.registry.filename_for(game_id)
        if filename is None:
            raise InvalidGameError(
                f"Invalid game: {game_id}. Available games: {', '.join(self.registry.game_ids())}",
                context={'game_id': game_id}
            )
        return await self._random_quote_from_file(game_id, filename)

    async def get_random_quote_from_all_games(self) -> QuoteResult:
        """从全部游戏中获取随机语录（按游戏均匀选择，不按语录数量加权）"""
        game_id, filename = self._rng.choice(self.registry.entries())
        return await self._random_quote_from_file(game_id, filename)

    async def _random_quote_from_file(self, game_id: str, filename: str) -> QuoteResult:
        with LogContext("QuoteService", "random_quote", game_id=game_id):
            data = await self.source.fetch_quote_file(filename=filename)
            quotes = extract_quotes(data, game_id)

        return QuoteResult(
            quote=self._rng.choice(quotes),
            game=game_name_for(data, game_id),
            game_id=game_id
        )

    # ------------------------------------------------------------------
    # 统计
    # ------------------------------------------------------------------

    async def get_stats(self) -> StatsResult:
        """并发获取所有游戏文件并汇总语录数量"""
        with LogContext("QuoteService", "stats"):
            results = await asyncio.gather(*[
                self._fetch_game_stats(game_id, filename)
                for game_id, filename in self.registry
            ])

        failed = [stats.game_id for stats in results if not stats.ok]
        if failed:
            service_logger.warning(f"[QuoteService] Stats degraded, failed games: {', '.join(failed)}")

        # gather 保持提交顺序，即注册表顺序
        return StatsResult(
            total_quotes=sum(stats.count for stats in results),
            total_games=len(self.registry),
            games=list(results)
        )

    async def _fetch_game_stats(self, game_id: str, filename: str) -> GameStats:
        """单个游戏的统计；失败时返回失败记录而不是抛出异常"""
        try:
            data = await self.source.fetch_quote_file(filename=filename)
        except Exception as e:
            return GameStats(game_id=game_id, game_name=game_id, count=0, error=error_message(e))

        quotes = data.get('quotes')
        return GameStats(
            game_id=game_id,
            game_name=game_name_for(data, game_id),
            count=len(quotes) if isinstance(quotes, list) else 0
        )

    # ------------------------------------------------------------------
    # API信息
    # ------------------------------------------------------------------

    def get_api_info(self) -> Dict[str, Any]:
        """API信息文档"""
        example_game = 'halo-2' if 'halo-2' in self.registry else self.registry.game_ids()[0]
        return {
            'name': self.config.api_name,
            'version': self.config.api_version,
            'endpoints': dict(ENDPOINTS),
            'availableGames': self.registry.game_ids(),
            'example': f'/quote?game={example_game}',
        }


# 全局语录服务实例
quote_service = QuoteService()
