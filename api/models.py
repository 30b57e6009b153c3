"""
API data models for the quote service.
Pydantic models describing every JSON body the API returns.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class QuoteResponse(BaseModel):
    """随机语录响应模型"""
    model_config = ConfigDict(populate_by_name=True)

    quote: str = Field(..., description="语录内容")
    game: str = Field(..., description="游戏名称")
    game_id: str = Field(..., alias="gameId", description="游戏标识")


class GameStatsEntry(BaseModel):
    """单个游戏统计"""
    model_config = ConfigDict(populate_by_name=True)

    game_name: str = Field(..., alias="gameName", description="游戏名称")
    count: int = Field(..., ge=0, description="语录数量")
    error: Optional[str] = Field(None, description="获取失败时的错误信息")


class StatsResponse(BaseModel):
    """语录统计响应模型"""
    model_config = ConfigDict(populate_by_name=True)

    total_quotes: int = Field(..., alias="totalQuotes", ge=0, description="语录总数")
    total_games: int = Field(..., alias="totalGames", ge=0, description="游戏总数")
    quotes_per_game: Dict[str, GameStatsEntry] = Field(
        ..., alias="quotesPerGame", description="按发行顺序排列的每个游戏统计"
    )


class ApiInfoResponse(BaseModel):
    """API信息响应模型"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="API名称")
    version: str = Field(..., description="API版本")
    endpoints: Dict[str, str] = Field(..., description="端点说明")
    available_games: List[str] = Field(..., alias="availableGames", description="可用游戏标识")
    example: str = Field(..., description="示例请求")
