"""
API routes for the quote service.
Defines the endpoint table: API info, random quote, stats and the 404 fallback.
"""

from fastapi import APIRouter, Request

from quote_service import quote_service
from utils.exceptions import NotFoundError
from .models import ApiInfoResponse, QuoteResponse, StatsResponse
from .responses import PrettyJSONResponse

router = APIRouter()


@router.get("/", response_class=PrettyJSONResponse, tags=["System"])
async def api_info():
    """API信息"""
    info = ApiInfoResponse.model_validate(quote_service.get_api_info())
    return PrettyJSONResponse(info.model_dump(by_alias=True))


@router.get("/quote", response_class=PrettyJSONResponse, tags=["Quotes"])
@router.get("/quote/", response_class=PrettyJSONResponse, include_in_schema=False)
async def get_random_quote(request: Request):
    """获取随机语录；game 参数重复时取第一个值"""
    games = request.query_params.getlist("game")
    result = await quote_service.get_random_quote(games[0] if games else None)
    quote = QuoteResponse.model_validate(result.to_dict())
    return PrettyJSONResponse(quote.model_dump(by_alias=True))


@router.get("/stats", response_class=PrettyJSONResponse, tags=["Quotes"])
@router.get("/stats/", response_class=PrettyJSONResponse, include_in_schema=False)
async def get_stats():
    """获取语录统计"""
    stats = await quote_service.get_stats()
    response = StatsResponse.model_validate(stats.to_dict())
    return PrettyJSONResponse(response.model_dump(by_alias=True, exclude_none=True))


# 必须最后注册
@router.get("/{path:path}", include_in_schema=False)
async def not_found(path: str):
    """未知路径"""
    raise NotFoundError(
        "Not found. Available endpoints: /quote, /stats",
        context={'path': path}
    )
