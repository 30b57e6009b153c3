"""
FastAPI application for the quote service.
Main application entry point for the API server.
"""

import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI

from utils import api_logger, config_manager

from .routes import router
from .middleware import setup_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    from quote_service import quote_service

    api_logger.info("[API] Starting Halo Quotes API...")
    await quote_service.initialize()

    yield

    api_logger.info("[API] Shutting down Halo Quotes API...")
    await quote_service.close()


def create_app() -> FastAPI:
    """创建FastAPI应用"""
    service_config = config_manager.get_quote_service_config()

    # 路由表即全部端点，不提供文档页面
    application = FastAPI(
        title=service_config.api_name,
        description="Random quotes from the Halo games, served from static JSON files",
        version=service_config.api_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    setup_middleware(application)
    application.include_router(router)
    return application


app = create_app()


def run(host: str = None, port: int = None, reload: bool = None):
    """启动API服务"""
    api_config = config_manager.get_api_config()
    host = host or api_config.host
    port = port or api_config.port
    reload = api_config.reload if reload is None else reload

    api_logger.info(f"[API] Starting server on {host}:{port}")

    # 开发模式
    if reload:
        uvicorn.run(
            "api.app:app",
            host=host,
            port=port,
            reload=True,
            log_level="info"
        )
    # 生产模式
    else:
        uvicorn.run(
            "api.app:app",
            host=host,
            port=port,
            workers=api_config.workers,
            log_level="info"
        )


if __name__ == "__main__":
    run()
