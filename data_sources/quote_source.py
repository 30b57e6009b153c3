"""
Static quote-file source for the quote service.
Fetches per-game quote JSON documents from the remote static-file origin.
"""

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from utils import source_logger, log_execution
from utils.config_manager import QuoteServiceConfig
from utils.exceptions import UpstreamFetchError, MalformedResponseError


class QuoteSource:
    """远程静态语录文件数据源"""

    def __init__(self, base_url: str, request_timeout: float = 30.0):
        self.base_url = base_url.rstrip('/')
        self.request_timeout = request_timeout
        self.aio_session: Optional[aiohttp.ClientSession] = None
        self.user_agent = "halo-quotes-api/1.0"

    @classmethod
    def from_config(cls, config: QuoteServiceConfig) -> "QuoteSource":
        return cls(config.base_url, config.request_timeout)

    async def initialize(self):
        """创建异步HTTP会话"""
        if self.aio_session is not None and not self.aio_session.closed:
            return

        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        connector = aiohttp.TCPConnector(
            limit=32,
            limit_per_host=16,
            keepalive_timeout=30,
            enable_cleanup_closed=True
        )
        self.aio_session = aiohttp.ClientSession(
            timeout=timeout,
            connector=connector,
            headers={'User-Agent': self.user_agent, 'Accept': 'application/json'}
        )
        source_logger.info(f"[QuoteSource] HTTP session opened for {self.base_url}")

    async def close(self):
        """关闭HTTP会话"""
        if self.aio_session is not None:
            await self.aio_session.close()
            self.aio_session = None
            source_logger.info("[QuoteSource] HTTP session closed")

    def url_for(self, filename: str) -> str:
        return f"{self.base_url}/{filename}"

    @log_execution("QuoteSource", "fetch_quote_file")
    async def fetch_quote_file(self, filename: str) -> Dict[str, Any]:
        """获取并解析单个语录文件"""
        if self.aio_session is None or self.aio_session.closed:
            await self.initialize()

        url = self.url_for(filename)
        try:
            async with self.aio_session.get(url) as response:
                if not 200 <= response.status < 300:
                    source_logger.warning(f"[QuoteSource] {url} returned {response.status} {response.reason}")
                    raise UpstreamFetchError(
                        f"Failed to fetch quotes: {response.status} {response.reason}",
                        context={'url': url, 'status': response.status}
                    )

                try:
                    data = await response.json(content_type=None)
                except (json.JSONDecodeError, UnicodeDecodeError) as e:
                    raise MalformedResponseError(
                        f"Malformed JSON in {filename}: {e}",
                        context={'url': url}
                    ) from e

        except asyncio.TimeoutError as e:
            source_logger.warning(f"[QuoteSource] Timed out fetching {url}")
            raise UpstreamFetchError(
                f"Failed to fetch quotes: timed out after {self.request_timeout}s",
                context={'url': url}
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Malformed quote file {filename}: expected a JSON object",
                context={'url': url}
            )

        return data
