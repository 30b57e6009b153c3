"""
Main entry point for the Halo quotes service.
Provides command-line interface and system initialization.
"""

import asyncio
import argparse
import json
import sys
from typing import List, Optional

from utils import cli_logger, config_manager, initialize_logging, QuoteServiceError


def create_parser():
    """创建命令行参数解析器"""
    api_config = config_manager.get_api_config()

    parser = argparse.ArgumentParser(
        description="Halo Quotes API - 随机游戏语录服务",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py serve --host 0.0.0.0 --port 8000  # 启动API服务器
  python main.py quote                            # 从全部游戏中随机获取一条语录
  python main.py quote --game halo-2              # 从指定游戏获取语录
  python main.py stats                            # 显示语录统计
  python main.py games                            # 列出所有游戏
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # API服务器
    serve_parser = subparsers.add_parser('serve', help='启动API服务器')
    serve_parser.add_argument('--host', default=api_config.host,
                              help=f'监听地址 (默认: {api_config.host})')
    serve_parser.add_argument('--port', type=int, default=api_config.port,
                              help=f'监听端口 (默认: {api_config.port})')
    serve_parser.add_argument('--reload', action='store_true', help='开发模式，代码变更时自动重载')

    # 随机语录
    quote_parser = subparsers.add_parser('quote', help='获取随机语录')
    quote_parser.add_argument('--game', type=str, help='游戏标识 (如: halo-2)')

    # 统计
    subparsers.add_parser('stats', help='显示语录统计')

    # 游戏列表
    subparsers.add_parser('games', help='列出注册的游戏')

    return parser


async def run_quote(game: Optional[str]) -> dict:
    from quote_service import quote_service

    try:
        result = await quote_service.get_random_quote(game)
    finally:
        await quote_service.close()
    return result.to_dict()


async def run_stats() -> dict:
    from quote_service import quote_service

    try:
        stats = await quote_service.get_stats()
    finally:
        await quote_service.close()
    return stats.to_dict()


def list_games() -> List[dict]:
    from quote_service import quote_service

    return [{'id': game_id, 'file': filename} for game_id, filename in quote_service.registry]


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    initialize_logging()

    try:
        if args.command == 'serve':
            from api.app import run
            run(host=args.host, port=args.port, reload=args.reload or None)

        elif args.command == 'quote':
            print(json.dumps(asyncio.run(run_quote(args.game)), ensure_ascii=False, indent=2))

        elif args.command == 'stats':
            print(json.dumps(asyncio.run(run_stats()), ensure_ascii=False, indent=2))

        elif args.command == 'games':
            for game in list_games():
                print(f"{game['id']:<20} {game['file']}")

        else:
            parser.print_help()

    except KeyboardInterrupt:
        cli_logger.info("[Main] Received keyboard interrupt")
    except QuoteServiceError as e:
        cli_logger.error(f"[Main] {e.message}")
        return 1
    except Exception as e:
        cli_logger.error(f"[Main] System error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
