"""
todosync - Main Application

  todosync serve   run the todo Remote Store (Flask)
  todosync shell   run the console client against a Remote Store
"""

import argparse
import asyncio
import logging
import os
import sys

from todosync.client.api import TodoApiClient
from todosync.config import Config
from todosync.core.cache import LocalCache
from todosync.core.notifier import Notifier
from todosync.core.synchronizer import TodoSynchronizer
from todosync.ui.console import TodoConsole
from todosync.web.store import TodoStore
from todosync.web.webserver import TodoWebServer


def setup_logging(config: Config):
    """Configure logging"""
    log_level = getattr(logging, str(config.get('logging.level', 'INFO')).upper(), logging.INFO)
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = []

    # Console handler
    if config.get('logging.console', True):
        handlers.append(logging.StreamHandler())

    # File handler
    log_file = config.get('logging.file')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=handlers
    )


def serve(config: Config):
    """Run the Remote Store server in the foreground"""
    store = TodoStore(seed=config.get('server.seed', True))
    server = TodoWebServer(
        store,
        host=config.get('server.host', '127.0.0.1'),
        port=config.get('server.port', 3000)
    )
    server.serve_forever()


async def run_shell(config: Config, clear_cache: bool = False):
    """Run the console client until the user quits"""
    console = TodoConsole()
    notifier = Notifier(
        duration=config.get('notifier.duration', 3.0),
        sink=console.show_toast
    )
    cache = LocalCache(config.get('cache.file'))
    if clear_cache:
        cache.clear()

    async with TodoApiClient(config.get('client.base_url'),
                             timeout=config.get('client.timeout', 10.0)) as api:
        console.synchronizer = TodoSynchronizer(
            api, cache, notifier,
            on_render=console.show_view,
            on_loading=console.show_loading
        )
        await console.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='todosync', description='Todo list with optimistic sync')
    parser.add_argument(
        '-c', '--config',
        default=os.environ.get('TODOSYNC_CONFIG'),
        help='Path to config.yaml (default: $TODOSYNC_CONFIG or built-in defaults)'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    serve_parser = subparsers.add_parser('serve', help='Run the todo API server')
    serve_parser.add_argument('--host', help='Interface to bind')
    serve_parser.add_argument('--port', type=int, help='Port to listen on')
    serve_parser.add_argument('--no-seed', action='store_true', help='Start with an empty list')

    shell_parser = subparsers.add_parser('shell', help='Run the console client')
    shell_parser.add_argument('--url', help='Base URL of the todo API')
    shell_parser.add_argument('--cache', help='Path to the local cache file')
    shell_parser.add_argument('--clear-cache', action='store_true',
                              help='Discard the cached snapshot before loading')

    return parser


def apply_overrides(config: Config, args: argparse.Namespace):
    """Copy command line options into the configuration"""
    if args.command == 'serve':
        if args.host:
            config.set('server.host', args.host)
        if args.port:
            config.set('server.port', args.port)
        if args.no_seed:
            config.set('server.seed', False)
    else:
        if args.url:
            config.set('client.base_url', args.url)
        if args.cache:
            config.set('cache.file', os.path.expandvars(os.path.expanduser(args.cache)))
        # Keep log lines out of the interactive screen unless a file is configured
        config.set('logging.console', False)


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.config)
    except FileNotFoundError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    apply_overrides(config, args)
    setup_logging(config)
    logger = logging.getLogger(__name__)

    try:
        if args.command == 'serve':
            serve(config)
        else:
            asyncio.run(run_shell(config, clear_cache=args.clear_cache))
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")


if __name__ == '__main__':
    main()
