import asyncio
import argparse
import logging
import sys

from .config import load_config
from .dispatcher import BatchDispatcher
from .errors import ConfigError, FileReadError
from .logger import Logger
from .output_writer import OutputWriter
from .proxy import resolve_proxy
from .url_source import read_urls
from .worker import TitleFetcher


def build_parser():
    parser = argparse.ArgumentParser(prog="titlescan", description="titlescan: fetch page titles for a list of URLs.")
    parser.add_argument("-w", dest="urls_file", help="File containing URLs, one per line")
    parser.add_argument("-p", dest="proxy_url", default="", help="Proxy URL, e.g. http://host:port")
    parser.add_argument("--config", default=None, help="Config file path (default: config.yaml if present)")
    parser.add_argument("--verify-ssl", action="store_true", help="Verify TLS certificates even if the config disables it")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


async def main(argv=None, logger=None, output_writer=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logger = logger or Logger(debug=args.debug)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")
        logging.getLogger("aiohttp").setLevel(logging.DEBUG)

    try:
        if not args.urls_file:
            raise ConfigError("Please provide a file containing URLs with -w option.")
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(e)
        parser.print_usage(sys.stderr)
        return 2

    try:
        urls = read_urls(args.urls_file)
    except FileReadError as e:
        logger.error(e)
        return 1

    proxy_selector = resolve_proxy(args.proxy_url, logger)
    fetcher = TitleFetcher(
        logger,
        output_writer or OutputWriter(),
        timeout=config['timeout'],
        proxy_selector=proxy_selector,
        max_concurrency=config['max_concurrency'],
        disable_ssl_verification=config['disable_ssl_verification'] and not args.verify_ssl,
        user_agent=config['user_agent'],
    )
    dispatcher = BatchDispatcher(fetcher, batch_size=config['batch_size'])

    logger.info(f"Fetching titles for {len(urls)} URLs...")
    async with fetcher:
        await dispatcher.run(urls)
    logger.info("Processing complete.")
    return 0


def run():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        exit_code = loop.run_until_complete(main())
    finally:
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()
    sys.exit(exit_code)
