import asyncio

import aiohttp
from yarl import URL

from .client import create_session
from .errors import RequestBuildError
from .logger import Logger
from .title_extractor import extract_title

REQUEST_TIMEOUT = 10


def build_request_url(url):
    """Parse a line from the URL list into an absolute http(s) URL."""
    if not url:
        raise RequestBuildError("empty URL")
    try:
        target = URL(url)
    except (ValueError, TypeError) as e:
        raise RequestBuildError(str(e)) from e
    if target.scheme not in ("http", "https"):
        raise RequestBuildError(f"unsupported protocol scheme {target.scheme!r}")
    if not target.host:
        raise RequestBuildError("no host in request URL")
    return target


class TitleFetcher:
    def __init__(self, logger: Logger, output_writer, timeout=REQUEST_TIMEOUT, proxy_selector=None,
                 max_concurrency=None, disable_ssl_verification=False, user_agent=None, session=None):
        self.logger = logger
        self.output_writer = output_writer
        self.timeout = timeout
        self.proxy_selector = proxy_selector
        self.semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
        self.disable_ssl_verification = disable_ssl_verification
        self.user_agent = user_agent
        self.session = session
        self._owns_session = session is None
        if disable_ssl_verification:
            self.logger.warning("TLS certificate verification is disabled for all requests.")

    async def __aenter__(self):
        if self.session is None:
            self.session = create_session(self.disable_ssl_verification, self.user_agent)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    def process_batch(self, batch, tracker):
        """Spawn one tracked unit per URL in ``batch`` and return immediately."""
        for url in batch:
            tracker.spawn(self.fetch_title(url))

    async def fetch_title(self, url):
        """GET ``url`` and print its title. Failures are logged, never raised."""
        try:
            if self.semaphore is None:
                body = await self._get_body(url)
            else:
                async with self.semaphore:
                    body = await self._get_body(url)
            if body is None:
                return
            self.output_writer.write_title(extract_title(body), url)
        except Exception as e:
            self.logger.error(f"Unexpected error for URL {url}: {e!r}")

    async def _get_body(self, url):
        try:
            target = build_request_url(url)
        except RequestBuildError as e:
            self.logger.error(f"Error creating request for URL {url!r}: {e}")
            return None

        proxy = self.proxy_selector(url) if self.proxy_selector else None
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            # the response is released when this block exits, before any parsing
            async with self.session.get(target, proxy=proxy, timeout=timeout) as response:
                self.logger.debug(f"{url} - {response.status}")
                try:
                    return await response.read()
                except asyncio.TimeoutError:
                    self.logger.error(f"Timeout reading response body for URL {url} after {self.timeout}s")
                except aiohttp.ClientError as e:
                    self.logger.error(f"Error reading response body for URL {url}: {e}")
                return None
        except asyncio.TimeoutError:
            self.logger.error(f"Timeout sending request for URL {url} after {self.timeout}s")
        except aiohttp.ClientError as e:
            self.logger.error(f"Error sending request for URL {url}: {e}")
        return None
