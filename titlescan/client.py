import ssl

import aiohttp
import certifi


def create_ssl_context(disable_ssl_verification):
    """Return the ``ssl`` argument for aiohttp's connector."""
    if disable_ssl_verification:
        return False
    return ssl.create_default_context(cafile=certifi.where())


def create_session(disable_ssl_verification=False, user_agent=None):
    """Build the one ClientSession shared by every request in a run.

    The session carries no timeout and no pool limit; each request applies
    its own timeout. Environment proxies are not read here, the resolved
    selector is passed per request instead.
    """
    connector = aiohttp.TCPConnector(ssl=create_ssl_context(disable_ssl_verification), limit=0)
    headers = {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }
    if user_agent:
        headers["User-Agent"] = user_agent
    return aiohttp.ClientSession(connector=connector, headers=headers, trust_env=False)
