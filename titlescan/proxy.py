"""
Resolve the proxy policy once at startup and hand out a per-request selector.
"""

import ipaddress
import urllib.request
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

from .errors import ProxyParseError

ProxySelector = Callable[[str], Optional[str]]

PROXY_SCHEMES = ("http", "https")


def parse_proxy_url(proxy_url: str) -> str:
    """Validate ``proxy_url`` and return it unchanged.

    Raises:
        ProxyParseError: when the scheme is not http/https, the host is
            missing, or the port is not a valid number.
    """
    try:
        parts = urlsplit(proxy_url)
        port = parts.port
    except ValueError as e:
        raise ProxyParseError(f"Invalid proxy URL {proxy_url!r}: {e}") from e
    if parts.scheme not in PROXY_SCHEMES:
        raise ProxyParseError(f"Invalid proxy URL {proxy_url!r}: scheme must be http or https")
    if not parts.hostname:
        raise ProxyParseError(f"Invalid proxy URL {proxy_url!r}: missing host")
    if port == 0:
        raise ProxyParseError(f"Invalid proxy URL {proxy_url!r}: port 0")
    return proxy_url


def fixed_proxy(proxy_url: str) -> ProxySelector:
    def select(url: str) -> Optional[str]:
        return proxy_url
    return select


def _is_loopback(host: str) -> bool:
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _with_scheme(proxy: str) -> str:
    # bare host:port in *_proxy variables means a plain http proxy
    if proxy and "://" not in proxy:
        return f"http://{proxy}"
    return proxy


def environment_proxy(proxies: Optional[Dict[str, str]] = None) -> ProxySelector:
    """Snapshot the *_proxy environment variables into a selector.

    Loopback hosts and hosts matched by no_proxy always connect directly.
    """
    if proxies is None:
        proxies = urllib.request.getproxies()
    proxies = {scheme: _with_scheme(value) if scheme != "no" else value
               for scheme, value in proxies.items()}

    def select(url: str) -> Optional[str]:
        parts = urlsplit(url)
        proxy = proxies.get(parts.scheme)
        if not proxy:
            return None
        host = parts.hostname or ""
        if not host or _is_loopback(host):
            return None
        if urllib.request.proxy_bypass_environment(parts.netloc, proxies):
            return None
        return proxy

    return select


def resolve_proxy(proxy_url, logger) -> Optional[ProxySelector]:
    """Turn the -p flag into a selector.

    No flag means the environment policy. A malformed flag is logged and
    resolves to None, so requests go out directly instead of aborting the run.
    """
    if not proxy_url:
        return environment_proxy()
    try:
        return fixed_proxy(parse_proxy_url(proxy_url))
    except ProxyParseError as e:
        logger.error(f"{e}; continuing without a proxy")
        return None
