import pytest

from titlescan.errors import ProxyParseError
from titlescan.proxy import environment_proxy, parse_proxy_url, resolve_proxy


@pytest.mark.parametrize("proxy_url", ["::::", "proxy.local:8080", "socks5://proxy.local:1080",
                                       "http://", "http://proxy.local:notaport", "http://[::1"])
def test_parse_proxy_url_rejects_malformed(proxy_url):
    with pytest.raises(ProxyParseError):
        parse_proxy_url(proxy_url)


def test_explicit_proxy_applies_to_every_url(logger):
    select = resolve_proxy("http://127.0.0.1:8080", logger)
    assert select("http://example.com/") == "http://127.0.0.1:8080"
    assert select("https://example.org/page") == "http://127.0.0.1:8080"


def test_malformed_proxy_degrades_to_direct(logger, log_stream):
    assert resolve_proxy("::::", logger) is None
    assert "Invalid proxy URL" in log_stream.getvalue()
    assert "continuing without a proxy" in log_stream.getvalue()


def test_no_flag_uses_environment(monkeypatch, logger):
    monkeypatch.setenv("http_proxy", "http://envproxy:3128")
    monkeypatch.delenv("HTTP_PROXY", raising=False)
    monkeypatch.delenv("no_proxy", raising=False)
    monkeypatch.delenv("NO_PROXY", raising=False)
    select = resolve_proxy("", logger)
    assert select("http://example.com/") == "http://envproxy:3128"


def test_environment_policy_is_snapshotted_once(monkeypatch):
    monkeypatch.setenv("http_proxy", "http://first:3128")
    for name in ("HTTP_PROXY", "no_proxy", "NO_PROXY"):
        monkeypatch.delenv(name, raising=False)
    select = environment_proxy()
    monkeypatch.setenv("http_proxy", "http://second:3128")
    assert select("http://example.com/") == "http://first:3128"


def test_environment_policy_bypasses():
    select = environment_proxy({"http": "http://envproxy:3128", "no": "internal.example"})
    assert select("http://example.com/") == "http://envproxy:3128"
    assert select("http://internal.example/") is None
    assert select("http://localhost:8000/") is None
    assert select("http://127.0.0.1:8000/") is None
    assert select("https://example.com/") is None


def test_empty_environment_means_direct():
    select = environment_proxy({})
    assert select("http://example.com/") is None


def test_environment_proxy_without_scheme_defaults_to_http():
    select = environment_proxy({"http": "proxy.corp:3128", "https": "https://secure.corp:443",
                                "no": "internal.example"})
    assert select("http://example.com/") == "http://proxy.corp:3128"
    assert select("https://example.com/") == "https://secure.corp:443"
    assert select("http://internal.example/") is None
