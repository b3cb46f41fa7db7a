"""Outbound HTTP client construction.

Turns a handful of flags (proxy, IPv4-only, TLS verification, HTTP/2) into
a ready-to-use :class:`requests.Session` shared by every call of a client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter

from botapi.exceptions import ConfigurationError

logger = logging.getLogger("botapi.transport")

# Binding the local end to the IPv4 wildcard makes every AF_INET6 candidate
# returned by getaddrinfo fail to bind, so only IPv4 connections succeed.
_IPV4_SOURCE_ADDRESS = ("0.0.0.0", 0)


@dataclass
class TransportConfig:
    """Flags for :func:`build_session`.

    Attributes:
        proxy: Proxy URL (``http://``, ``https://``, ``socks5://``...).
        force_ipv4: Restrict outbound connections to IPv4.
        disable_ssl_verify: Skip TLS certificate verification. Off by default.
        force_http2: Ask for HTTP/2. ``requests`` speaks HTTP/1.1, which is
            the fallback the flag allows; a warning is logged.
    """

    proxy: Optional[str] = None
    force_ipv4: bool = False
    disable_ssl_verify: bool = False
    force_http2: bool = False


class IPv4Adapter(HTTPAdapter):
    """HTTP adapter whose connection pools only dial IPv4 addresses."""

    def init_poolmanager(self, *args, **kwargs):
        kwargs["source_address"] = _IPV4_SOURCE_ADDRESS
        return super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["source_address"] = _IPV4_SOURCE_ADDRESS
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def parse_proxy(proxy: str) -> str:
    """Validate *proxy* and return it unchanged.

    Raises:
        ConfigurationError: If the URL has no scheme or host.
    """
    try:
        parsed = urlparse(proxy)
        parsed.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise ConfigurationError(f"invalid proxy URL {proxy!r}: {exc}") from exc
    if not parsed.scheme or not parsed.hostname:
        raise ConfigurationError(f"invalid proxy URL {proxy!r}")
    return proxy


def build_session(config: Optional[TransportConfig] = None) -> requests.Session:
    """Create the shared :class:`requests.Session` described by *config*."""
    config = config or TransportConfig()
    session = requests.Session()

    if config.proxy:
        proxy = parse_proxy(config.proxy)
        session.proxies = {"http": proxy, "https": proxy}

    if config.force_ipv4:
        adapter = IPv4Adapter()
        session.mount("https://", adapter)
        session.mount("http://", adapter)

    session.verify = not config.disable_ssl_verify
    if config.disable_ssl_verify:
        logger.warning("TLS certificate verification is disabled")

    if config.force_http2:
        logger.warning("HTTP/2 requested; requests negotiates HTTP/1.1 only, falling back")

    return session
