"""Configuration surface: environment variables and ``.env`` files.

``load_settings`` reads ``BOT_*`` variables (after loading a ``.env`` file
through ``python-dotenv``) into a validated :class:`BotSettings`.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os
from typing import Mapping, Optional
from urllib.parse import urlparse

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

# ── botapi ───────────────────────────────────────────────────────────────────
from botapi.exceptions import ConfigurationError
from botapi.transport import TransportConfig, parse_proxy

logger = logging.getLogger("botapi.config")

DEFAULT_BASE_URL = "https://api.telegram.org"
DEFAULT_TIMEOUT = 120.0

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_bool(name: str, raw: Optional[str]) -> bool:
    """Parse ``1/0``, ``true/false``, ``yes/no`` or ``on/off`` (any case)."""
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _parse_float(name: str, raw: Optional[str], default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from exc


def validate_base_url(base_url: str) -> str:
    """Return *base_url* without a trailing slash.

    Raises:
        ConfigurationError: If the URL is not absolute http(s).
    """
    parsed = urlparse(base_url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"invalid base URL {base_url!r}")
    return base_url.rstrip("/")


# ── Settings model ───────────────────────────────────────────────────────────


class BotSettings(BaseModel):
    """Everything needed to build a :class:`~botapi.client.BotClient`."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT
    debug: bool = False
    secret_token: Optional[str] = None
    proxy: Optional[str] = None
    force_ipv4: bool = False
    disable_ssl_verify: bool = False
    force_http2: bool = False

    model_config = {"populate_by_name": True}

    @field_validator("token")
    @classmethod
    def _token_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("bot token is required")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _timeout_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request timeout must be positive")
        return value

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            proxy=self.proxy,
            force_ipv4=self.force_ipv4,
            disable_ssl_verify=self.disable_ssl_verify,
            force_http2=self.force_http2,
        )


# ── Loading ──────────────────────────────────────────────────────────────────


def load_settings(env_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> BotSettings:
    """Build :class:`BotSettings` from the environment.

    A ``.env`` file (*env_file*, or the nearest one found by python-dotenv)
    is loaded first without overriding variables already set.  *environ*
    replaces ``os.environ`` as the source, mostly for tests.

    Raises:
        ConfigurationError: A variable is missing or malformed.
    """
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    raw = {
        "token": environ.get("BOT_TOKEN") or "",
        "base_url": validate_base_url(environ.get("BOT_API_BASE_URL") or DEFAULT_BASE_URL),
        "request_timeout": _parse_float("BOT_REQUEST_TIMEOUT", environ.get("BOT_REQUEST_TIMEOUT"), DEFAULT_TIMEOUT),
        "debug": _parse_bool("BOT_DEBUG", environ.get("BOT_DEBUG")),
        "secret_token": environ.get("BOT_SECRET_TOKEN") or None,
        "proxy": environ.get("BOT_PROXY") or None,
        "force_ipv4": _parse_bool("BOT_FORCE_IPV4", environ.get("BOT_FORCE_IPV4")),
        "disable_ssl_verify": _parse_bool("BOT_DISABLE_SSL_VERIFY", environ.get("BOT_DISABLE_SSL_VERIFY")),
        "force_http2": _parse_bool("BOT_FORCE_HTTP2", environ.get("BOT_FORCE_HTTP2")),
    }
    if raw["proxy"]:
        parse_proxy(raw["proxy"])

    try:
        settings = BotSettings(**raw)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc

    logger.info(
        "Settings loaded",
        extra={"base_url": settings.base_url, "debug": settings.debug, "proxy_set": bool(settings.proxy)},
    )
    return settings
