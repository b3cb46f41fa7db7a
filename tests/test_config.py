"""Tests for settings loading and the logging helpers."""

import json
import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botapi.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, BotSettings, load_settings, validate_base_url
from botapi.exceptions import ConfigurationError
from botapi.log import LOGGER_NAME, DebugLog, JsonFormatter, configure_logging


# ── Settings ─────────────────────────────────────────────────────────────────


class TestLoadSettings:
    """BOT_* variables into BotSettings."""

    def test_minimal(self) -> None:
        settings = load_settings(environ={"BOT_TOKEN": "123:abc"})
        assert settings.token == "123:abc"
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.request_timeout == DEFAULT_TIMEOUT
        assert settings.debug is False
        assert settings.secret_token is None

    def test_all_variables(self) -> None:
        settings = load_settings(environ={
            "BOT_TOKEN": " 123:abc ",
            "BOT_API_BASE_URL": "http://localhost:8081/",
            "BOT_REQUEST_TIMEOUT": "15.5",
            "BOT_DEBUG": "yes",
            "BOT_SECRET_TOKEN": "s3",
            "BOT_PROXY": "http://proxy.local:3128",
            "BOT_FORCE_IPV4": "1",
            "BOT_DISABLE_SSL_VERIFY": "TRUE",
            "BOT_FORCE_HTTP2": "off",
        })
        assert settings.token == "123:abc"
        assert settings.base_url == "http://localhost:8081"
        assert settings.request_timeout == 15.5
        assert settings.debug is True
        assert settings.secret_token == "s3"
        transport = settings.transport_config()
        assert transport.proxy == "http://proxy.local:3128"
        assert transport.force_ipv4 is True
        assert transport.disable_ssl_verify is True
        assert transport.force_http2 is False

    def test_missing_token(self) -> None:
        with pytest.raises(ConfigurationError):
            load_settings(environ={})

    @pytest.mark.parametrize("name,value", [
        ("BOT_DEBUG", "maybe"),
        ("BOT_REQUEST_TIMEOUT", "soon"),
        ("BOT_REQUEST_TIMEOUT", "-1"),
        ("BOT_PROXY", "not a url"),
        ("BOT_API_BASE_URL", "ftp://example.com"),
    ])
    def test_malformed_values(self, name: str, value: str) -> None:
        with pytest.raises(ConfigurationError):
            load_settings(environ={"BOT_TOKEN": "123:abc", name: value})

    def test_env_file(self, tmp_path, monkeypatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("BOT_TOKEN=from-file\nBOT_DEBUG=true\n")
        monkeypatch.delenv("BOT_TOKEN", raising=False)
        monkeypatch.delenv("BOT_DEBUG", raising=False)
        try:
            settings = load_settings(str(env_file))
            assert settings.token == "from-file"
            assert settings.debug is True
        finally:
            os.environ.pop("BOT_TOKEN", None)
            os.environ.pop("BOT_DEBUG", None)

    def test_blank_token_model(self) -> None:
        with pytest.raises(ValueError):
            BotSettings(token="   ")

    def test_validate_base_url(self) -> None:
        assert validate_base_url("https://example.com/") == "https://example.com"
        with pytest.raises(ConfigurationError):
            validate_base_url("example.com")


# ── JSON formatter ───────────────────────────────────────────────────────────


class TestJsonFormatter:
    """Single-line JSON log records."""

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="botapi.client", level=logging.WARNING, pathname=__file__, lineno=1,
            msg="API error %s", args=("sendMessage",), exc_info=None,
        )
        record.__dict__.update(extra)
        return record

    def test_standard_fields(self) -> None:
        entry = json.loads(JsonFormatter().format(self._record()))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "botapi.client"
        assert entry["message"] == "API error sendMessage"
        assert "timestamp" in entry

    def test_extra_fields_merged(self) -> None:
        entry = json.loads(JsonFormatter().format(self._record(api_endpoint="sendMessage", error_code=400)))
        assert entry["api_endpoint"] == "sendMessage"
        assert entry["error_code"] == 400
        assert "args" not in entry

    def test_exception_info(self) -> None:
        try:
            raise ValueError("broken")
        except ValueError:
            record = self._record(exc_info=sys.exc_info())
        entry = json.loads(JsonFormatter().format(record))
        assert "ValueError: broken" in entry["exc_info"]


class TestConfigureLogging:
    """Handler installation."""

    @pytest.fixture(autouse=True)
    def _reset_logger(self):
        logger = logging.getLogger(LOGGER_NAME)
        saved_handlers, saved_level = list(logger.handlers), logger.level
        logger.handlers = []
        yield
        for handler in logger.handlers:
            handler.close()
        logger.handlers = saved_handlers
        logger.setLevel(saved_level)

    def test_idempotent(self) -> None:
        logger = configure_logging(logging.DEBUG)
        configure_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_file_handler(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "bot.log"
        logger = configure_logging(logging.INFO, str(log_file))
        assert len(logger.handlers) == 2
        logging.getLogger("botapi.client").info("hello", extra={"api_endpoint": "getMe"})
        for handler in logger.handlers:
            handler.flush()
        line = log_file.read_text(encoding="utf-8").strip()
        assert json.loads(line)["api_endpoint"] == "getMe"


# ── Debug log ────────────────────────────────────────────────────────────────


class TestDebugLog:
    """Buffered debug lines."""

    def test_line_format(self) -> None:
        log = DebugLog()
        log.write("Endpoint: getMe, params: {}")
        line = log.getvalue()
        assert line.startswith("Debug: ")
        assert line.endswith("Endpoint: getMe, params: {}\n")

    def test_sink_receives_lines(self) -> None:
        lines = []
        log = DebugLog(lines.append)
        log.write("one")
        log.write("two")
        assert len(lines) == 2
        assert lines[1].endswith("two\n")

    def test_clear_and_dump(self, tmp_path) -> None:
        log = DebugLog()
        log.write("kept")
        path = tmp_path / "debug.log"
        log.dump(str(path))
        assert "kept" in path.read_text(encoding="utf-8")
        log.clear()
        assert log.getvalue() == ""
