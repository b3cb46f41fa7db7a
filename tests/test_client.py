"""Tests for BotClient, APIException and the transport builder."""

import asyncio
import io
import json
import os
import sys
from unittest.mock import MagicMock, patch

import pytest
import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botapi.client import SECRET_TOKEN_HEADER, BotClient
from botapi.config import BotSettings
from botapi.exceptions import APIException, ConfigurationError, DecodeError, RequestValidationError
from botapi.files import FileBytes, FilePath, FileURL
from botapi.methods import GetMe, SendMessage
from botapi.models import APIResponse, Message, ResponseParameters, User
from botapi.transport import IPv4Adapter, TransportConfig, build_session

TOKEN = "123:abc"

MESSAGE = {"message_id": 7, "date": 1609459200, "chat": {"id": 1234, "type": "private"}, "text": "hi"}


def _response(payload, status: int = 200) -> requests.Response:
    """A real Response whose body streams from memory."""
    resp = requests.Response()
    resp.status_code = status
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    resp.raw = io.BytesIO(body)
    return resp


def _client(payload=None, **kwargs) -> BotClient:
    session = MagicMock()
    session.post.return_value = _response(payload if payload is not None else {"ok": True, "result": True})
    return BotClient(TOKEN, session=session, **kwargs)


# ── APIException ─────────────────────────────────────────────────────────────


class TestAPIException:
    """Validate the remote error type."""

    def test_attributes(self) -> None:
        exc = APIException(400, "Bad Request: chat not found")
        assert exc.error_code == 400
        assert str(exc) == "Bad Request: chat not found"
        assert exc.retry_after is None

    def test_hints(self) -> None:
        exc = APIException(429, "slow down", ResponseParameters(retry_after=5, migrate_to_chat_id=-100))
        assert exc.retry_after == 5
        assert exc.migrate_to_chat_id == -100

    def test_default_description(self) -> None:
        assert str(APIException(500, "")) == "Unknown error"


# ── Construction ─────────────────────────────────────────────────────────────


class TestClientInit:
    """Validate client initialisation."""

    def test_missing_token(self) -> None:
        with pytest.raises(ConfigurationError):
            BotClient("", session=MagicMock())

    def test_bad_base_url(self) -> None:
        with pytest.raises(ConfigurationError):
            BotClient(TOKEN, base_url="not a url", session=MagicMock())

    def test_endpoint_url(self) -> None:
        c = BotClient(TOKEN, base_url="https://example.com/", session=MagicMock())
        assert c.endpoint_url("getMe") == "https://example.com/bot123:abc/getMe"

    def test_default_timeout(self) -> None:
        assert BotClient(TOKEN, session=MagicMock()).timeout == 120.0

    def test_repr_hides_token(self) -> None:
        assert TOKEN not in repr(BotClient(TOKEN, session=MagicMock()))

    def test_from_settings(self) -> None:
        settings = BotSettings(token=TOKEN, request_timeout=30, debug=True, secret_token="s3")
        c = BotClient.from_settings(settings, session=MagicMock())
        assert c.timeout == 30
        assert c.debug is True
        assert c.secret_token == "s3"

    def test_independent_instances(self) -> None:
        a = BotClient("1:a", session=MagicMock())
        b = BotClient("2:b", session=MagicMock())
        assert a.endpoint_url("getMe") != b.endpoint_url("getMe")


# ── Request / response transport ─────────────────────────────────────────────


class TestTransport:
    """url-encoded vs multipart posting and envelope decoding."""

    def test_send_message_scenario(self) -> None:
        c = _client({"ok": True, "result": MESSAGE})
        msg = c.send_message(1234, "hi")
        assert isinstance(msg, Message)
        assert msg.message_id == 7
        args, kwargs = c.session.post.call_args
        assert args[0] == "https://api.telegram.org/bot123:abc/sendMessage"
        assert kwargs["data"] == {"chat_id": "1234", "text": "hi"}
        assert kwargs["timeout"] == 120.0

    def test_remote_failure_scenario(self) -> None:
        c = _client({"ok": False, "error_code": 400, "description": "Bad Request: chat not found"})
        with pytest.raises(APIException) as exc_info:
            c.send_message(1234, "hi")
        assert exc_info.value.error_code == 400
        assert "chat not found" in str(exc_info.value)
        assert isinstance(exc_info.value.response, APIResponse)

    def test_retry_hint(self) -> None:
        c = _client({"ok": False, "error_code": 429, "description": "Too Many Requests", "parameters": {"retry_after": 3}})
        with pytest.raises(APIException) as exc_info:
            c.get_me()
        assert exc_info.value.retry_after == 3

    def test_remote_url_is_url_encoded(self) -> None:
        c = _client({"ok": True, "result": MESSAGE})
        c.send_photo(1234, FileURL("https://example.com/cat.jpg"))
        kwargs = c.session.post.call_args.kwargs
        assert kwargs["data"] == {"chat_id": "1234", "photo": "https://example.com/cat.jpg"}
        assert "Content-Type" not in kwargs["headers"]

    def test_local_path_is_multipart(self, tmp_path) -> None:
        local = tmp_path / "cat.jpg"
        local.write_bytes(b"JPEGDATA")
        captured = {}

        def fake_post(url, data=None, headers=None, **kwargs):
            captured["body"] = b"".join(data)
            captured["headers"] = headers
            return _response({"ok": True, "result": MESSAGE})

        c = _client()
        c.session.post.side_effect = fake_post
        msg = c.send_photo(1234, FilePath(str(local)), caption="look")
        assert msg.message_id == 7
        assert captured["headers"]["Content-Type"].startswith("multipart/form-data; boundary=")
        body = captured["body"]
        assert b'name="photo"; filename="cat.jpg"' in body
        assert b"JPEGDATA" in body
        assert b'name="caption"\r\n\r\nlook' in body

    def test_missing_local_file_no_request(self, tmp_path) -> None:
        c = _client()
        with pytest.raises(FileNotFoundError):
            c.send_photo(1234, FilePath(str(tmp_path / "nope.jpg")))
        c.session.post.assert_not_called()

    def test_validation_before_network(self) -> None:
        c = _client()
        with pytest.raises(RequestValidationError):
            c.execute(SendMessage(text="hi"))
        c.session.post.assert_not_called()

    def test_network_error_propagates(self) -> None:
        c = _client()
        c.session.post.side_effect = requests.ConnectionError("offline")
        with pytest.raises(requests.ConnectionError):
            c.get_me()

    def test_non_json_body(self) -> None:
        c = _client(b"<html>bad gateway</html>")
        with pytest.raises(DecodeError):
            c.get_me()

    def test_unexpected_result_shape(self) -> None:
        c = _client({"ok": True, "result": {"unexpected": True}})
        with pytest.raises(DecodeError):
            c.get_me()

    def test_response_closed(self) -> None:
        c = _client({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}})
        raw = c.session.post.return_value.raw
        c.get_me()
        assert raw.closed

    def test_secret_token_header(self) -> None:
        c = _client(secret_token="s3cr3t")
        c.delete_webhook()
        assert c.session.post.call_args.kwargs["headers"] == {SECRET_TOKEN_HEADER: "s3cr3t"}

    def test_per_call_timeout(self) -> None:
        c = _client()
        c.execute(GetMe(), timeout=5)
        assert c.session.post.call_args.kwargs["timeout"] == 5

    def test_raw_make_request(self) -> None:
        c = _client({"ok": True, "result": 3})
        env = c.make_request("getChatMemberCount", {"chat_id": "1"})
        assert env.ok is True
        assert env.result == 3

    def test_multipart_with_bytes(self) -> None:
        bodies = []

        def fake_post(url, data=None, headers=None, **kwargs):
            bodies.append(b"".join(data))
            return _response({"ok": True, "result": MESSAGE})

        c = _client()
        c.session.post.side_effect = fake_post
        c.send_document(1, FileBytes("notes.txt", b"hello"))
        assert b'filename="notes.txt"\r\nContent-Type: text/plain' in bodies[0]

    def test_execute_async(self) -> None:
        c = _client({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}})
        user = asyncio.run(c.execute_async(GetMe()))
        assert isinstance(user, User)


# ── Debug mode ───────────────────────────────────────────────────────────────


class TestDebugMode:
    """Requests and raw responses land in the debug buffer."""

    def test_debug_log_records_request_and_response(self) -> None:
        lines = []
        c = _client({"ok": True, "result": MESSAGE}, debug=True, debug_sink=lines.append)
        c.send_message(1234, "hi")
        text = c.debug_log.getvalue()
        assert "Endpoint: sendMessage, params: {'chat_id': '1234', 'text': 'hi'}" in text
        assert '"message_id": 7' in text
        assert len(lines) == 2

    def test_debug_off_records_nothing(self) -> None:
        c = _client({"ok": True, "result": MESSAGE})
        c.send_message(1234, "hi")
        assert c.debug_log.getvalue() == ""

    def test_debug_decode_error(self) -> None:
        c = _client(b"not json", debug=True)
        with pytest.raises(DecodeError):
            c.get_me()
        assert "not json" in c.debug_log.getvalue()


# ── File links ───────────────────────────────────────────────────────────────


class TestFileLinks:
    """getFile followed by the download URL."""

    def test_get_file_direct_url(self) -> None:
        c = _client({"ok": True, "result": {"file_id": "F", "file_unique_id": "U", "file_path": "docs/a.pdf"}})
        assert c.get_file_direct_url("F") == "https://api.telegram.org/file/bot123:abc/docs/a.pdf"
        assert c.session.post.call_args.kwargs["data"] == {"file_id": "F"}


# ── Transport builder ────────────────────────────────────────────────────────


class TestBuildSession:
    """Translation of transport flags into a requests.Session."""

    def test_defaults_verify_tls(self) -> None:
        session = build_session()
        assert session.verify is True
        assert session.proxies == {}

    def test_disable_verify(self) -> None:
        assert build_session(TransportConfig(disable_ssl_verify=True)).verify is False

    def test_proxy(self) -> None:
        session = build_session(TransportConfig(proxy="socks5://127.0.0.1:1080"))
        assert session.proxies == {"http": "socks5://127.0.0.1:1080", "https": "socks5://127.0.0.1:1080"}

    @pytest.mark.parametrize("proxy", ["not a url", "http://", "http://host:notaport"])
    def test_invalid_proxy(self, proxy: str) -> None:
        with pytest.raises(ConfigurationError):
            build_session(TransportConfig(proxy=proxy))

    def test_force_ipv4(self) -> None:
        session = build_session(TransportConfig(force_ipv4=True))
        assert isinstance(session.get_adapter("https://api.telegram.org"), IPv4Adapter)

    def test_http2_falls_back(self) -> None:
        with patch("botapi.transport.logger") as mock_logger:
            session = build_session(TransportConfig(force_http2=True))
        assert isinstance(session, requests.Session)
        mock_logger.warning.assert_called_once()

    def test_client_builds_session(self) -> None:
        c = BotClient(TOKEN, transport=TransportConfig(disable_ssl_verify=True))
        assert c.session.verify is False
