"""Tests for inbound webhook decoding and the WSGI app."""

import io
import json
import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botapi.exceptions import WebhookError
from botapi.models import Update
from botapi.webhook import WRONG_METHOD, WebhookApp, decode_update, handle_update, read_body, write_update_error

UPDATE = {
    "update_id": 501,
    "message": {
        "message_id": 1,
        "date": 1609459200,
        "chat": {"id": 42, "type": "private"},
        "from": {"id": 42, "is_bot": False, "first_name": "Ada"},
        "text": "hello",
    },
}


def _environ(method: str = "POST", body: bytes = b"", **extra) -> dict:
    environ = {
        "REQUEST_METHOD": method,
        "CONTENT_LENGTH": str(len(body)),
        "wsgi.input": io.BytesIO(body),
    }
    environ.update(extra)
    return environ


# ── Decoding ─────────────────────────────────────────────────────────────────


class TestDecodeUpdate:
    """POST-only JSON update decoding."""

    def test_valid_post(self) -> None:
        update = decode_update("POST", json.dumps(UPDATE).encode())
        assert isinstance(update, Update)
        assert update.update_id == 501
        assert update.message.text == "hello"

    def test_wrong_method(self) -> None:
        with pytest.raises(WebhookError, match=WRONG_METHOD):
            decode_update("GET", b"")

    def test_invalid_json(self) -> None:
        with pytest.raises(WebhookError, match="invalid update"):
            decode_update("POST", b"{not json")

    def test_missing_update_id(self) -> None:
        with pytest.raises(WebhookError):
            decode_update("POST", b'{"message": null}')

    def test_handle_update_reads_environ(self) -> None:
        update = handle_update(_environ(body=json.dumps(UPDATE).encode()))
        assert update.sent_from().first_name == "Ada"

    def test_read_body_without_length(self) -> None:
        assert read_body({"wsgi.input": io.BytesIO(b"abc"), "CONTENT_LENGTH": ""}) == b""
        assert read_body({"wsgi.input": io.BytesIO(b"abc"), "CONTENT_LENGTH": "abc"}) == b""
        assert read_body({}) == b""


# ── Error responses ──────────────────────────────────────────────────────────


class TestWriteUpdateError:
    """JSON error bodies."""

    def test_error_body(self) -> None:
        start_response = MagicMock()
        body = write_update_error(start_response, WebhookError("boom"))
        status, headers = start_response.call_args.args
        assert status == "400 Bad Request"
        assert ("Content-Type", "application/json") in headers
        assert json.loads(body[0]) == {"error": "boom"}
        assert dict(headers)["Content-Length"] == str(len(body[0]))

    def test_start_response_failure_propagates(self) -> None:
        start_response = MagicMock(side_effect=RuntimeError("headers already sent"))
        with pytest.raises(RuntimeError):
            write_update_error(start_response, "boom")


# ── WSGI app ─────────────────────────────────────────────────────────────────


class TestWebhookApp:
    """End-to-end request handling."""

    def test_get_rejected(self) -> None:
        on_update = MagicMock()
        start_response = MagicMock()
        body = WebhookApp(on_update)(_environ("GET"), start_response)
        assert start_response.call_args.args[0] == "400 Bad Request"
        assert json.loads(body[0]) == {"error": "wrong HTTP method required POST"}
        on_update.assert_not_called()

    def test_update_delivered(self) -> None:
        on_update = MagicMock()
        start_response = MagicMock()
        body = WebhookApp(on_update)(_environ(body=json.dumps(UPDATE).encode()), start_response)
        assert start_response.call_args.args[0] == "200 OK"
        assert body == [b"{}"]
        delivered = on_update.call_args.args[0]
        assert delivered.update_id == 501

    def test_bad_body(self) -> None:
        start_response = MagicMock()
        body = WebhookApp(MagicMock())(_environ(body=b"nope"), start_response)
        assert start_response.call_args.args[0] == "400 Bad Request"
        assert json.loads(body[0])["error"].startswith("invalid update")

    def test_secret_mismatch(self) -> None:
        on_update = MagicMock()
        start_response = MagicMock()
        environ = _environ(body=json.dumps(UPDATE).encode(), HTTP_X_TELEGRAM_BOT_API_SECRET_TOKEN="wrong")
        WebhookApp(on_update, secret_token="s3cr3t")(environ, start_response)
        assert start_response.call_args.args[0] == "403 Forbidden"
        on_update.assert_not_called()

    def test_secret_match(self) -> None:
        on_update = MagicMock()
        environ = _environ(body=json.dumps(UPDATE).encode(), HTTP_X_TELEGRAM_BOT_API_SECRET_TOKEN="s3cr3t")
        WebhookApp(on_update, secret_token="s3cr3t")(environ, MagicMock())
        on_update.assert_called_once()

    def test_callback_errors_propagate(self) -> None:
        app = WebhookApp(MagicMock(side_effect=ValueError("handler bug")))
        with pytest.raises(ValueError):
            app(_environ(body=json.dumps(UPDATE).encode()), MagicMock())
