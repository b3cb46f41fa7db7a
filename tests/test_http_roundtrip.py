"""BotClient against a local HTTP server over a real socket."""

import json
import os
import sys
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs

import pytest
import requests
from urllib3.exceptions import HTTPError as Urllib3HTTPError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botapi.client import BotClient
from botapi.files import FilePath
from botapi.polling import RetryPolicy

TOKEN = "123:abc"

MESSAGE = {"message_id": 7, "date": 1609459200, "chat": {"id": 1234, "type": "private"}, "text": "hi"}


class _BotAPIHandler(BaseHTTPRequestHandler):
    """Records each POST and answers from ``server.responses``.

    Endpoints listed in ``server.truncated`` announce a longer body than
    they send, then drop the connection.
    """

    protocol_version = "HTTP/1.1"

    def do_POST(self) -> None:
        endpoint = self.path.rsplit("/", 1)[-1]
        body = self._read_body()
        self.server.received.append({"endpoint": endpoint, "headers": dict(self.headers), "body": body})

        if endpoint in self.server.truncated:
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", "100")
            self.end_headers()
            self.wfile.write(b'{"ok": true,')
            self.wfile.flush()
            self.close_connection = True
            return

        payload = json.dumps(self.server.responses.get(endpoint, {"ok": True, "result": True})).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def _read_body(self) -> bytes:
        if self.headers.get("Transfer-Encoding", "").lower() == "chunked":
            chunks = []
            while True:
                size = int(self.rfile.readline().split(b";", 1)[0].strip(), 16)
                if size == 0:
                    self.rfile.readline()
                    return b"".join(chunks)
                chunks.append(self.rfile.read(size))
                self.rfile.readline()
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def log_message(self, format, *args) -> None:
        pass


@pytest.fixture
def api_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _BotAPIHandler)
    server.daemon_threads = True
    server.received = []
    server.responses = {}
    server.truncated = set()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(2)


@pytest.fixture
def client(api_server):
    c = BotClient(TOKEN, base_url=f"http://127.0.0.1:{api_server.server_address[1]}", timeout=5)
    c.session.trust_env = False
    try:
        yield c
    finally:
        c.close()


def _wait_for(predicate, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


# ── Url-encoded calls ────────────────────────────────────────────────────────


class TestUrlEncoded:
    """Plain parameters travel as a form body."""

    def test_send_message(self, api_server, client) -> None:
        api_server.responses["sendMessage"] = {"ok": True, "result": MESSAGE}
        message = client.send_message(1234, "hi")
        assert message.message_id == 7

        request = api_server.received[0]
        assert request["endpoint"] == "sendMessage"
        assert request["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        form = parse_qs(request["body"].decode("utf-8"))
        assert form == {"chat_id": ["1234"], "text": ["hi"]}

    def test_secret_token_header_sent(self, api_server, client) -> None:
        client.secret_token = "s3"
        assert client.delete_webhook() is True
        assert api_server.received[0]["headers"]["X-Telegram-Bot-Api-Secret-Token"] == "s3"


# ── Multipart uploads ────────────────────────────────────────────────────────


class TestMultipartUpload:
    """Local files are streamed as multipart parts."""

    def test_send_photo_from_path(self, api_server, client, tmp_path) -> None:
        photo = tmp_path / "cat.jpg"
        photo.write_bytes(b"\xff\xd8\xff\xe0JPEGDATA")
        api_server.responses["sendPhoto"] = {"ok": True, "result": MESSAGE}

        message = client.send_photo(1234, FilePath(str(photo)), caption="a cat")
        assert message.chat.id == 1234

        request = api_server.received[0]
        content_type = request["headers"]["Content-Type"]
        assert content_type.startswith("multipart/form-data; boundary=")
        boundary = content_type.split("boundary=", 1)[1].encode("ascii")
        body = request["body"]
        assert body.startswith(b"--" + boundary + b"\r\n")
        assert body.endswith(b"--" + boundary + b"--\r\n")
        assert b'Content-Disposition: form-data; name="photo"; filename="cat.jpg"\r\nContent-Type: image/jpeg' in body
        assert b"\xff\xd8\xff\xe0JPEGDATA" in body
        assert b'name="caption"\r\n\r\na cat\r\n' in body
        assert b'name="chat_id"\r\n\r\n1234\r\n' in body


# ── Truncated responses ──────────────────────────────────────────────────────


class TestTruncatedResponse:
    """A body cut short by the server surfaces as a requests error."""

    def test_raises_connection_error(self, api_server, client) -> None:
        api_server.truncated.add("getMe")
        with pytest.raises(requests.ConnectionError) as excinfo:
            client.get_me()
        assert isinstance(excinfo.value.__cause__, Urllib3HTTPError)

    def test_client_usable_afterwards(self, api_server, client) -> None:
        api_server.truncated.add("getMe")
        with pytest.raises(requests.ConnectionError):
            client.get_me()
        api_server.truncated.clear()
        api_server.responses["getMe"] = {"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}}
        assert client.get_me().first_name == "Bot"

    def test_update_pump_keeps_retrying(self, api_server, client) -> None:
        api_server.truncated.add("getUpdates")
        client.get_updates_chan(timeout=0, retry=RetryPolicy(delay=0.01))
        poller = client.poller
        try:
            assert _wait_for(lambda: len(api_server.received) >= 2)
            assert poller.is_running
            assert isinstance(poller.last_error, requests.ConnectionError)
        finally:
            client.stop_receiving_updates()
