"""Inbound webhook decoding.

:func:`decode_update` and :func:`handle_update` turn one inbound HTTP request
into an :class:`~botapi.models.Update`; :func:`write_update_error` answers a
rejected request with a JSON error body.  :class:`WebhookApp` wires them into
a WSGI application that hands every decoded update to a callback.
"""

from __future__ import annotations

import hmac
import json
import logging
from typing import Any, Callable, Iterable, List, Optional, Union

from pydantic import ValidationError

from botapi.exceptions import WebhookError
from botapi.models import Update

logger = logging.getLogger("botapi.webhook")

WRONG_METHOD = "wrong HTTP method required POST"

_SECRET_HEADER_ENVIRON = "HTTP_X_TELEGRAM_BOT_API_SECRET_TOKEN"

StartResponse = Callable[..., Any]


def decode_update(method: str, body: Union[bytes, str]) -> Update:
    """Decode one update from a POST body.

    Raises:
        WebhookError: The method is not POST or the body is not an update.
    """
    if method.upper() != "POST":
        raise WebhookError(WRONG_METHOD)
    try:
        return Update.model_validate_json(body)
    except ValidationError as exc:
        raise WebhookError(f"invalid update: {exc.errors(include_url=False)[0]['msg']}") from exc


def read_body(environ: dict) -> bytes:
    """Read exactly CONTENT_LENGTH bytes of the WSGI request body.

    A missing or malformed length reads nothing.
    """
    stream = environ.get("wsgi.input")
    if stream is None:
        return b""
    raw_length = environ.get("CONTENT_LENGTH") or ""
    try:
        length = int(raw_length)
    except ValueError:
        return b""
    return stream.read(length) if length > 0 else b""


def handle_update(environ: dict) -> Update:
    """Decode the update carried by a WSGI request.

    The body is consumed even when the method is rejected.
    """
    body = read_body(environ)
    return decode_update(environ.get("REQUEST_METHOD", "GET"), body)


def write_update_error(start_response: StartResponse, error: Union[BaseException, str], status: str = "400 Bad Request") -> List[bytes]:
    """Start a JSON ``{"error": "<message>"}`` response and return its body.

    Failures of *start_response* propagate to the caller.
    """
    payload = json.dumps({"error": str(error)}).encode("utf-8")
    start_response(status, [
        ("Content-Type", "application/json"),
        ("Content-Length", str(len(payload))),
    ])
    return [payload]


class WebhookApp:
    """A WSGI application delivering webhook updates to *on_update*.

    When *secret_token* is set, requests whose
    ``X-Telegram-Bot-Api-Secret-Token`` header does not match are refused
    with 403 before the body is decoded.  Exceptions raised by *on_update*
    propagate to the WSGI server.
    """

    def __init__(self, on_update: Callable[[Update], None], secret_token: Optional[str] = None) -> None:
        self.on_update = on_update
        self.secret_token = secret_token

    def __call__(self, environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        if self.secret_token and not self._secret_matches(environ):
            read_body(environ)
            logger.warning("Webhook secret token mismatch", extra={"remote_addr": environ.get("REMOTE_ADDR")})
            return write_update_error(start_response, WebhookError("secret token mismatch"), "403 Forbidden")

        try:
            update = handle_update(environ)
        except WebhookError as exc:
            logger.warning("Webhook request rejected", extra={"error": str(exc), "method": environ.get("REQUEST_METHOD")})
            return write_update_error(start_response, exc)

        logger.debug("Webhook update received", extra={"update_id": update.update_id})
        self.on_update(update)
        start_response("200 OK", [("Content-Type", "application/json"), ("Content-Length", "2")])
        return [b"{}"]

    def _secret_matches(self, environ: dict) -> bool:
        received = environ.get(_SECRET_HEADER_ENVIRON, "")
        return hmac.compare_digest(received.encode("utf-8"), self.secret_token.encode("utf-8"))
