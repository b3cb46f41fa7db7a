"""BotClient -- one bot session bound to a token.

Every call goes through the same path: a :class:`~botapi.methods.Request`
is turned into form parameters and named files, posted either url-encoded
or as a streamed multipart body, and the JSON envelope is decoded.  A
``ok == false`` envelope raises :class:`~botapi.exceptions.APIException`;
transport failures surface as ``requests`` exceptions.

Instances are independent: any number of clients (and bots) may coexist.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

import requests
from pydantic import ValidationError
from urllib3.exceptions import HTTPError as Urllib3HTTPError
from urllib3.exceptions import ReadTimeoutError

from botapi import methods
from botapi.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, BotSettings, load_settings, validate_base_url
from botapi.exceptions import APIException, ConfigurationError, DecodeError
from botapi.files import RequestFile, has_files_needing_upload
from botapi.log import DebugLog
from botapi.models import APIResponse, File, Message, Update, User, WebhookInfo
from botapi.multipart import MultipartBody
from botapi.polling import RetryPolicy, UpdatePoller, UpdatesChannel
from botapi.transport import TransportConfig, build_session

logger = logging.getLogger("botapi.client")

SECRET_TOKEN_HEADER = "X-Telegram-Bot-Api-Secret-Token"

# Extra seconds allowed on top of a long-poll timeout before the HTTP call gives up.
_POLL_GRACE = 10.0


class BotClient:
    """Client for the Bot API.

    Args:
        token: Bot token, required.
        base_url: Service root; requests go to ``<base_url>/bot<token>/<method>``.
        timeout: Default per-call timeout in seconds.
        debug: Record requests and raw responses in :attr:`debug_log`.
        secret_token: Sent as ``X-Telegram-Bot-Api-Secret-Token`` and
            expected on inbound webhooks.
        session: A ready :class:`requests.Session`; built from *transport*
            when omitted.
        transport: Proxy / IPv4 / TLS flags for the built session.
        debug_sink: Callback receiving every debug line.

    Raises:
        ConfigurationError: Missing token, bad base URL or bad proxy URL.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        secret_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        transport: Optional[TransportConfig] = None,
        debug_sink: Optional[Callable[[str], None]] = None,
    ) -> None:
        if not token or not token.strip():
            raise ConfigurationError("bot token is required")
        self._token = token.strip()
        self._base_url = validate_base_url(base_url)
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.debug = debug
        self.secret_token = secret_token
        self.session = session if session is not None else build_session(transport)
        self.debug_log = DebugLog(debug_sink)
        self._poller: Optional[UpdatePoller] = None
        self._poller_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: BotSettings, **kwargs: Any) -> "BotClient":
        return cls(
            settings.token,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            debug=settings.debug,
            secret_token=settings.secret_token,
            transport=settings.transport_config(),
            **kwargs,
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **kwargs: Any) -> "BotClient":
        """Build a client from ``BOT_*`` environment variables (and ``.env``)."""
        return cls.from_settings(load_settings(env_file), **kwargs)

    @property
    def token(self) -> str:
        return self._token

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"BotClient(base_url={self._base_url!r}, debug={self.debug!r})"

    def __enter__(self) -> "BotClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Stop the update pump, if any, and release pooled connections."""
        self.stop_receiving_updates()
        self.session.close()

    # ------------------------------------------------------------------
    #  Transport
    # ------------------------------------------------------------------

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self._base_url}/bot{self._token}/{endpoint}"

    def _headers(self) -> dict:
        if self.secret_token:
            return {SECRET_TOKEN_HEADER: self.secret_token}
        return {}

    def _debug(self, message: str) -> None:
        if self.debug:
            self.debug_log.write(message)

    def make_request(
        self,
        endpoint: str,
        params: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> APIResponse:
        """POST *params* url-encoded to *endpoint* and decode the envelope.

        Raises:
            APIException: The envelope has ``ok == false``.
            DecodeError: The body is not a valid envelope.
            requests.RequestException: Network failure or timeout.
        """
        params = dict(params or {})
        self._debug(f"Endpoint: {endpoint}, params: {params}")
        logger.debug("API request", extra={"api_endpoint": endpoint})
        response = self.session.post(
            self.endpoint_url(endpoint),
            data=params,
            headers=self._headers(),
            timeout=timeout or self.timeout,
            stream=True,
        )
        return self._decode(endpoint, response)

    def upload_files(
        self,
        endpoint: str,
        params: Mapping[str, str],
        files: Sequence[RequestFile],
        timeout: Optional[float] = None,
    ) -> APIResponse:
        """POST *params* and *files* as a streamed multipart body.

        Local files are opened before the request starts, so an unreadable
        path raises ``OSError`` without any network activity.
        """
        self._debug(f"Endpoint: {endpoint}, params: {dict(params)}, with {len(files)} files")
        logger.debug("API upload", extra={"api_endpoint": endpoint, "file_count": len(files)})
        with MultipartBody(params, files) as body:
            headers = self._headers()
            headers["Content-Type"] = body.content_type
            response = self.session.post(
                self.endpoint_url(endpoint),
                data=body.chunks(),
                headers=headers,
                timeout=timeout or self.timeout,
                stream=True,
            )
            return self._decode(endpoint, response)

    def _decode(self, endpoint: str, response: requests.Response) -> APIResponse:
        with response:
            try:
                if self.debug:
                    body = response.content
                    self.debug_log.write(f"Endpoint: {endpoint}, response: {body.decode('utf-8', 'replace')}")
                    data = json.loads(body)
                else:
                    if hasattr(response.raw, "decode_content"):
                        response.raw.decode_content = True
                    data = json.load(response.raw)
            except ReadTimeoutError as exc:
                logger.error("Response body read timed out", extra={"api_endpoint": endpoint, "error": str(exc)})
                raise requests.exceptions.ReadTimeout(exc, response=response) from exc
            except Urllib3HTTPError as exc:
                # Reading response.raw bypasses the wrapping requests applies to iter_content.
                logger.error("Response body read failed", extra={"api_endpoint": endpoint, "error": str(exc)})
                raise requests.exceptions.ConnectionError(exc, response=response) from exc
            except ValueError as exc:
                logger.error("Response is not JSON", extra={"api_endpoint": endpoint, "error": str(exc)})
                raise DecodeError(f"{endpoint}: response is not JSON: {exc}") from exc

        try:
            envelope = APIResponse.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"{endpoint}: malformed response envelope: {exc}") from exc

        if not envelope.ok:
            logger.warning(
                "API error",
                extra={"api_endpoint": endpoint, "error_code": envelope.error_code, "description": envelope.description},
            )
            raise APIException(envelope.error_code, envelope.description, envelope.parameters, envelope)
        return envelope

    def request(self, req: methods.Request, timeout: Optional[float] = None) -> APIResponse:
        """Send *req* and return the raw envelope.

        Uses multipart only when a file needs uploading; file references
        that are plain strings are otherwise sent as ordinary fields.
        """
        params, files = req.prepare()
        if has_files_needing_upload(files):
            return self.upload_files(req.endpoint, params, files, timeout=timeout)
        for file in files:
            params[file.name] = file.data.send_data()
        return self.make_request(req.endpoint, params, timeout=timeout)

    def execute(self, req: methods.Request, timeout: Optional[float] = None) -> Any:
        """Send *req* and return its result decoded into ``req.returns``."""
        envelope = self.request(req, timeout=timeout)
        try:
            return req.parse_result(envelope.result)
        except ValidationError as exc:
            raise DecodeError(f"{req.endpoint}: unexpected result: {exc}") from exc

    async def execute_async(self, req: methods.Request, timeout: Optional[float] = None) -> Any:
        """Run :meth:`execute` in a worker thread to keep the event loop free."""
        return await asyncio.to_thread(self.execute, req, timeout)

    # ------------------------------------------------------------------
    #  Common operations
    # ------------------------------------------------------------------

    def get_me(self) -> User:
        return self.execute(methods.GetMe())

    def get_updates(
        self,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        timeout: Optional[int] = None,
        allowed_updates: Optional[List[str]] = None,
    ) -> List[Update]:
        req = methods.GetUpdates(offset=offset, limit=limit, timeout=timeout, allowed_updates=allowed_updates)
        return self._fetch_updates(req)

    def _fetch_updates(self, req: methods.GetUpdates) -> List[Update]:
        return self.execute(req, timeout=max(self.timeout, (req.timeout or 0) + _POLL_GRACE))

    def set_webhook(self, url: str, **kwargs: Any) -> bool:
        return self.execute(methods.SetWebhook(url=url, **kwargs))

    def delete_webhook(self, drop_pending_updates: bool = False) -> bool:
        return self.execute(methods.DeleteWebhook(drop_pending_updates=drop_pending_updates))

    def get_webhook_info(self) -> WebhookInfo:
        return self.execute(methods.GetWebhookInfo())

    def send_message(self, chat_id: Union[int, str], text: str, **kwargs: Any) -> Message:
        """Send a text message. ``chat_id`` may be an id or ``@channelusername``."""
        return self.execute(methods.SendMessage(chat_id=chat_id, text=text, **kwargs))

    def send_photo(self, chat_id: Union[int, str], photo: Any, **kwargs: Any) -> Message:
        """Send a photo from a file reference, URL, file id or local path."""
        return self.execute(methods.SendPhoto(chat_id=chat_id, photo=photo, **kwargs))

    def send_document(self, chat_id: Union[int, str], document: Any, **kwargs: Any) -> Message:
        return self.execute(methods.SendDocument(chat_id=chat_id, document=document, **kwargs))

    def send_media_group(self, chat_id: Union[int, str], media: Sequence[Any], **kwargs: Any) -> List[Message]:
        return self.execute(methods.SendMediaGroup(chat_id=chat_id, media=list(media), **kwargs))

    def edit_message_text(self, text: str, **kwargs: Any) -> Union[Message, bool]:
        return self.execute(methods.EditMessageText(text=text, **kwargs))

    def delete_message(self, chat_id: Union[int, str], message_id: int) -> bool:
        return self.execute(methods.DeleteMessage(chat_id=chat_id, message_id=message_id))

    def answer_callback_query(self, callback_query_id: str, **kwargs: Any) -> bool:
        return self.execute(methods.AnswerCallbackQuery(callback_query_id=callback_query_id, **kwargs))

    def get_file(self, file_id: str) -> File:
        return self.execute(methods.GetFile(file_id=file_id))

    def get_file_direct_url(self, file_id: str) -> str:
        """Return the download URL of *file_id*; it stays valid for about an hour."""
        return self.get_file(file_id).link(self._token, self._base_url)

    # ------------------------------------------------------------------
    #  Long polling
    # ------------------------------------------------------------------

    def get_updates_chan(
        self,
        offset: int = 0,
        limit: int = 100,
        timeout: int = 60,
        allowed_updates: Optional[List[str]] = None,
        retry: Optional[RetryPolicy] = None,
    ) -> UpdatesChannel:
        """Start the background update pump and return its channel.

        Raises:
            RuntimeError: A pump is already running on this client.
        """
        req = methods.GetUpdates(offset=offset, limit=limit, timeout=timeout, allowed_updates=allowed_updates)
        with self._poller_lock:
            if self._poller is not None and self._poller.is_running:
                raise RuntimeError("an update pump is already running; call stop_receiving_updates() first")
            self._poller = UpdatePoller(
                self._fetch_updates,
                req,
                retry=retry,
                debug_log=self.debug_log if self.debug else None,
            )
            logger.info("Starting update pump", extra={"api_endpoint": "getUpdates", "offset": offset})
            return self._poller.start()

    def stop_receiving_updates(self) -> None:
        with self._poller_lock:
            poller, self._poller = self._poller, None
        if poller is not None:
            self._debug("Stopping the update receiver routine...")
            logger.info("Stopping update pump", extra={"api_endpoint": "getUpdates"})
            poller.stop()

    @property
    def poller(self) -> Optional[UpdatePoller]:
        return self._poller

