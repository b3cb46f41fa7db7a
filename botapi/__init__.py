"""Typed client for the Telegram Bot API.

Requests are pydantic models from :mod:`botapi.methods`; responses decode
into models from :mod:`botapi.models`.

Usage::

    from botapi import BotClient
    from botapi.methods import SendMessage

    client = BotClient("123:abc")
    message = client.execute(SendMessage(chat_id=1234, text="hi"))
"""

from botapi.client import BotClient
from botapi.config import BotSettings, load_settings
from botapi.exceptions import (
    APIException,
    BotAPIError,
    ConfigurationError,
    DecodeError,
    NotSendableError,
    NotUploadableError,
    RequestValidationError,
    WebhookError,
)
from botapi.files import FileAttach, FileBytes, FileID, FilePath, FileReader, FileURL
from botapi.media import (
    InputMediaAnimation,
    InputMediaAudio,
    InputMediaDocument,
    InputMediaPhoto,
    InputMediaVideo,
    InputSticker,
)
from botapi.polling import RetryPolicy, UpdatesChannel

__all__ = [
    "BotClient",
    "BotSettings",
    "load_settings",
    "APIException",
    "BotAPIError",
    "ConfigurationError",
    "DecodeError",
    "NotSendableError",
    "NotUploadableError",
    "RequestValidationError",
    "WebhookError",
    "FileAttach",
    "FileBytes",
    "FileID",
    "FilePath",
    "FileReader",
    "FileURL",
    "InputMediaAnimation",
    "InputMediaAudio",
    "InputMediaDocument",
    "InputMediaPhoto",
    "InputMediaVideo",
    "InputSticker",
    "RetryPolicy",
    "UpdatesChannel",
]
