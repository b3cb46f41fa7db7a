"""Exception hierarchy for the Bot API client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from botapi.models import APIResponse, ResponseParameters


class BotAPIError(Exception):
    """Base class for every error raised by :mod:`botapi`."""


class ConfigurationError(BotAPIError, ValueError):
    """Invalid or missing construction-time configuration (token, URLs, proxy)."""


class RequestValidationError(BotAPIError, ValueError):
    """A request object is missing a required field. Raised before any I/O."""


class NotUploadableError(BotAPIError, TypeError):
    """``upload_data()`` was called on a file reference that is sent as a string."""


class NotSendableError(BotAPIError, TypeError):
    """``send_data()`` was called on a file reference that must be uploaded."""


class DecodeError(BotAPIError, ValueError):
    """The response body is not a valid JSON envelope."""


class WebhookError(BotAPIError):
    """An inbound webhook request was rejected or could not be decoded."""


class APIException(BotAPIError):
    """The remote service answered with ``ok == false``.

    Attributes:
        error_code: Remote error code (usually mirrors the HTTP status).
        description: Human-readable description from the envelope.
        parameters: Optional retry / migration hint.
        response: The decoded envelope, kept for callers that need it.
    """

    def __init__(
        self,
        error_code: int,
        description: str,
        parameters: Optional["ResponseParameters"] = None,
        response: Optional["APIResponse"] = None,
    ) -> None:
        self.error_code = error_code
        self.description = description or "Unknown error"
        self.parameters = parameters
        self.response = response
        super().__init__(self.description)

    @property
    def retry_after(self) -> Optional[int]:
        """Seconds to wait before retrying, when flood control kicked in."""
        return self.parameters.retry_after if self.parameters else None

    @property
    def migrate_to_chat_id(self) -> Optional[int]:
        """Identifier of the supergroup a group chat migrated to, if any."""
        return self.parameters.migrate_to_chat_id if self.parameters else None

    def __repr__(self) -> str:
        return f"APIException(error_code={self.error_code!r}, description={self.description!r})"
