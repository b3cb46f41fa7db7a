"""Request catalog.

Each operation of the Bot API is a pydantic model.  The model declares its
endpoint, the type its result decodes into and which fields together name a
chat; :meth:`Request.prepare` turns any of them into wire parameters plus
the named files to upload, so no operation carries marshaling code of its
own.
"""

from __future__ import annotations

import functools
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, PlainValidator, TypeAdapter, field_validator
from pydantic_core import PydanticUndefined

from botapi.exceptions import RequestValidationError
from botapi.files import RequestFile, as_file_reference, is_file_reference
from botapi.media import InputSticker, is_descriptor, prepare_input_media
from botapi.models import (
    BotCommand,
    BotCommandScope,
    BotDescription,
    BotName,
    BotShortDescription,
    BusinessConnection,
    ChatAdministratorRights,
    ChatFullInfo,
    ChatInviteLink,
    ChatMember,
    ChatPermissions,
    File,
    ForceReply,
    ForumTopic,
    GameHighScore,
    InlineKeyboardMarkup,
    InlineQueryResult,
    LabeledPrice,
    LinkPreviewOptions,
    MaskPosition,
    MenuButton,
    Message,
    MessageEntity,
    MessageId,
    PassportElementError,
    Poll,
    ReactionType,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
    ReplyParameters,
    SentWebAppMessage,
    ShippingOption,
    StarTransactions,
    Sticker,
    StickerSet,
    Update,
    User,
    UserChatBoosts,
    UserProfilePhotos,
    WebhookInfo,
)
from botapi.params import Params, with_at


def _validate_file(value: Any) -> Any:
    try:
        return as_file_reference(value)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


def _validate_descriptor(value: Any) -> Any:
    if not is_descriptor(value):
        raise ValueError(f"expected an input media descriptor, got {type(value).__name__}")
    return value


# A file reference; strings, paths and bytes are coerced on construction.
InputFile = Annotated[Any, PlainValidator(_validate_file)]
# An InputMedia* or InputSticker dataclass.
InputDescriptor = Annotated[Any, PlainValidator(_validate_descriptor)]

ChatIdentifier = Union[int, str]
ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply]


@functools.lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


class InputPollOption(BaseModel):
    """One answer option in a poll to be sent."""

    text: str
    text_parse_mode: Optional[str] = None
    text_entities: Optional[List[MessageEntity]] = None

    model_config = {"populate_by_name": True}


class Request(BaseModel):
    """Base class of every catalog operation.

    Class variables:
        endpoint: Remote method name, e.g. ``sendMessage``.
        returns: Type the envelope ``result`` is validated into.
        chat_targets: Wire key mapped to the ``(id field, username field)``
            pair naming a chat; the first non-default of the two is sent.
        chat_required: Whether every chat target must be given.
        non_empty: String fields that must not be empty.
    """

    endpoint: ClassVar[str] = ""
    returns: ClassVar[Any] = bool
    chat_targets: ClassVar[Dict[str, Tuple[str, Optional[str]]]] = {}
    chat_required: ClassVar[bool] = True
    non_empty: ClassVar[Tuple[str, ...]] = ()

    model_config = {"populate_by_name": True}

    def check(self) -> None:
        """Validate required values and normalize usernames to ``@name``.

        Raises:
            RequestValidationError: A required value is missing.
        """
        for id_field, username_field in self.chat_targets.values():
            username = getattr(self, username_field) if username_field else None
            if username:
                setattr(self, username_field, with_at(username))
                continue
            if self.chat_required and not getattr(self, id_field):
                wanted = f"{id_field} or {username_field}" if username_field else id_field
                raise RequestValidationError(f"{wanted} required")
        for name in self.non_empty:
            if not getattr(self, name):
                raise RequestValidationError(f"{name} required")

    def prepare(self) -> Tuple[Params, List[RequestFile]]:
        """Validate and serialize into ``(params, named files)``."""
        self.check()
        params = Params()
        files: List[RequestFile] = []
        consumed = set()

        for key, (id_field, username_field) in self.chat_targets.items():
            username = getattr(self, username_field) if username_field else None
            params.add_first_valid(key, getattr(self, id_field), username)
            consumed.add(id_field)
            if username_field:
                consumed.add(username_field)

        for name, field in type(self).model_fields.items():
            if name in consumed:
                continue
            value = getattr(self, name)
            key = field.alias or name
            if value is None:
                continue
            if is_file_reference(value):
                files.append(RequestFile(key, value))
            elif is_descriptor(value):
                rewritten, attached = prepare_input_media([value])
                params.add_json(key, rewritten[0])
                files.extend(attached)
            elif isinstance(value, list) and value and all(is_descriptor(item) for item in value):
                rewritten, attached = prepare_input_media(value)
                params.add_json(key, rewritten)
                files.extend(attached)
            elif isinstance(value, bool):
                # Required and tri-state flags carry an explicit "false".
                if field.default is None or field.default is PydanticUndefined:
                    params.add_optional(key, value)
                else:
                    params.add_bool(key, value)
            elif isinstance(value, (int, float)):
                params.add_optional(key, value)
            elif isinstance(value, str):
                params.add_non_empty(key, value)
            else:
                params.add_json(key, value)
        return params, files

    def params(self) -> Params:
        return self.prepare()[0]

    def files(self) -> List[RequestFile]:
        return self.prepare()[1]

    def parse_result(self, raw: Any) -> Any:
        """Validate the envelope ``result`` into :attr:`returns`."""
        return _adapter(self.returns).validate_python(raw)


# ── Shared field groups ─────────────────────────────────────────────────────


class ChatRequest(Request):
    """An operation addressed to one chat by id or ``@username``."""

    chat_targets: ClassVar[Dict[str, Tuple[str, Optional[str]]]] = {"chat_id": ("chat_id", "channel_username")}

    chat_id: Optional[ChatIdentifier] = None
    channel_username: Optional[str] = None


class SendRequest(ChatRequest):
    """Options shared by every operation that sends a new message."""

    returns: ClassVar[Any] = Message

    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    disable_notification: bool = False
    protect_content: bool = False
    message_effect_id: Optional[str] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[ReplyMarkup] = None


class CaptionedSendRequest(SendRequest):
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: bool = False


class EditRequest(ChatRequest):
    """Edits a message by chat and message id, or by inline message id.

    Edits of inline messages return ``True`` instead of the message.
    """

    returns: ClassVar[Any] = Union[Message, bool]
    chat_required: ClassVar[bool] = False

    message_id: Optional[int] = None
    inline_message_id: Optional[str] = None
    business_connection_id: Optional[str] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    def check(self) -> None:
        super().check()
        if self.inline_message_id:
            return
        if not (self.chat_id or self.channel_username) or not self.message_id:
            raise RequestValidationError("inline_message_id or chat_id and message_id required")


# ── Updates and webhooks ────────────────────────────────────────────────────


class GetUpdates(Request):
    endpoint: ClassVar[str] = "getUpdates"
    returns: ClassVar[Any] = List[Update]

    offset: Optional[int] = None
    limit: Optional[int] = None
    timeout: Optional[int] = None
    allowed_updates: Optional[List[str]] = None


class SetWebhook(Request):
    endpoint: ClassVar[str] = "setWebhook"
    non_empty: ClassVar[Tuple[str, ...]] = ("url",)

    url: str
    certificate: Optional[InputFile] = None
    ip_address: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[List[str]] = None
    drop_pending_updates: bool = False
    secret_token: Optional[str] = None


class DeleteWebhook(Request):
    endpoint: ClassVar[str] = "deleteWebhook"

    drop_pending_updates: bool = False


class GetWebhookInfo(Request):
    endpoint: ClassVar[str] = "getWebhookInfo"
    returns: ClassVar[Any] = WebhookInfo


# ── Bot identity ────────────────────────────────────────────────────────────


class GetMe(Request):
    endpoint: ClassVar[str] = "getMe"
    returns: ClassVar[Any] = User


class LogOut(Request):
    endpoint: ClassVar[str] = "logOut"


class Close(Request):
    endpoint: ClassVar[str] = "close"


# ── Messages ────────────────────────────────────────────────────────────────


class SendMessage(SendRequest):
    endpoint: ClassVar[str] = "sendMessage"
    non_empty: ClassVar[Tuple[str, ...]] = ("text",)

    text: str
    parse_mode: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    link_preview_options: Optional[LinkPreviewOptions] = None


class ForwardMessage(ChatRequest):
    endpoint: ClassVar[str] = "forwardMessage"
    returns: ClassVar[Any] = Message
    chat_targets: ClassVar[Dict[str, Tuple[str, Optional[str]]]] = {
        "chat_id": ("chat_id", "channel_username"),
        "from_chat_id": ("from_chat_id", "from_channel_username"),
    }

    message_id: int
    from_chat_id: Optional[ChatIdentifier] = None
    from_channel_username: Optional[str] = None
    message_thread_id: Optional[int] = None
    disable_notification: bool = False
    protect_content: bool = False


class ForwardMessages(ForwardMessage):
    endpoint: ClassVar[str] = "forwardMessages"
    returns: ClassVar[Any] = List[MessageId]

    message_id: Optional[int] = None
    message_ids: List[int]


class CopyMessage(SendRequest):
    endpoint: ClassVar[str] = "copyMessage"
    returns: ClassVar[Any] = MessageId
    chat_targets: ClassVar[Dict[str, Tuple[str, Optional[str]]]] = ForwardMessage.chat_targets

    message_id: int
    from_chat_id: Optional[ChatIdentifier] = None
    from_channel_username: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: bool = False


class CopyMessages(ChatRequest):
    endpoint: ClassVar[str] = "copyMessages"
    returns: ClassVar[Any] = List[MessageId]
    chat_targets: ClassVar[Dict[str, Tuple[str, Optional[str]]]] = ForwardMessage.chat_targets

    message_ids: List[int]
    from_chat_id: Optional[ChatIdentifier] = None
    from_channel_username: Optional[str] = None
    message_thread_id: Optional[int] = None
    disable_notification: bool = False
    protect_content: bool = False
    remove_caption: bool = False


class SendPhoto(CaptionedSendRequest):
    endpoint: ClassVar[str] = "sendPhoto"

    photo: InputFile
    has_spoiler: bool = False


class SendAudio(CaptionedSendRequest):
    endpoint: ClassVar[str] = "sendAudio"

    audio: InputFile
    thumbnail: Optional[InputFile] = None
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None


class SendDocument(CaptionedSendRequest):
    endpoint: ClassVar[str] = "sendDocument"

    document: InputFile
    thumbnail: Optional[InputFile] = None
    disable_content_type_detection: bool = False


class SendVideo(CaptionedSendRequest):
    endpoint: ClassVar[str] = "sendVideo"

    video: InputFile
    thumbnail: Optional[InputFile] = None
    duration: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    has_spoiler: bool = False
    supports_streaming: bool = False


class SendAnimation(CaptionedSendRequest):
    endpoint: ClassVar[str] = "sendAnimation"

    animation: InputFile
    thumbnail: Optional[InputFile] = None
    duration: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    has_spoiler: bool = False


class SendVoice(CaptionedSendRequest):
    endpoint: ClassVar[str] = "sendVoice"

    voice: InputFile
    duration: Optional[int] = None


class SendVideoNote(SendRequest):
    endpoint: ClassVar[str] = "sendVideoNote"

    video_note: InputFile
    thumbnail: Optional[InputFile] = None
    duration: Optional[int] = None
    length: Optional[int] = None


class SendMediaGroup(ChatRequest):
    """Sends 2-10 photos, videos, documents or audios as an album."""

    endpoint: ClassVar[str] = "sendMediaGroup"
    returns: ClassVar[Any] = List[Message]

    media: List[InputDescriptor]
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None
    disable_notification: bool = False
    protect_content: bool = False
    message_effect_id: Optional[str] = None
    reply_parameters: Optional[ReplyParameters] = None

    def check(self) -> None:
        super().check()
        if not self.media:
            raise RequestValidationError("media required")


class SendLocation(SendRequest):
    endpoint: ClassVar[str] = "sendLocation"

    latitude: float
    longitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None


class EditMessageLiveLocation(EditRequest):
    endpoint: ClassVar[str] = "editMessageLiveLocation"

    latitude: float
    longitude: float
    live_period: Optional[int] = None
    horizontal_accuracy: Optional[float] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None


class StopMessageLiveLocation(EditRequest):
    endpoint: ClassVar[str] = "stopMessageLiveLocation"


class SendVenue(SendRequest):
    endpoint: ClassVar[str] = "sendVenue"
    non_empty: ClassVar[Tuple[str, ...]] = ("title", "address")

    latitude: float
    longitude: float
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None
    google_place_id: Optional[str] = None
    google_place_type: Optional[str] = None


class SendContact(SendRequest):
    endpoint: ClassVar[str] = "sendContact"
    non_empty: ClassVar[Tuple[str, ...]] = ("phone_number", "first_name")

    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    vcard: Optional[str] = None


class SendPoll(SendRequest):
    endpoint: ClassVar[str] = "sendPoll"
    non_empty: ClassVar[Tuple[str, ...]] = ("question",)

    question: str
    options: List[InputPollOption]
    question_parse_mode: Optional[str] = None
    is_anonymous: Optional[bool] = None
    type: Optional[str] = None
    allows_multiple_answers: bool = False
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    explanation_parse_mode: Optional[str] = None
    explanation_entities: Optional[List[MessageEntity]] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None
    is_closed: bool = False

    @field_validator("options", mode="before")
    @classmethod
    def _wrap_plain_options(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [{"text": option} if isinstance(option, str) else option for option in value]
        return value


class SendDice(SendRequest):
    """``emoji`` is one of 🎲 🎯 🏀 ⚽ 🎳 🎰; the remote default is 🎲."""

    endpoint: ClassVar[str] = "sendDice"

    emoji: Optional[str] = None


class SendChatAction(ChatRequest):
    endpoint: ClassVar[str] = "sendChatAction"
    non_empty: ClassVar[Tuple[str, ...]] = ("action",)

    action: str
    business_connection_id: Optional[str] = None
    message_thread_id: Optional[int] = None


class SetMessageReaction(ChatRequest):
    endpoint: ClassVar[str] = "setMessageReaction"

    message_id: int
    reaction: Optional[List[ReactionType]] = None
    is_big: bool = False


class GetUserProfilePhotos(Request):
    endpoint: ClassVar[str] = "getUserProfilePhotos"
    returns: ClassVar[Any] = UserProfilePhotos

    user_id: int
    offset: Optional[int] = None
    limit: Optional[int] = None


class GetFile(Request):
    endpoint: ClassVar[str] = "getFile"
    returns: ClassVar[Any] = File
    non_empty: ClassVar[Tuple[str, ...]] = ("file_id",)

    file_id: str


class EditMessageText(EditRequest):
    endpoint: ClassVar[str] = "editMessageText"
    non_empty: ClassVar[Tuple[str, ...]] = ("text",)

    text: str
    parse_mode: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    link_preview_options: Optional[LinkPreviewOptions] = None


class EditMessageCaption(EditRequest):
    endpoint: ClassVar[str] = "editMessageCaption"

    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: bool = False


class EditMessageMedia(EditRequest):
    endpoint: ClassVar[str] = "editMessageMedia"

    media: InputDescriptor


class EditMessageReplyMarkup(EditRequest):
    endpoint: ClassVar[str] = "editMessageReplyMarkup"


class StopPoll(ChatRequest):
    endpoint: ClassVar[str] = "stopPoll"
    returns: ClassVar[Any] = Poll

    message_id: int
    business_connection_id: Optional[str] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None


class DeleteMessage(ChatRequest):
    endpoint: ClassVar[str] = "deleteMessage"

    message_id: int


class DeleteMessages(ChatRequest):
    endpoint: ClassVar[str] = "deleteMessages"

    message_ids: List[int]


class PinChatMessage(ChatRequest):
    endpoint: ClassVar[str] = "pinChatMessage"

    message_id: int
    business_connection_id: Optional[str] = None
    disable_notification: bool = False


class UnpinChatMessage(ChatRequest):
    endpoint: ClassVar[str] = "unpinChatMessage"

    message_id: Optional[int] = None
    business_connection_id: Optional[str] = None


class UnpinAllChatMessages(ChatRequest):
    endpoint: ClassVar[str] = "unpinAllChatMessages"


# ── Chat administration ─────────────────────────────────────────────────────


class BanChatMember(ChatRequest):
    endpoint: ClassVar[str] = "banChatMember"

    user_id: int
    until_date: Optional[int] = None
    revoke_messages: bool = False


class UnbanChatMember(ChatRequest):
    endpoint: ClassVar[str] = "unbanChatMember"

    user_id: int
    only_if_banned: bool = False


class RestrictChatMember(ChatRequest):
    endpoint: ClassVar[str] = "restrictChatMember"

    user_id: int
    permissions: ChatPermissions
    use_independent_chat_permissions: bool = False
    until_date: Optional[int] = None


class PromoteChatMember(ChatRequest):
    """Promotes or demotes a user; every right left as ``None`` is unchanged."""

    endpoint: ClassVar[str] = "promoteChatMember"

    user_id: int
    is_anonymous: Optional[bool] = None
    can_manage_chat: Optional[bool] = None
    can_delete_messages: Optional[bool] = None
    can_manage_video_chats: Optional[bool] = None
    can_restrict_members: Optional[bool] = None
    can_promote_members: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_post_stories: Optional[bool] = None
    can_edit_stories: Optional[bool] = None
    can_delete_stories: Optional[bool] = None
    can_post_messages: Optional[bool] = None
    can_edit_messages: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    can_manage_topics: Optional[bool] = None


class SetChatAdministratorCustomTitle(ChatRequest):
    endpoint: ClassVar[str] = "setChatAdministratorCustomTitle"

    user_id: int
    custom_title: str


class BanChatSenderChat(ChatRequest):
    endpoint: ClassVar[str] = "banChatSenderChat"

    sender_chat_id: int


class UnbanChatSenderChat(ChatRequest):
    endpoint: ClassVar[str] = "unbanChatSenderChat"

    sender_chat_id: int


class SetChatPermissions(ChatRequest):
    endpoint: ClassVar[str] = "setChatPermissions"

    permissions: ChatPermissions
    use_independent_chat_permissions: bool = False


class ExportChatInviteLink(ChatRequest):
    endpoint: ClassVar[str] = "exportChatInviteLink"
    returns: ClassVar[Any] = str


class CreateChatInviteLink(ChatRequest):
    endpoint: ClassVar[str] = "createChatInviteLink"
    returns: ClassVar[Any] = ChatInviteLink

    name: Optional[str] = None
    expire_date: Optional[int] = None
    member_limit: Optional[int] = None
    creates_join_request: bool = False


class EditChatInviteLink(CreateChatInviteLink):
    endpoint: ClassVar[str] = "editChatInviteLink"
    non_empty: ClassVar[Tuple[str, ...]] = ("invite_link",)

    invite_link: str


class RevokeChatInviteLink(ChatRequest):
    endpoint: ClassVar[str] = "revokeChatInviteLink"
    returns: ClassVar[Any] = ChatInviteLink
    non_empty: ClassVar[Tuple[str, ...]] = ("invite_link",)

    invite_link: str


class ApproveChatJoinRequest(ChatRequest):
    endpoint: ClassVar[str] = "approveChatJoinRequest"

    user_id: int


class DeclineChatJoinRequest(ChatRequest):
    endpoint: ClassVar[str] = "declineChatJoinRequest"

    user_id: int


class SetChatPhoto(ChatRequest):
    endpoint: ClassVar[str] = "setChatPhoto"

    photo: InputFile


class DeleteChatPhoto(ChatRequest):
    endpoint: ClassVar[str] = "deleteChatPhoto"


class SetChatTitle(ChatRequest):
    endpoint: ClassVar[str] = "setChatTitle"
    non_empty: ClassVar[Tuple[str, ...]] = ("title",)

    title: str


class SetChatDescription(ChatRequest):
    endpoint: ClassVar[str] = "setChatDescription"

    description: Optional[str] = None


class LeaveChat(ChatRequest):
    endpoint: ClassVar[str] = "leaveChat"


class GetChat(ChatRequest):
    endpoint: ClassVar[str] = "getChat"
    returns: ClassVar[Any] = ChatFullInfo


class GetChatAdministrators(ChatRequest):
    endpoint: ClassVar[str] = "getChatAdministrators"
    returns: ClassVar[Any] = List[ChatMember]


class GetChatMemberCount(ChatRequest):
    endpoint: ClassVar[str] = "getChatMemberCount"
    returns: ClassVar[Any] = int


class GetChatMember(ChatRequest):
    endpoint: ClassVar[str] = "getChatMember"
    returns: ClassVar[Any] = ChatMember

    user_id: int


class SetChatStickerSet(ChatRequest):
    endpoint: ClassVar[str] = "setChatStickerSet"
    non_empty: ClassVar[Tuple[str, ...]] = ("sticker_set_name",)

    sticker_set_name: str


class DeleteChatStickerSet(ChatRequest):
    endpoint: ClassVar[str] = "deleteChatStickerSet"


class GetUserChatBoosts(ChatRequest):
    endpoint: ClassVar[str] = "getUserChatBoosts"
    returns: ClassVar[Any] = UserChatBoosts

    user_id: int


class GetBusinessConnection(Request):
    endpoint: ClassVar[str] = "getBusinessConnection"
    returns: ClassVar[Any] = BusinessConnection
    non_empty: ClassVar[Tuple[str, ...]] = ("business_connection_id",)

    business_connection_id: str


# ── Forum topics ────────────────────────────────────────────────────────────


class GetForumTopicIconStickers(Request):
    endpoint: ClassVar[str] = "getForumTopicIconStickers"
    returns: ClassVar[Any] = List[Sticker]


class CreateForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "createForumTopic"
    returns: ClassVar[Any] = ForumTopic
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    name: str
    icon_color: Optional[int] = None
    icon_custom_emoji_id: Optional[str] = None


class EditForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "editForumTopic"

    message_thread_id: int
    name: Optional[str] = None
    icon_custom_emoji_id: Optional[str] = None


class CloseForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "closeForumTopic"

    message_thread_id: int


class ReopenForumTopic(CloseForumTopic):
    endpoint: ClassVar[str] = "reopenForumTopic"


class DeleteForumTopic(CloseForumTopic):
    endpoint: ClassVar[str] = "deleteForumTopic"


class UnpinAllForumTopicMessages(CloseForumTopic):
    endpoint: ClassVar[str] = "unpinAllForumTopicMessages"


class EditGeneralForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "editGeneralForumTopic"
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    name: str


class CloseGeneralForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "closeGeneralForumTopic"


class ReopenGeneralForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "reopenGeneralForumTopic"


class HideGeneralForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "hideGeneralForumTopic"


class UnhideGeneralForumTopic(ChatRequest):
    endpoint: ClassVar[str] = "unhideGeneralForumTopic"


class UnpinAllGeneralForumTopicMessages(ChatRequest):
    endpoint: ClassVar[str] = "unpinAllGeneralForumTopicMessages"


# ── Callback, inline and web app answers ────────────────────────────────────


class AnswerCallbackQuery(Request):
    endpoint: ClassVar[str] = "answerCallbackQuery"
    non_empty: ClassVar[Tuple[str, ...]] = ("callback_query_id",)

    callback_query_id: str
    text: Optional[str] = None
    show_alert: bool = False
    url: Optional[str] = None
    cache_time: Optional[int] = None


class AnswerInlineQuery(Request):
    endpoint: ClassVar[str] = "answerInlineQuery"
    non_empty: ClassVar[Tuple[str, ...]] = ("inline_query_id",)

    inline_query_id: str
    results: List[InlineQueryResult]
    cache_time: Optional[int] = None
    is_personal: bool = False
    next_offset: Optional[str] = None
    button: Optional[Dict[str, Any]] = None


class AnswerWebAppQuery(Request):
    endpoint: ClassVar[str] = "answerWebAppQuery"
    returns: ClassVar[Any] = SentWebAppMessage
    non_empty: ClassVar[Tuple[str, ...]] = ("web_app_query_id",)

    web_app_query_id: str
    result: InlineQueryResult


# ── Commands, names and descriptions ────────────────────────────────────────


class SetMyCommands(Request):
    endpoint: ClassVar[str] = "setMyCommands"

    commands: List[BotCommand]
    scope: Optional[BotCommandScope] = None
    language_code: Optional[str] = None


class DeleteMyCommands(Request):
    endpoint: ClassVar[str] = "deleteMyCommands"

    scope: Optional[BotCommandScope] = None
    language_code: Optional[str] = None


class GetMyCommands(DeleteMyCommands):
    endpoint: ClassVar[str] = "getMyCommands"
    returns: ClassVar[Any] = List[BotCommand]


class SetMyName(Request):
    endpoint: ClassVar[str] = "setMyName"

    name: Optional[str] = None
    language_code: Optional[str] = None


class GetMyName(Request):
    endpoint: ClassVar[str] = "getMyName"
    returns: ClassVar[Any] = BotName

    language_code: Optional[str] = None


class SetMyDescription(Request):
    endpoint: ClassVar[str] = "setMyDescription"

    description: Optional[str] = None
    language_code: Optional[str] = None


class GetMyDescription(GetMyName):
    endpoint: ClassVar[str] = "getMyDescription"
    returns: ClassVar[Any] = BotDescription


class SetMyShortDescription(Request):
    endpoint: ClassVar[str] = "setMyShortDescription"

    short_description: Optional[str] = None
    language_code: Optional[str] = None


class GetMyShortDescription(GetMyName):
    endpoint: ClassVar[str] = "getMyShortDescription"
    returns: ClassVar[Any] = BotShortDescription


class SetChatMenuButton(Request):
    endpoint: ClassVar[str] = "setChatMenuButton"

    chat_id: Optional[int] = None
    menu_button: Optional[MenuButton] = None


class GetChatMenuButton(Request):
    endpoint: ClassVar[str] = "getChatMenuButton"
    returns: ClassVar[Any] = MenuButton

    chat_id: Optional[int] = None


class SetMyDefaultAdministratorRights(Request):
    endpoint: ClassVar[str] = "setMyDefaultAdministratorRights"

    rights: Optional[ChatAdministratorRights] = None
    for_channels: bool = False


class GetMyDefaultAdministratorRights(Request):
    endpoint: ClassVar[str] = "getMyDefaultAdministratorRights"
    returns: ClassVar[Any] = ChatAdministratorRights

    for_channels: bool = False


# ── Stickers ────────────────────────────────────────────────────────────────


class SendSticker(SendRequest):
    endpoint: ClassVar[str] = "sendSticker"

    sticker: InputFile
    emoji: Optional[str] = None


class GetStickerSet(Request):
    endpoint: ClassVar[str] = "getStickerSet"
    returns: ClassVar[Any] = StickerSet
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    name: str


class GetCustomEmojiStickers(Request):
    endpoint: ClassVar[str] = "getCustomEmojiStickers"
    returns: ClassVar[Any] = List[Sticker]

    custom_emoji_ids: List[str]


class UploadStickerFile(Request):
    endpoint: ClassVar[str] = "uploadStickerFile"
    returns: ClassVar[Any] = File

    user_id: int
    sticker: InputFile
    sticker_format: str


class CreateNewStickerSet(Request):
    endpoint: ClassVar[str] = "createNewStickerSet"
    non_empty: ClassVar[Tuple[str, ...]] = ("name", "title")

    user_id: int
    name: str
    title: str
    stickers: List[InputDescriptor]
    sticker_type: Optional[str] = None
    needs_repainting: bool = False

    def check(self) -> None:
        super().check()
        if not self.stickers:
            raise RequestValidationError("stickers required")
        for sticker in self.stickers:
            if not isinstance(sticker, InputSticker):
                raise RequestValidationError("stickers must be InputSticker values")


class AddStickerToSet(Request):
    endpoint: ClassVar[str] = "addStickerToSet"
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    user_id: int
    name: str
    sticker: InputDescriptor


class SetStickerPositionInSet(Request):
    endpoint: ClassVar[str] = "setStickerPositionInSet"
    non_empty: ClassVar[Tuple[str, ...]] = ("sticker",)

    sticker: str
    position: int


class DeleteStickerFromSet(Request):
    endpoint: ClassVar[str] = "deleteStickerFromSet"
    non_empty: ClassVar[Tuple[str, ...]] = ("sticker",)

    sticker: str


class ReplaceStickerInSet(AddStickerToSet):
    endpoint: ClassVar[str] = "replaceStickerInSet"

    old_sticker: str


class SetStickerEmojiList(Request):
    endpoint: ClassVar[str] = "setStickerEmojiList"

    sticker: str
    emoji_list: List[str]


class SetStickerKeywords(Request):
    endpoint: ClassVar[str] = "setStickerKeywords"

    sticker: str
    keywords: Optional[List[str]] = None


class SetStickerMaskPosition(Request):
    endpoint: ClassVar[str] = "setStickerMaskPosition"

    sticker: str
    mask_position: Optional[MaskPosition] = None


class SetStickerSetTitle(Request):
    endpoint: ClassVar[str] = "setStickerSetTitle"
    non_empty: ClassVar[Tuple[str, ...]] = ("name", "title")

    name: str
    title: str


class SetStickerSetThumbnail(Request):
    endpoint: ClassVar[str] = "setStickerSetThumbnail"
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    name: str
    user_id: int
    format: str
    thumbnail: Optional[InputFile] = None


class SetCustomEmojiStickerSetThumbnail(Request):
    endpoint: ClassVar[str] = "setCustomEmojiStickerSetThumbnail"
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    name: str
    custom_emoji_id: Optional[str] = None


class DeleteStickerSet(Request):
    endpoint: ClassVar[str] = "deleteStickerSet"
    non_empty: ClassVar[Tuple[str, ...]] = ("name",)

    name: str


# ── Payments ────────────────────────────────────────────────────────────────


class InvoiceFields(BaseModel):
    title: str
    description: str
    payload: str
    currency: str
    prices: List[LabeledPrice]
    provider_token: Optional[str] = None
    max_tip_amount: Optional[int] = None
    suggested_tip_amounts: Optional[List[int]] = None
    provider_data: Optional[str] = None
    photo_url: Optional[str] = None
    photo_size: Optional[int] = None
    photo_width: Optional[int] = None
    photo_height: Optional[int] = None
    need_name: bool = False
    need_phone_number: bool = False
    need_email: bool = False
    need_shipping_address: bool = False
    send_phone_number_to_provider: bool = False
    send_email_to_provider: bool = False
    is_flexible: bool = False


class SendInvoice(SendRequest, InvoiceFields):
    endpoint: ClassVar[str] = "sendInvoice"
    non_empty: ClassVar[Tuple[str, ...]] = ("title", "description", "payload", "currency")

    start_parameter: Optional[str] = None


class CreateInvoiceLink(Request, InvoiceFields):
    endpoint: ClassVar[str] = "createInvoiceLink"
    returns: ClassVar[Any] = str
    non_empty: ClassVar[Tuple[str, ...]] = ("title", "description", "payload", "currency")


class AnswerShippingQuery(Request):
    endpoint: ClassVar[str] = "answerShippingQuery"
    non_empty: ClassVar[Tuple[str, ...]] = ("shipping_query_id",)

    shipping_query_id: str
    ok: bool
    shipping_options: Optional[List[ShippingOption]] = None
    error_message: Optional[str] = None

    def check(self) -> None:
        super().check()
        if not self.ok and not self.error_message:
            raise RequestValidationError("error_message required")


class AnswerPreCheckoutQuery(Request):
    endpoint: ClassVar[str] = "answerPreCheckoutQuery"
    non_empty: ClassVar[Tuple[str, ...]] = ("pre_checkout_query_id",)

    pre_checkout_query_id: str
    ok: bool
    error_message: Optional[str] = None

    def check(self) -> None:
        super().check()
        if not self.ok and not self.error_message:
            raise RequestValidationError("error_message required")


class GetStarTransactions(Request):
    endpoint: ClassVar[str] = "getStarTransactions"
    returns: ClassVar[Any] = StarTransactions

    offset: Optional[int] = None
    limit: Optional[int] = None


class RefundStarPayment(Request):
    endpoint: ClassVar[str] = "refundStarPayment"
    non_empty: ClassVar[Tuple[str, ...]] = ("telegram_payment_charge_id",)

    user_id: int
    telegram_payment_charge_id: str


# ── Passport and games ──────────────────────────────────────────────────────


class SetPassportDataErrors(Request):
    endpoint: ClassVar[str] = "setPassportDataErrors"

    user_id: int
    errors: List[PassportElementError]


class SendGame(SendRequest):
    endpoint: ClassVar[str] = "sendGame"
    non_empty: ClassVar[Tuple[str, ...]] = ("game_short_name",)

    game_short_name: str


class SetGameScore(EditRequest):
    endpoint: ClassVar[str] = "setGameScore"

    user_id: int
    score: int
    force: bool = False
    disable_edit_message: bool = False


class GetGameHighScores(EditRequest):
    endpoint: ClassVar[str] = "getGameHighScores"
    returns: ClassVar[Any] = List[GameHighScore]

    user_id: int
