"""Pydantic models for the Bot API response catalog.

Every class corresponds to an object the remote service returns.  Unknown
fields are ignored so newer API versions keep decoding.  :class:`APIResponse`
is the ``{ok, result | error}`` envelope wrapped around every response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

API_FILE_ENDPOINT = "{base_url}/file/bot{token}/{file_path}"


class ResponseParameters(BaseModel):
    """Contains information about why a request was unsuccessful."""

    migrate_to_chat_id: Optional[int] = None
    retry_after: Optional[int] = None

    model_config = {"populate_by_name": True}


class APIResponse(BaseModel):
    """The envelope every remote call answers with.

    ``result`` is present only when ``ok`` is true; ``error_code`` and
    ``description`` only when it is false.
    """

    ok: bool
    result: Any = None
    error_code: Optional[int] = None
    description: Optional[str] = None
    parameters: Optional[ResponseParameters] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _check_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("envelope must be a JSON object")
        if "ok" not in data:
            raise ValueError("envelope is missing 'ok'")
        if data["ok"] is True:
            if "result" not in data:
                raise ValueError("successful envelope is missing 'result'")
            data = {key: value for key, value in data.items() if key not in ("error_code", "description")}
        elif data["ok"] is False:
            if "error_code" not in data:
                raise ValueError("failed envelope is missing 'error_code'")
            data = {key: value for key, value in data.items() if key != "result"}
        return data


class User(BaseModel):
    """This object represents a Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    is_premium: Optional[bool] = None
    added_to_attachment_menu: Optional[bool] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None
    can_connect_to_business: Optional[bool] = None

    model_config = {"populate_by_name": True}

    def __str__(self) -> str:
        """Username when known, otherwise the full name."""
        if self.username:
            return self.username
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


class Chat(BaseModel):
    """This object represents a chat."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_forum: Optional[bool] = None

    model_config = {"populate_by_name": True}

    def is_private(self) -> bool:
        return self.type == "private"

    def is_group(self) -> bool:
        return self.type == "group"

    def is_super_group(self) -> bool:
        return self.type == "supergroup"

    def is_channel(self) -> bool:
        return self.type == "channel"


class ChatFullInfo(Chat):
    """Full information about a chat, as returned by ``getChat``."""

    accent_color_id: Optional[int] = None
    max_reaction_count: Optional[int] = None
    photo: Optional["ChatPhoto"] = None
    active_usernames: Optional[List[str]] = None
    bio: Optional[str] = None
    has_private_forwards: Optional[bool] = None
    join_to_send_messages: Optional[bool] = None
    join_by_request: Optional[bool] = None
    description: Optional[str] = None
    invite_link: Optional[str] = None
    pinned_message: Optional["Message"] = None
    permissions: Optional["ChatPermissions"] = None
    slow_mode_delay: Optional[int] = None
    message_auto_delete_time: Optional[int] = None
    has_protected_content: Optional[bool] = None
    sticker_set_name: Optional[str] = None
    can_set_sticker_set: Optional[bool] = None
    linked_chat_id: Optional[int] = None
    location: Optional["ChatLocation"] = None


class MessageId(BaseModel):
    """This object represents a unique message identifier."""

    message_id: int

    model_config = {"populate_by_name": True}


class MessageEntity(BaseModel):
    """One special entity in a text message: hashtags, usernames, URLs, etc."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional["User"] = None
    language: Optional[str] = None
    custom_emoji_id: Optional[str] = None

    model_config = {"populate_by_name": True}

    def is_mention(self) -> bool:
        return self.type == "mention"

    def is_hashtag(self) -> bool:
        return self.type == "hashtag"

    def is_command(self) -> bool:
        return self.type == "bot_command"

    def is_url(self) -> bool:
        return self.type == "url"

    def is_email(self) -> bool:
        return self.type == "email"

    def is_bold(self) -> bool:
        return self.type == "bold"

    def is_italic(self) -> bool:
        return self.type == "italic"

    def is_code(self) -> bool:
        return self.type == "code"

    def is_pre(self) -> bool:
        return self.type == "pre"

    def is_text_link(self) -> bool:
        return self.type == "text_link"


class LinkPreviewOptions(BaseModel):
    """Options used for link preview generation."""

    is_disabled: Optional[bool] = None
    url: Optional[str] = None
    prefer_small_media: Optional[bool] = None
    prefer_large_media: Optional[bool] = None
    show_above_text: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ReplyParameters(BaseModel):
    """Describes reply parameters for the message that is being sent."""

    message_id: int
    chat_id: Optional[int | str] = None
    allow_sending_without_reply: Optional[bool] = None
    quote: Optional[str] = None
    quote_parse_mode: Optional[str] = None
    quote_position: Optional[int] = None

    model_config = {"populate_by_name": True}


class PhotoSize(BaseModel):
    """One size of a photo or a file / sticker thumbnail."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Animation(BaseModel):
    """An animation file (GIF or H.264/MPEG-4 AVC video without sound)."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumbnail: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Audio(BaseModel):
    """An audio file to be treated as music by the Telegram clients."""

    file_id: str
    file_unique_id: str
    duration: int
    performer: Optional[str] = None
    title: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    thumbnail: Optional["PhotoSize"] = None

    model_config = {"populate_by_name": True}


class Document(BaseModel):
    """A general file (as opposed to photos, voice messages and audio files)."""

    file_id: str
    file_unique_id: str
    thumbnail: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Video(BaseModel):
    """This object represents a video file."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumbnail: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class VideoNote(BaseModel):
    """A video message."""

    file_id: str
    file_unique_id: str
    length: int
    duration: int
    thumbnail: Optional["PhotoSize"] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Voice(BaseModel):
    """A voice note."""

    file_id: str
    file_unique_id: str
    duration: int
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Contact(BaseModel):
    """A phone contact."""

    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    user_id: Optional[int] = None
    vcard: Optional[str] = None

    model_config = {"populate_by_name": True}


class Dice(BaseModel):
    """An animated emoji that displays a random value."""

    emoji: str
    value: int

    model_config = {"populate_by_name": True}


class PollOption(BaseModel):
    """Information about one answer option in a poll."""

    text: str
    voter_count: int

    model_config = {"populate_by_name": True}


class PollAnswer(BaseModel):
    """An answer of a user in a non-anonymous poll."""

    poll_id: str
    option_ids: List[int]
    voter_chat: Optional["Chat"] = None
    user: Optional["User"] = None

    model_config = {"populate_by_name": True}


class Poll(BaseModel):
    """Information about a poll."""

    id: str
    question: str
    options: List["PollOption"]
    total_voter_count: int
    is_closed: bool
    is_anonymous: bool
    type: str
    allows_multiple_answers: bool
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    explanation_entities: Optional[List["MessageEntity"]] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None

    model_config = {"populate_by_name": True}


class Location(BaseModel):
    """A point on the map."""

    latitude: float
    longitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None

    model_config = {"populate_by_name": True}


class Venue(BaseModel):
    """A venue."""

    location: "Location"
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None
    google_place_id: Optional[str] = None
    google_place_type: Optional[str] = None

    model_config = {"populate_by_name": True}


class Message(BaseModel):
    """This object represents a message."""

    message_id: int
    date: int
    chat: "Chat"
    message_thread_id: Optional[int] = None
    from_field: Optional["User"] = Field(None, alias="from")
    sender_chat: Optional["Chat"] = None
    business_connection_id: Optional[str] = None
    is_topic_message: Optional[bool] = None
    is_automatic_forward: Optional[bool] = None
    reply_to_message: Optional["Message"] = None
    via_bot: Optional["User"] = None
    edit_date: Optional[int] = None
    has_protected_content: Optional[bool] = None
    media_group_id: Optional[str] = None
    author_signature: Optional[str] = None
    text: Optional[str] = None
    entities: Optional[List["MessageEntity"]] = None
    link_preview_options: Optional["LinkPreviewOptions"] = None
    effect_id: Optional[str] = None
    animation: Optional["Animation"] = None
    audio: Optional["Audio"] = None
    document: Optional["Document"] = None
    photo: Optional[List["PhotoSize"]] = None
    sticker: Optional["Sticker"] = None
    video: Optional["Video"] = None
    video_note: Optional["VideoNote"] = None
    voice: Optional["Voice"] = None
    caption: Optional[str] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    show_caption_above_media: Optional[bool] = None
    has_media_spoiler: Optional[bool] = None
    contact: Optional["Contact"] = None
    dice: Optional["Dice"] = None
    game: Optional["Game"] = None
    poll: Optional["Poll"] = None
    venue: Optional["Venue"] = None
    location: Optional["Location"] = None
    new_chat_members: Optional[List["User"]] = None
    left_chat_member: Optional["User"] = None
    new_chat_title: Optional[str] = None
    new_chat_photo: Optional[List["PhotoSize"]] = None
    delete_chat_photo: Optional[bool] = None
    group_chat_created: Optional[bool] = None
    supergroup_chat_created: Optional[bool] = None
    channel_chat_created: Optional[bool] = None
    migrate_to_chat_id: Optional[int] = None
    migrate_from_chat_id: Optional[int] = None
    invoice: Optional["Invoice"] = None
    successful_payment: Optional["SuccessfulPayment"] = None
    connected_website: Optional[str] = None
    reply_markup: Optional["InlineKeyboardMarkup"] = None

    model_config = {"populate_by_name": True}

    def is_command(self) -> bool:
        """True when the message starts with a ``bot_command`` entity."""
        if not self.entities:
            return False
        entity = self.entities[0]
        return entity.offset == 0 and entity.is_command()

    def command_with_at(self) -> str:
        """The command without the leading slash, ``@botname`` kept."""
        if not self.is_command():
            return ""
        entity = self.entities[0]
        return (self.text or "")[1:entity.length]

    def command(self) -> str:
        """The command without the leading slash and ``@botname``."""
        return self.command_with_at().split("@", 1)[0]

    def command_arguments(self) -> str:
        """Everything after the command, stripped; the whole text otherwise."""
        text = self.text or ""
        if not self.is_command():
            return text
        entity = self.entities[0]
        return text[entity.length:].strip()


class UserProfilePhotos(BaseModel):
    """A user's profile pictures."""

    total_count: int
    photos: List[List["PhotoSize"]]

    model_config = {"populate_by_name": True}


class File(BaseModel):
    """A file ready to be downloaded via :meth:`link`.

    The link is guaranteed to be valid for at least one hour.
    """

    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None

    model_config = {"populate_by_name": True}

    def link(self, token: str, base_url: str = "https://api.telegram.org") -> str:
        return API_FILE_ENDPOINT.format(
            base_url=base_url.rstrip("/"),
            token=token,
            file_path=self.file_path or "",
        )


class WebAppInfo(BaseModel):
    """Describes a Web App."""

    url: str

    model_config = {"populate_by_name": True}


class KeyboardButtonPollType(BaseModel):
    """Type of a poll allowed to be created when the button is pressed."""

    type: Optional[str] = None

    model_config = {"populate_by_name": True}


class KeyboardButton(BaseModel):
    """One button of the reply keyboard."""

    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None
    request_poll: Optional["KeyboardButtonPollType"] = None
    web_app: Optional["WebAppInfo"] = None

    model_config = {"populate_by_name": True}


class ReplyKeyboardMarkup(BaseModel):
    """A custom keyboard with reply options."""

    keyboard: List[List["KeyboardButton"]]
    is_persistent: Optional[bool] = None
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ReplyKeyboardRemove(BaseModel):
    """Removes the current custom keyboard."""

    remove_keyboard: bool = True
    selective: Optional[bool] = None

    model_config = {"populate_by_name": True}


class LoginUrl(BaseModel):
    """Parameter of an inline keyboard button used to authorize a user."""

    url: str
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None

    model_config = {"populate_by_name": True}


class SwitchInlineQueryChosenChat(BaseModel):
    """Switches to inline mode in a chosen chat, with an optional default query."""

    query: Optional[str] = None
    allow_user_chats: Optional[bool] = None
    allow_bot_chats: Optional[bool] = None
    allow_group_chats: Optional[bool] = None
    allow_channel_chats: Optional[bool] = None

    model_config = {"populate_by_name": True}


class CallbackGame(BaseModel):
    """A placeholder, currently holds no information."""

    model_config = {"populate_by_name": True}


class InlineKeyboardButton(BaseModel):
    """One button of an inline keyboard. Exactly one optional field must be used."""

    text: str
    url: Optional[str] = None
    callback_data: Optional[str] = None
    web_app: Optional["WebAppInfo"] = None
    login_url: Optional["LoginUrl"] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    switch_inline_query_chosen_chat: Optional["SwitchInlineQueryChosenChat"] = None
    callback_game: Optional["CallbackGame"] = None
    pay: Optional[bool] = None

    model_config = {"populate_by_name": True}


class InlineKeyboardMarkup(BaseModel):
    """An inline keyboard that appears right next to the message it belongs to."""

    inline_keyboard: List[List["InlineKeyboardButton"]]

    model_config = {"populate_by_name": True}


class ForceReply(BaseModel):
    """Displays a reply interface to the user."""

    force_reply: bool = True
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None

    model_config = {"populate_by_name": True}


class CallbackQuery(BaseModel):
    """An incoming callback query from a callback button in an inline keyboard."""

    id: str
    from_field: "User" = Field(..., alias="from")
    chat_instance: str
    message: Optional["Message"] = None
    inline_message_id: Optional[str] = None
    data: Optional[str] = None
    game_short_name: Optional[str] = None

    model_config = {"populate_by_name": True}


class ChatPhoto(BaseModel):
    """A chat photo."""

    small_file_id: str
    small_file_unique_id: str
    big_file_id: str
    big_file_unique_id: str

    model_config = {"populate_by_name": True}


class ChatInviteLink(BaseModel):
    """An invite link for a chat."""

    invite_link: str
    creator: "User"
    creates_join_request: bool
    is_primary: bool
    is_revoked: bool
    name: Optional[str] = None
    expire_date: Optional[int] = None
    member_limit: Optional[int] = None
    pending_join_request_count: Optional[int] = None

    model_config = {"populate_by_name": True}


class ChatAdministratorRights(BaseModel):
    """The rights of an administrator in a chat."""

    is_anonymous: bool = False
    can_manage_chat: bool = False
    can_delete_messages: bool = False
    can_manage_video_chats: bool = False
    can_restrict_members: bool = False
    can_promote_members: bool = False
    can_change_info: bool = False
    can_invite_users: bool = False
    can_post_stories: bool = False
    can_edit_stories: bool = False
    can_delete_stories: bool = False
    can_post_messages: Optional[bool] = None
    can_edit_messages: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    can_manage_topics: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ChatPermissions(BaseModel):
    """Actions a non-administrator user is allowed to take in a chat."""

    can_send_messages: Optional[bool] = None
    can_send_audios: Optional[bool] = None
    can_send_documents: Optional[bool] = None
    can_send_photos: Optional[bool] = None
    can_send_videos: Optional[bool] = None
    can_send_video_notes: Optional[bool] = None
    can_send_voice_notes: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    can_manage_topics: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ChatMember(BaseModel):
    """Information about one member of a chat.

    The remote service sends one of six shapes discriminated by ``status``;
    they are folded into a single model with optional fields.
    """

    user: "User"
    status: str
    custom_title: Optional[str] = None
    is_anonymous: Optional[bool] = None
    until_date: Optional[int] = None
    can_be_edited: Optional[bool] = None
    can_manage_chat: Optional[bool] = None
    can_post_messages: Optional[bool] = None
    can_edit_messages: Optional[bool] = None
    can_delete_messages: Optional[bool] = None
    can_restrict_members: Optional[bool] = None
    can_promote_members: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    can_manage_topics: Optional[bool] = None
    is_member: Optional[bool] = None
    can_send_messages: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ChatMemberUpdated(BaseModel):
    """Changes in the status of a chat member."""

    chat: "Chat"
    from_field: "User" = Field(..., alias="from")
    date: int
    old_chat_member: "ChatMember"
    new_chat_member: "ChatMember"
    invite_link: Optional["ChatInviteLink"] = None

    model_config = {"populate_by_name": True}


class ChatJoinRequest(BaseModel):
    """A join request sent to a chat."""

    chat: "Chat"
    from_field: "User" = Field(..., alias="from")
    user_chat_id: int
    date: int
    bio: Optional[str] = None
    invite_link: Optional["ChatInviteLink"] = None

    model_config = {"populate_by_name": True}


class ChatLocation(BaseModel):
    """A location to which a chat is connected."""

    location: "Location"
    address: str

    model_config = {"populate_by_name": True}


class ForumTopic(BaseModel):
    """A forum topic."""

    message_thread_id: int
    name: str
    icon_color: int
    icon_custom_emoji_id: Optional[str] = None

    model_config = {"populate_by_name": True}


class ReactionType(BaseModel):
    """A reaction: ``emoji``, ``custom_emoji`` or ``paid``."""

    type: str
    emoji: Optional[str] = None
    custom_emoji_id: Optional[str] = None

    model_config = {"populate_by_name": True}


class MessageReactionUpdated(BaseModel):
    """A change of a reaction on a message performed by a user."""

    chat: "Chat"
    message_id: int
    date: int
    old_reaction: List["ReactionType"]
    new_reaction: List["ReactionType"]
    user: Optional["User"] = None
    actor_chat: Optional["Chat"] = None

    model_config = {"populate_by_name": True}


class ChatBoost(BaseModel):
    """Information about a chat boost."""

    boost_id: str
    add_date: int
    expiration_date: int
    source: Dict[str, Any]

    model_config = {"populate_by_name": True}


class UserChatBoosts(BaseModel):
    """A list of boosts added to a chat by a user."""

    boosts: List["ChatBoost"]

    model_config = {"populate_by_name": True}


class BusinessConnection(BaseModel):
    """The connection of the bot with a business account."""

    id: str
    user: "User"
    user_chat_id: int
    date: int
    can_reply: bool
    is_enabled: bool

    model_config = {"populate_by_name": True}


class BotCommand(BaseModel):
    """A bot command."""

    command: str
    description: str

    model_config = {"populate_by_name": True}


class BotCommandScope(BaseModel):
    """The scope to which bot commands are applied.

    ``type`` is one of ``default``, ``all_private_chats``,
    ``all_group_chats``, ``all_chat_administrators``, ``chat``,
    ``chat_administrators`` or ``chat_member``.
    """

    type: str = "default"
    chat_id: Optional[int | str] = None
    user_id: Optional[int] = None

    model_config = {"populate_by_name": True}


class BotName(BaseModel):
    """The bot's name."""

    name: str

    model_config = {"populate_by_name": True}


class BotDescription(BaseModel):
    """The bot's description."""

    description: str

    model_config = {"populate_by_name": True}


class BotShortDescription(BaseModel):
    """The bot's short description."""

    short_description: str

    model_config = {"populate_by_name": True}


class MenuButton(BaseModel):
    """The bot's menu button in a private chat: ``commands``, ``web_app`` or ``default``."""

    type: str = "default"
    text: Optional[str] = None
    web_app: Optional["WebAppInfo"] = None

    model_config = {"populate_by_name": True}


class MaskPosition(BaseModel):
    """The position on faces where a mask should be placed by default."""

    point: str
    x_shift: float
    y_shift: float
    scale: float

    model_config = {"populate_by_name": True}


class Sticker(BaseModel):
    """A sticker."""

    file_id: str
    file_unique_id: str
    type: str
    width: int
    height: int
    is_animated: bool
    is_video: bool
    thumbnail: Optional["PhotoSize"] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    mask_position: Optional["MaskPosition"] = None
    custom_emoji_id: Optional[str] = None
    needs_repainting: Optional[bool] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class StickerSet(BaseModel):
    """A sticker set."""

    name: str
    title: str
    sticker_type: str
    stickers: List["Sticker"]
    thumbnail: Optional["PhotoSize"] = None

    model_config = {"populate_by_name": True}


class InlineQuery(BaseModel):
    """An incoming inline query."""

    id: str
    from_field: "User" = Field(..., alias="from")
    query: str
    offset: str
    chat_type: Optional[str] = None
    location: Optional["Location"] = None

    model_config = {"populate_by_name": True}


class InlineQueryResult(BaseModel):
    """One result of an inline query.

    There are twenty result types; the common fields are declared and
    type-specific ones are accepted as extra fields and sent as given.
    """

    type: str
    id: str
    reply_markup: Optional["InlineKeyboardMarkup"] = None

    model_config = {"populate_by_name": True, "extra": "allow"}


class ChosenInlineResult(BaseModel):
    """A result of an inline query that was chosen by the user."""

    result_id: str
    from_field: "User" = Field(..., alias="from")
    query: str
    location: Optional["Location"] = None
    inline_message_id: Optional[str] = None

    model_config = {"populate_by_name": True}


class SentWebAppMessage(BaseModel):
    """Information about an inline message sent by a Web App on behalf of a user."""

    inline_message_id: Optional[str] = None

    model_config = {"populate_by_name": True}


class LabeledPrice(BaseModel):
    """A portion of the price for goods or services."""

    label: str
    amount: int

    model_config = {"populate_by_name": True}


class Invoice(BaseModel):
    """Basic information about an invoice."""

    title: str
    description: str
    start_parameter: str
    currency: str
    total_amount: int

    model_config = {"populate_by_name": True}


class ShippingAddress(BaseModel):
    """A shipping address."""

    country_code: str
    state: str
    city: str
    street_line1: str
    street_line2: str
    post_code: str

    model_config = {"populate_by_name": True}


class OrderInfo(BaseModel):
    """Information about an order."""

    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    shipping_address: Optional["ShippingAddress"] = None

    model_config = {"populate_by_name": True}


class ShippingOption(BaseModel):
    """One shipping option."""

    id: str
    title: str
    prices: List["LabeledPrice"]

    model_config = {"populate_by_name": True}


class SuccessfulPayment(BaseModel):
    """Basic information about a successful payment."""

    currency: str
    total_amount: int
    invoice_payload: str
    telegram_payment_charge_id: str
    provider_payment_charge_id: str
    shipping_option_id: Optional[str] = None
    order_info: Optional["OrderInfo"] = None

    model_config = {"populate_by_name": True}


class ShippingQuery(BaseModel):
    """An incoming shipping query."""

    id: str
    from_field: "User" = Field(..., alias="from")
    invoice_payload: str
    shipping_address: "ShippingAddress"

    model_config = {"populate_by_name": True}


class PreCheckoutQuery(BaseModel):
    """An incoming pre-checkout query."""

    id: str
    from_field: "User" = Field(..., alias="from")
    currency: str
    total_amount: int
    invoice_payload: str
    shipping_option_id: Optional[str] = None
    order_info: Optional["OrderInfo"] = None

    model_config = {"populate_by_name": True}


class StarTransaction(BaseModel):
    """A Telegram Star transaction."""

    id: str
    amount: int
    date: int
    source: Optional[Dict[str, Any]] = None
    receiver: Optional[Dict[str, Any]] = None

    model_config = {"populate_by_name": True}


class StarTransactions(BaseModel):
    """A list of Telegram Star transactions."""

    transactions: List["StarTransaction"]

    model_config = {"populate_by_name": True}


class PassportElementError(BaseModel):
    """An error in a Telegram Passport element submitted by the user.

    ``source`` selects the variant; variant fields are accepted as extras.
    """

    source: str
    type: str
    message: str

    model_config = {"populate_by_name": True, "extra": "allow"}


class Game(BaseModel):
    """A game."""

    title: str
    description: str
    photo: List["PhotoSize"]
    text: Optional[str] = None
    text_entities: Optional[List["MessageEntity"]] = None
    animation: Optional["Animation"] = None

    model_config = {"populate_by_name": True}


class GameHighScore(BaseModel):
    """One row of the high scores table for a game."""

    position: int
    user: "User"
    score: int

    model_config = {"populate_by_name": True}


class WebhookInfo(BaseModel):
    """Current status of a webhook."""

    url: str
    has_custom_certificate: bool
    pending_update_count: int
    ip_address: Optional[str] = None
    last_error_date: Optional[int] = None
    last_error_message: Optional[str] = None
    last_synchronization_error_date: Optional[int] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[List[str]] = None

    model_config = {"populate_by_name": True}


class Update(BaseModel):
    """An incoming update. At most one of the optional fields is present."""

    update_id: int
    message: Optional["Message"] = None
    edited_message: Optional["Message"] = None
    channel_post: Optional["Message"] = None
    edited_channel_post: Optional["Message"] = None
    business_connection: Optional["BusinessConnection"] = None
    business_message: Optional["Message"] = None
    edited_business_message: Optional["Message"] = None
    message_reaction: Optional["MessageReactionUpdated"] = None
    inline_query: Optional["InlineQuery"] = None
    chosen_inline_result: Optional["ChosenInlineResult"] = None
    callback_query: Optional["CallbackQuery"] = None
    shipping_query: Optional["ShippingQuery"] = None
    pre_checkout_query: Optional["PreCheckoutQuery"] = None
    poll: Optional["Poll"] = None
    poll_answer: Optional["PollAnswer"] = None
    my_chat_member: Optional["ChatMemberUpdated"] = None
    chat_member: Optional["ChatMemberUpdated"] = None
    chat_join_request: Optional["ChatJoinRequest"] = None

    model_config = {"populate_by_name": True}

    def sent_from(self) -> Optional[User]:
        """The user who sent the update, when the update carries one."""
        for source in (
            self.message,
            self.edited_message,
            self.inline_query,
            self.chosen_inline_result,
            self.callback_query,
            self.shipping_query,
            self.pre_checkout_query,
        ):
            if source is not None:
                return source.from_field
        return None

    def from_chat(self) -> Optional[Chat]:
        """The chat where the update occurred."""
        for message in (self.message, self.edited_message, self.channel_post, self.edited_channel_post):
            if message is not None:
                return message.chat
        if self.callback_query is not None and self.callback_query.message is not None:
            return self.callback_query.message.chat
        return None

    def callback_data(self) -> str:
        if self.callback_query is not None:
            return self.callback_query.data or ""
        return ""
