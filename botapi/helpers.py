"""Text escaping and keyboard builders."""

from typing import Dict, List

from botapi.models import (
    ForceReply,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
    WebAppInfo,
)

MODE_MARKDOWN = "Markdown"
MODE_MARKDOWN_V2 = "MarkdownV2"
MODE_HTML = "HTML"

# sendChatAction actions
CHAT_TYPING = "typing"
CHAT_UPLOAD_PHOTO = "upload_photo"
CHAT_RECORD_VIDEO = "record_video"
CHAT_UPLOAD_VIDEO = "upload_video"
CHAT_RECORD_VOICE = "record_voice"
CHAT_UPLOAD_VOICE = "upload_voice"
CHAT_UPLOAD_DOCUMENT = "upload_document"
CHAT_CHOOSE_STICKER = "choose_sticker"
CHAT_FIND_LOCATION = "find_location"
CHAT_RECORD_VIDEO_NOTE = "record_video_note"
CHAT_UPLOAD_VIDEO_NOTE = "upload_video_note"

_ESCAPES: Dict[str, Dict[int, str]] = {
    MODE_HTML: str.maketrans({"<": "&lt;", ">": "&gt;", "&": "&amp;"}),
    MODE_MARKDOWN: str.maketrans({char: "\\" + char for char in "_*`["}),
    MODE_MARKDOWN_V2: str.maketrans({char: "\\" + char for char in "\\_*[]()~`>#+-=|{}.!"}),
}


def escape_text(parse_mode: str, text: str) -> str:
    """Escape *text* so it is shown literally under *parse_mode*.

    Formatting you want to keep must not go through this function, it would
    be escaped as well.  An unknown parse mode yields an empty string.
    """
    table = _ESCAPES.get(parse_mode)
    if table is None:
        return ""
    return text.translate(table)


# ── Reply keyboards ─────────────────────────────────────────────────────────


def new_keyboard_button(text: str) -> KeyboardButton:
    return KeyboardButton(text=text)


def new_keyboard_button_contact(text: str) -> KeyboardButton:
    return KeyboardButton(text=text, request_contact=True)


def new_keyboard_button_location(text: str) -> KeyboardButton:
    return KeyboardButton(text=text, request_location=True)


def new_keyboard_button_web_app(text: str, url: str) -> KeyboardButton:
    return KeyboardButton(text=text, web_app=WebAppInfo(url=url))


def new_keyboard_button_row(*buttons: KeyboardButton) -> List[KeyboardButton]:
    return list(buttons)


def new_reply_keyboard(*rows: List[KeyboardButton]) -> ReplyKeyboardMarkup:
    """A resized reply keyboard made of *rows*."""
    return ReplyKeyboardMarkup(keyboard=[list(row) for row in rows], resize_keyboard=True)


def new_one_time_reply_keyboard(*rows: List[KeyboardButton]) -> ReplyKeyboardMarkup:
    markup = new_reply_keyboard(*rows)
    markup.one_time_keyboard = True
    return markup


def new_remove_keyboard(selective: bool = False) -> ReplyKeyboardRemove:
    return ReplyKeyboardRemove(remove_keyboard=True, selective=selective or None)


def new_force_reply(selective: bool = False, input_field_placeholder: str = "") -> ForceReply:
    return ForceReply(
        force_reply=True,
        selective=selective or None,
        input_field_placeholder=input_field_placeholder or None,
    )


# ── Inline keyboards ────────────────────────────────────────────────────────


def new_inline_keyboard_button_data(text: str, data: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, callback_data=data)


def new_inline_keyboard_button_url(text: str, url: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, url=url)


def new_inline_keyboard_button_switch(text: str, query: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, switch_inline_query=query)


def new_inline_keyboard_button_web_app(text: str, url: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, web_app=WebAppInfo(url=url))


def new_inline_keyboard_row(*buttons: InlineKeyboardButton) -> List[InlineKeyboardButton]:
    return list(buttons)


def new_inline_keyboard_markup(*rows: List[InlineKeyboardButton]) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[list(row) for row in rows])
