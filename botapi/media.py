"""Input media descriptors and the attachment resolver for batch requests.

Batch operations (``sendMediaGroup``, ``editMessageMedia``, sticker set
creation) send a JSON list of descriptors.  Descriptors whose file must be
uploaded are rewritten to point at ``attach://file-N`` and the original file
is returned as the matching named multipart part.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from botapi.files import FileAttach, RequestFile, RequestFileData, as_file_reference, is_file_reference
from botapi.models import MaskPosition, MessageEntity


def _dump(value: Any) -> Any:
    if is_file_reference(value):
        return value.send_data()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    return value


class _Descriptor:
    """Shared serialization for the descriptor dataclasses below."""

    type: ClassVar[Optional[str]] = None
    # (field, placeholder suffix) pairs that may hold an upload.
    attach_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (("media", ""), ("thumbnail", "-thumb"))

    def __post_init__(self) -> None:
        for name, _ in self.attach_fields:
            value = getattr(self, name, None)
            if value is not None:
                setattr(self, name, as_file_reference(value))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.type is not None:
            data["type"] = self.type
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None or value is False:
                continue
            data[field.name] = _dump(value)
        return data


@dataclass
class InputMediaPhoto(_Descriptor):
    type: ClassVar[Optional[str]] = "photo"
    attach_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (("media", ""),)

    media: RequestFileData
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: bool = False
    has_spoiler: bool = False


@dataclass
class InputMediaVideo(_Descriptor):
    type: ClassVar[Optional[str]] = "video"

    media: RequestFileData
    thumbnail: Optional[RequestFileData] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    supports_streaming: bool = False
    has_spoiler: bool = False


@dataclass
class InputMediaAnimation(_Descriptor):
    type: ClassVar[Optional[str]] = "animation"

    media: RequestFileData
    thumbnail: Optional[RequestFileData] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    show_caption_above_media: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    has_spoiler: bool = False


@dataclass
class InputMediaAudio(_Descriptor):
    type: ClassVar[Optional[str]] = "audio"

    media: RequestFileData
    thumbnail: Optional[RequestFileData] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None


@dataclass
class InputMediaDocument(_Descriptor):
    type: ClassVar[Optional[str]] = "document"

    media: RequestFileData
    thumbnail: Optional[RequestFileData] = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    disable_content_type_detection: bool = False


@dataclass
class InputSticker(_Descriptor):
    """A sticker to be added to a sticker set.

    ``format`` is ``static``, ``animated`` or ``video``.
    """

    attach_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (("sticker", ""),)

    sticker: RequestFileData
    format: str
    emoji_list: List[str]
    mask_position: Optional[MaskPosition] = None
    keywords: Optional[List[str]] = None


InputMedia = Union[InputMediaPhoto, InputMediaVideo, InputMediaAnimation, InputMediaAudio, InputMediaDocument]

INPUT_MEDIA_TYPES = (InputMediaPhoto, InputMediaVideo, InputMediaAnimation, InputMediaAudio, InputMediaDocument)


def is_descriptor(value: object) -> bool:
    return isinstance(value, _Descriptor)


def prepare_input_media(items: Sequence[_Descriptor]) -> Tuple[List[_Descriptor], List[RequestFile]]:
    """Rewrite uploads in *items* to ``attach://`` placeholders.

    Returns copies of the descriptors plus the named files the placeholders
    refer to: the primary file of item ``N`` becomes ``file-N`` and its
    thumbnail ``file-N-thumb``.  References that need no upload stay as they
    are.  The caller's descriptors are never modified.
    """
    rewritten: List[_Descriptor] = []
    files: List[RequestFile] = []
    for index, item in enumerate(items):
        changes: Dict[str, FileAttach] = {}
        for name, suffix in item.attach_fields:
            value = getattr(item, name, None)
            if value is None or not value.needs_upload():
                continue
            token = f"file-{index}{suffix}"
            changes[name] = FileAttach(token)
            files.append(RequestFile(token, value))
        rewritten.append(dataclasses.replace(item, **changes))
    return rewritten, files
