"""File references: the values a request may carry in a file-typed field.

Each reference either needs to be uploaded as a multipart file part
(:class:`FileBytes`, :class:`FileReader`, :class:`FilePath`) or is sent as a
plain string (:class:`FileURL`, :class:`FileID`, :class:`FileAttach`).
"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from botapi.exceptions import NotSendableError, NotUploadableError

ATTACH_PREFIX = "attach://"


@dataclass(frozen=True)
class FileBytes:
    """In-memory bytes uploaded under *name*."""

    name: str
    data: bytes

    def needs_upload(self) -> bool:
        return True

    def upload_data(self) -> Tuple[str, BinaryIO]:
        return self.name, io.BytesIO(self.data)

    def send_data(self) -> str:
        raise NotSendableError("FileBytes must be uploaded")


@dataclass(frozen=True)
class FileReader:
    """A caller-owned binary stream uploaded under *name*.

    The stream is read as-is and is not closed by the client.
    """

    name: str
    reader: BinaryIO

    def needs_upload(self) -> bool:
        return True

    def upload_data(self) -> Tuple[str, BinaryIO]:
        return self.name, self.reader

    def send_data(self) -> str:
        raise NotSendableError("FileReader must be uploaded")


@dataclass(frozen=True)
class FilePath:
    """A local file, opened when the upload body is produced.

    The upload filename is the base name of the path.
    """

    path: Union[str, "os.PathLike[str]"]

    def needs_upload(self) -> bool:
        return True

    def upload_data(self) -> Tuple[str, BinaryIO]:
        # Raises OSError (FileNotFoundError, PermissionError, ...) untouched.
        path = os.fspath(self.path)
        handle = open(path, "rb")
        return os.path.basename(path), handle

    def send_data(self) -> str:
        raise NotSendableError("FilePath must be uploaded")


@dataclass(frozen=True)
class FileURL:
    """An HTTP URL the remote service downloads by itself."""

    url: str

    def needs_upload(self) -> bool:
        return False

    def upload_data(self) -> Tuple[str, BinaryIO]:
        raise NotUploadableError("FileURL cannot be uploaded")

    def send_data(self) -> str:
        return self.url


@dataclass(frozen=True)
class FileID:
    """Identifier of a file already stored by the remote service."""

    file_id: str

    def needs_upload(self) -> bool:
        return False

    def upload_data(self) -> Tuple[str, BinaryIO]:
        raise NotUploadableError("FileID cannot be uploaded")

    def send_data(self) -> str:
        return self.file_id


@dataclass(frozen=True)
class FileAttach:
    """``attach://<token>`` placeholder pointing at a multipart part.

    Created by the media resolver; callers do not build these for uploads.
    """

    token: str

    def needs_upload(self) -> bool:
        return False

    def upload_data(self) -> Tuple[str, BinaryIO]:
        raise NotUploadableError("FileAttach cannot be uploaded")

    def send_data(self) -> str:
        if self.token.startswith(ATTACH_PREFIX):
            return self.token
        return ATTACH_PREFIX + self.token


RequestFileData = Union[FileBytes, FileReader, FilePath, FileURL, FileID, FileAttach]

FILE_TYPES = (FileBytes, FileReader, FilePath, FileURL, FileID, FileAttach)


def is_file_reference(value: object) -> bool:
    return isinstance(value, FILE_TYPES)


@dataclass(frozen=True)
class RequestFile:
    """A file reference bound to a multipart field name.

    *filename* overrides the name reported by the reference itself.
    """

    name: str
    data: RequestFileData
    filename: Optional[str] = None


def has_files_needing_upload(files) -> bool:
    return any(file.data.needs_upload() for file in files)


def as_file_reference(value: object) -> RequestFileData:
    """Coerce *value* into a file reference.

    ``http://`` and ``https://`` strings become :class:`FileURL`, other
    strings :class:`FileID`, path objects :class:`FilePath` and raw bytes
    :class:`FileBytes` named ``file``.
    """
    if isinstance(value, FILE_TYPES):
        return value
    if isinstance(value, str):
        if value.startswith(("http://", "https://")):
            return FileURL(value)
        return FileID(value)
    if isinstance(value, os.PathLike):
        return FilePath(value)
    if isinstance(value, (bytes, bytearray)):
        return FileBytes("file", bytes(value))
    raise TypeError(f"cannot use {type(value).__name__} as a file reference")
