"""Streamed ``multipart/form-data`` request bodies.

Upload sources are opened up front by :meth:`MultipartBody.open`, so a
missing local file fails before any network activity.  The body itself is
produced lazily by :meth:`MultipartBody.chunks` while the HTTP client sends
it, which keeps memory bounded to one chunk regardless of file size.
"""

from __future__ import annotations

import mimetypes
import uuid
from typing import BinaryIO, Iterator, List, Mapping, Optional, Sequence, Tuple

from botapi.files import FileReader, RequestFile

CHUNK_SIZE = 64 * 1024

_CRLF = b"\r\n"


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "%0D").replace("\n", "%0A")


class _Part:
    __slots__ = ("field", "value", "filename", "stream", "owned")

    def __init__(
        self,
        field: str,
        value: Optional[str] = None,
        filename: Optional[str] = None,
        stream: Optional[BinaryIO] = None,
        owned: bool = False,
    ) -> None:
        self.field = field
        self.value = value
        self.filename = filename
        self.stream = stream
        self.owned = owned


class MultipartBody:
    """A multipart body built from a parameter map and named files.

    Every parameter becomes a text field.  Each named file becomes a file
    part when its reference needs uploading, otherwise a text field carrying
    ``send_data()``.  Use as a context manager so opened files are closed on
    every exit path; streams supplied through :class:`FileReader` belong to
    the caller and are left open.
    """

    def __init__(
        self,
        params: Mapping[str, str],
        files: Sequence[RequestFile],
        boundary: Optional[str] = None,
    ) -> None:
        self.params = dict(params)
        self.files = list(files)
        self.boundary = boundary or uuid.uuid4().hex
        self._parts: List[_Part] = []
        self._opened = False

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def open(self) -> "MultipartBody":
        """Resolve every named file; an ``OSError`` leaves nothing open."""
        if self._opened:
            return self
        parts: List[_Part] = [_Part(field, value=value) for field, value in self.params.items()]
        try:
            for file in self.files:
                if file.data.needs_upload():
                    name, stream = file.data.upload_data()
                    parts.append(_Part(
                        file.name,
                        filename=file.filename or name,
                        stream=stream,
                        owned=not isinstance(file.data, FileReader),
                    ))
                else:
                    parts.append(_Part(file.name, value=file.data.send_data()))
        except BaseException:
            _close_parts(parts)
            raise
        self._parts = parts
        self._opened = True
        return self

    def close(self) -> None:
        _close_parts(self._parts)
        self._parts = []

    def __enter__(self) -> "MultipartBody":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def chunks(self) -> Iterator[bytes]:
        """Yield the encoded body; :meth:`open` must have been called."""
        if not self._opened:
            raise RuntimeError("MultipartBody.open() must be called before streaming")
        delimiter = f"--{self.boundary}".encode("ascii")
        for part in self._parts:
            yield delimiter + _CRLF + _part_headers(part) + _CRLF
            if part.stream is None:
                yield (part.value or "").encode("utf-8")
            else:
                while True:
                    chunk = part.stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
            yield _CRLF
        yield delimiter + b"--" + _CRLF

    def to_bytes(self) -> bytes:
        """Encode the whole body in memory (debugging and tests)."""
        return b"".join(self.chunks())


def _part_headers(part: _Part) -> bytes:
    if part.stream is None:
        headers: Tuple[str, ...] = (f'Content-Disposition: form-data; name="{_quote(part.field)}"',)
    else:
        filename = part.filename or part.field
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        headers = (
            f'Content-Disposition: form-data; name="{_quote(part.field)}"; filename="{_quote(filename)}"',
            f"Content-Type: {content_type}",
        )
    return "".join(header + "\r\n" for header in headers).encode("utf-8")


def _close_parts(parts: Sequence[_Part]) -> None:
    for part in parts:
        if part.owned and part.stream is not None:
            part.stream.close()
