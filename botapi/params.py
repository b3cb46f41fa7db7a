"""Wire parameter map: every value is a pre-stringified form field."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def with_at(username: str) -> str:
    """Return *username* prefixed with ``@`` (empty stays empty)."""
    if username and not username.startswith("@"):
        return "@" + username
    return username


def to_json(value: Any) -> str:
    """JSON-encode *value*, dumping pydantic models without None fields."""
    return json.dumps(_jsonable(value), ensure_ascii=False, separators=(",", ":"))


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


def format_float(value: float) -> str:
    return f"{value:.6f}"


class Params(dict):
    """A ``dict[str, str]`` with helpers that skip default values.

    A key is present only when the helper used to set it considered the
    value non-default; absence, never ``null``, means "unset".
    """

    def add_non_empty(self, key: str, value: str | None) -> None:
        if value:
            self[key] = value

    def add_non_zero(self, key: str, value: int | None) -> None:
        if value:
            self[key] = str(int(value))

    # Python ints are unbounded; kept for call sites that mirror 64-bit ids.
    add_non_zero64 = add_non_zero

    def add_non_zero_float(self, key: str, value: float | None) -> None:
        if value:
            self[key] = format_float(value)

    def add_bool(self, key: str, value: bool | None) -> None:
        if value:
            self[key] = "true"

    def add_optional(self, key: str, value: Any) -> None:
        """Set *key* whenever *value* is not ``None``, zero included."""
        if value is None:
            return
        if isinstance(value, bool):
            self[key] = "true" if value else "false"
        elif isinstance(value, int):
            self[key] = str(value)
        elif isinstance(value, float):
            self[key] = format_float(value)
        elif isinstance(value, str):
            self[key] = value
        else:
            self[key] = to_json(value)

    def add_json(self, key: str, value: Any) -> None:
        """JSON-encode *value* into *key*; ``None`` is skipped.

        Encoding errors (``TypeError``/``ValueError``) propagate.
        """
        if value is None:
            return
        self[key] = to_json(value)

    def add_first_valid(self, key: str, *candidates: Any) -> None:
        """Store the first candidate that is not a default value.

        Integers count when non-zero, strings when non-empty, ``None`` never;
        anything else is JSON-encoded and always wins.  So
        ``add_first_valid("chat_id", 0, "", "bob")`` stores ``"bob"``.
        """
        for candidate in candidates:
            if candidate is None or isinstance(candidate, bool):
                continue
            if isinstance(candidate, int):
                if candidate != 0:
                    self[key] = str(candidate)
                    return
            elif isinstance(candidate, str):
                if candidate != "":
                    self[key] = candidate
                    return
            else:
                self[key] = to_json(candidate)
                return
