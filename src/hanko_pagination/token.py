"""Page token codec — Cursor <-> URL-safe opaque string."""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any

import pydantic

from .exceptions import InvalidPageTokenError, TokenEncodeError
from .models import Cursor

_TOKEN_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode_token(cursor: Cursor) -> str:
    """Serialise ``cursor`` into a base64url page token without padding.

    An empty cursor encodes to ``""``, meaning "no token".
    """
    if cursor.is_empty:
        return ""
    payload: dict[str, list[Any]] = {}
    if cursor.start_after:
        payload["startAfter"] = list(cursor.start_after)
    if cursor.start_at:
        payload["startAt"] = list(cursor.start_at)
    try:
        data = json.dumps(payload, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise TokenEncodeError(f"pagination: encode token: {e}") from e
    return base64.urlsafe_b64encode(data.encode("utf-8")).decode("ascii").rstrip("=")


def decode_token(token: str) -> Cursor:
    """Parse a page token produced by :func:`encode_token`.

    Raises:
        InvalidPageTokenError: If the token is not base64url or its payload
            is not a cursor.
    """
    token = token.strip()
    if not token:
        return Cursor()
    if _TOKEN_ALPHABET.fullmatch(token) is None or len(token) % 4 == 1:
        raise InvalidPageTokenError("malformed base64url token")
    try:
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
    except (binascii.Error, ValueError) as e:
        raise InvalidPageTokenError(str(e)) from e

    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise InvalidPageTokenError(f"malformed payload: {e}") from e
    if payload is None:
        return Cursor()
    if not isinstance(payload, dict):
        raise InvalidPageTokenError("payload is not an object")

    try:
        return Cursor(
            start_after=_cursor_values(payload, "startAfter"),
            start_at=_cursor_values(payload, "startAt"),
        )
    except pydantic.ValidationError as e:
        raise InvalidPageTokenError("cursor values must be scalars") from e


def _cursor_values(payload: dict[str, Any], key: str) -> list[Any]:
    values = payload.get(key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise InvalidPageTokenError(f"{key} must be an array")
    return values
