from __future__ import annotations

"""Scalar codecs shared by the binary and structured encodings.

Every function here is pure. Failures raise a :class:`FieldCodecError`
subclass without a field name; the callers in :mod:`cehttp.codecs.registry`
bind the offending header or JSON key before re-raising.
"""

import base64
import binascii
import codecs
import re
from datetime import datetime, timezone
from urllib.parse import SplitResult, urlsplit

from cehttp.exceptions import (
    CharsetError,
    MalformedBase64Error,
    MalformedTimestampError,
    MalformedURIError,
)

_FRACTION = re.compile(r"\.(\d+)")
_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})"
)


# ---------------------------------------------------------------------------
# URI references
# ---------------------------------------------------------------------------


def parse_uri(value: str | SplitResult) -> SplitResult:
    if isinstance(value, SplitResult):
        return value
    if not isinstance(value, str):
        raise MalformedURIError(f"expected string, got {type(value).__name__}")
    try:
        return urlsplit(value)
    except ValueError as exc:
        raise MalformedURIError(f"invalid URI reference {value!r}") from exc


def format_uri(value: str | SplitResult) -> str:
    if isinstance(value, SplitResult):
        return value.geturl()
    return parse_uri(value).geturl()


# ---------------------------------------------------------------------------
# RFC3339 timestamps
# ---------------------------------------------------------------------------


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an RFC3339 timestamp into an aware ``datetime``.

    ``Z`` is accepted as UTC and fractional seconds finer than a microsecond
    are truncated. Anything outside the RFC3339 date-time shape, such as a
    missing UTC offset or the ISO 8601 basic format, is rejected.
    """

    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise MalformedTimestampError(f"expected string, got {type(value).__name__}")
    text = value.strip()
    if not _RFC3339.fullmatch(text):
        raise MalformedTimestampError(f"invalid RFC3339 timestamp {value!r}")
    text = f"{text[:10]}T{text[11:]}"
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedTimestampError(f"invalid RFC3339 timestamp {value!r}") from exc


def format_timestamp(value: datetime | str) -> str:
    if isinstance(value, str):
        value = parse_timestamp(value)
    if not isinstance(value, datetime):
        raise MalformedTimestampError(f"expected datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


# ---------------------------------------------------------------------------
# Base64 payloads
# ---------------------------------------------------------------------------


def decode_base64(value: str | bytes) -> bytes:
    if not isinstance(value, (str, bytes)):
        raise MalformedBase64Error(f"expected string, got {type(value).__name__}")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedBase64Error("invalid base64 payload") from exc


def encode_base64(value: bytes | str) -> str:
    if isinstance(value, str):
        value = value.encode("utf-8")
    return base64.b64encode(value).decode("ascii")


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def decode_text(value: bytes | bytearray | str, charset: str) -> str:
    if isinstance(value, str):
        return value
    try:
        codecs.lookup(charset)
    except LookupError as exc:
        raise CharsetError(f"unknown charset {charset!r}") from exc
    try:
        return bytes(value).decode(charset)
    except UnicodeDecodeError as exc:
        raise CharsetError(f"body is not valid {charset}") from exc


def encode_text(value: str | bytes, charset: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    try:
        return value.encode(charset)
    except LookupError as exc:
        raise CharsetError(f"unknown charset {charset!r}") from exc
    except UnicodeEncodeError as exc:
        raise CharsetError(f"text cannot be encoded as {charset}") from exc


__all__ = [
    "decode_base64",
    "decode_text",
    "encode_base64",
    "encode_text",
    "format_timestamp",
    "format_uri",
    "parse_timestamp",
    "parse_uri",
]
