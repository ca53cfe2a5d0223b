from __future__ import annotations

"""Structured content mode: the whole event as one formatted document."""

from typing import Any, Callable, Mapping

from cehttp.event import CloudEvent
from cehttp.exceptions import UnsupportedFormatError

from . import content_type, primitives
from .registry import CONTENT_TYPE_HEADER

FormatDeserializer = Callable[[Any, "str | None"], CloudEvent]
FormatSerializer = Callable[[CloudEvent], "str | bytes"]


def content_type_of(headers: Mapping[str, str]) -> str | None:
    for name, value in headers.items():
        if name.lower() == CONTENT_TYPE_HEADER:
            return value
    return None


def is_structured(headers: Mapping[str, str]) -> bool:
    value = content_type_of(headers)
    return value is not None and value.strip().lower().startswith(content_type.STRUCTURED_PREFIX)


def decode(
    headers: Mapping[str, str],
    body: Any,
    format_deserializers: Mapping[str, FormatDeserializer],
) -> CloudEvent:
    """Decode a structured-mode message with the deserializer for its format.

    Raises :class:`UnsupportedFormatError` when ``format_deserializers`` has
    no entry for the format named by the ``content-type`` header.
    """

    format_name, charset = content_type.parse(content_type_of(headers))
    deserializer = format_deserializers.get(format_name)
    if deserializer is None:
        raise UnsupportedFormatError(format_name)
    return deserializer(body, charset)


def encode(
    event: CloudEvent,
    format_name: str,
    serialize_fn: FormatSerializer,
    charset: str,
) -> tuple[dict[str, str], bytes]:
    """Return ``(headers, body)`` carrying ``event`` in structured mode.

    Text produced by ``serialize_fn`` is encoded with ``charset``; bytes are
    passed through untouched.
    """

    headers = {CONTENT_TYPE_HEADER: content_type.build(format_name, charset)}
    body = serialize_fn(event)
    return headers, primitives.encode_text(body, charset)


__all__ = [
    "FormatDeserializer",
    "FormatSerializer",
    "content_type_of",
    "decode",
    "encode",
    "is_structured",
]
