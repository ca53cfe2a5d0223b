"""Mode detection and the top-level HTTP conversion entry points."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from cehttp import metrics
from cehttp.configuration import get_codec_config
from cehttp.event import CloudEvent
from cehttp.exceptions import AmbiguousMessageError, CloudEventError, UnsupportedFormatError

from . import binary, json_format, structured
from .structured import FormatDeserializer, FormatSerializer

logger = logging.getLogger(__name__)


class Mode(Enum):
    """HTTP content mode of a CloudEvents message."""

    BINARY = "binary"
    STRUCTURED = "structured"

    @classmethod
    def parse(cls, value: "str | Mode | None") -> "Mode":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls(get_codec_config().default_mode)
        normalized = str(value).strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ValueError(f"Unsupported content mode: {value!r}")


DEFAULT_DESERIALIZERS: Mapping[str, FormatDeserializer] = {
    json_format.FORMAT_NAME: json_format.deserialize,
}
DEFAULT_SERIALIZERS: Mapping[str, FormatSerializer] = {
    json_format.FORMAT_NAME: json_format.serialize,
}


def classify(headers: Mapping[str, str]) -> Mode | None:
    """Return the content mode of a message, or ``None`` if it is not a CloudEvent.

    Structured mode wins when the ``content-type`` names a CloudEvents
    format; otherwise any ``ce-id`` header (in any case) marks binary mode.
    """

    if structured.is_structured(headers):
        return Mode.STRUCTURED
    if binary.is_binary(headers):
        return Mode.BINARY
    return None


def from_http(
    headers: Mapping[str, str],
    body: Any = None,
    format_deserializers: Mapping[str, FormatDeserializer] | None = None,
) -> CloudEvent:
    """Decode an HTTP message in either content mode.

    Raises :class:`AmbiguousMessageError` when the message is neither a
    binary nor a structured CloudEvent. Any other decoding failure
    propagates unchanged; no partial event is returned.
    """

    mode = classify(headers)
    try:
        if mode is Mode.STRUCTURED:
            event = structured.decode(
                headers,
                body,
                DEFAULT_DESERIALIZERS if format_deserializers is None else format_deserializers,
            )
        elif mode is Mode.BINARY:
            event = binary.decode(headers, body)
        else:
            raise AmbiguousMessageError(
                "message is neither a structured nor a binary CloudEvent"
            )
    except CloudEventError as exc:
        metrics.record_decode_failure(exc)
        raise
    metrics.record_decoded(mode.value)
    return event


def to_binary(event: CloudEvent) -> tuple[dict[str, Any], Any]:
    headers, body = binary.encode(event)
    metrics.record_encoded(Mode.BINARY.value)
    return headers, body


def to_structured(
    event: CloudEvent,
    format_name: str | None = None,
    serializer: FormatSerializer | None = None,
    charset: str | None = None,
) -> tuple[dict[str, str], bytes]:
    """Encode ``event`` in structured mode.

    ``format_name`` and ``charset`` default to the configured
    ``structured_format`` and ``structured_charset``; the format name is
    matched case-insensitively. Without an explicit
    ``serializer`` the built-in one for ``format_name`` is used.
    """

    config = get_codec_config()
    format_name = (format_name or config.structured_format).strip().lower()
    charset = charset or config.structured_charset
    if serializer is None:
        serializer = DEFAULT_SERIALIZERS.get(format_name)
        if serializer is None:
            raise UnsupportedFormatError(format_name)
    headers, body = structured.encode(event, format_name, serializer, charset)
    metrics.record_encoded(Mode.STRUCTURED.value)
    return headers, body


def to_http(event: CloudEvent, mode: "str | Mode | None" = None) -> tuple[dict[str, Any], Any]:
    """Encode ``event`` in ``mode`` (the configured default when ``None``)."""

    if Mode.parse(mode) is Mode.STRUCTURED:
        return to_structured(event)
    return to_binary(event)


def is_binary(headers: Mapping[str, str]) -> bool:
    return classify(headers) is Mode.BINARY


def is_structured(headers: Mapping[str, str]) -> bool:
    return classify(headers) is Mode.STRUCTURED


__all__ = [
    "DEFAULT_DESERIALIZERS",
    "DEFAULT_SERIALIZERS",
    "Mode",
    "classify",
    "from_http",
    "is_binary",
    "is_structured",
    "to_binary",
    "to_http",
    "to_structured",
]
