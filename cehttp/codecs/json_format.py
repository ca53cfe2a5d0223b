from __future__ import annotations

"""JSON event format for structured content mode."""

import json
import logging
from typing import Any, Mapping

from cehttp.event import CloudEvent
from cehttp.exceptions import InvalidEventError, MalformedBase64Error, MalformedDocumentError

from . import primitives
from .content_type import DEFAULT_CHARSET
from .registry import DATA_BASE64_KEY, Field, FieldTable, Wire, lookup

logger = logging.getLogger(__name__)

FORMAT_NAME = "json"
SPEC_VERSION_KEY = "specversion"
BASE64_ENCODING = "base64"


def deserialize(body: Any, charset: str | None) -> CloudEvent:
    """Parse a JSON body in ``charset`` and build a :class:`CloudEvent`."""

    text = primitives.decode_text(body if body is not None else b"", charset or DEFAULT_CHARSET)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"structured body is not valid JSON: {exc.msg}") from exc
    if not isinstance(document, dict):
        raise MalformedDocumentError(
            f"structured body must be a JSON object, got {type(document).__name__}"
        )
    return from_document(document)


def from_document(document: Mapping[str, Any]) -> CloudEvent:
    """Build a :class:`CloudEvent` from an already parsed JSON object.

    Keys are matched case-sensitively. ``data_base64`` always yields bytes;
    a ``data`` string is kept as text unless the 0.3 ``datacontentencoding``
    directive says it is base64; any other ``data`` value is re-serialized
    to compact JSON text. A document holding both ``data`` and
    ``data_base64`` is rejected.
    """

    spec_version = document.get(SPEC_VERSION_KEY)
    table = lookup(spec_version, Wire.JSON)
    if table is None:
        logger.warning(
            "ce_unknown_specversion",
            extra={"event": "ce_unknown_specversion", "specversion": spec_version, "mode": "structured"},
        )
        extensions = {
            key: value
            for key, value in document.items()
            if key != SPEC_VERSION_KEY and value is not None
        }
        return CloudEvent(specversion=spec_version, extensions=extensions)

    if document.get(DATA_BASE64_KEY) is not None and document.get("data") is not None:
        raise MalformedDocumentError("document carries both 'data' and 'data_base64'")

    attributes: dict[str, Any] = {"specversion": spec_version}
    extensions: dict[str, Any] = {}
    for key, value in document.items():
        if key == SPEC_VERSION_KEY or value is None:
            continue
        if key == DATA_BASE64_KEY:
            attributes["data"] = _decode_base64(value, key)
            continue
        entry = table.by_wire(key)
        if entry is None:
            extensions[key] = value
        elif entry.field.transient:
            logger.debug(
                "ce_transient_dropped",
                extra={"event": "ce_transient_dropped", "key": key},
            )
        elif entry.field is Field.DATA:
            attributes["data"] = _decode_data(value, document, table)
        else:
            attributes[entry.field.attribute] = entry.deserialize(value)
    return CloudEvent(extensions=extensions, **attributes)


def _decode_data(value: Any, document: Mapping[str, Any], table: FieldTable) -> Any:
    encoding_key = table.wire_name(Field.DATA_CONTENT_ENCODING)
    if isinstance(value, str):
        if encoding_key is not None and document.get(encoding_key) == BASE64_ENCODING:
            return _decode_base64(value, "data")
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _decode_base64(value: Any, key: str) -> bytes:
    try:
        return primitives.decode_base64(value)
    except MalformedBase64Error as exc:
        raise exc.for_field(key) from exc


def to_document(event: CloudEvent) -> dict[str, Any]:
    """Return the JSON object representing ``event``."""

    table = lookup(event.specversion, Wire.JSON)
    document: dict[str, Any] = {}
    if event.specversion is not None:
        document[SPEC_VERSION_KEY] = event.specversion
    if table is not None:
        for entry in table.entries():
            if entry.field in (Field.SPEC_VERSION, Field.DATA) or entry.field.transient:
                continue
            value = getattr(event, entry.field.attribute, None)
            if value is None:
                continue
            document[entry.wire_name] = entry.serialize(value)
    document.update(event.extensions)
    if event.data is not None:
        _encode_data(event.data, document, table)
    return document


def _encode_data(data: Any, document: dict[str, Any], table: FieldTable | None) -> None:
    if isinstance(data, (bytes, bytearray, memoryview)):
        encoded = primitives.encode_base64(bytes(data))
        encoding_key = table.wire_name(Field.DATA_CONTENT_ENCODING) if table is not None else None
        if encoding_key is not None:
            document["data"] = encoded
            document[encoding_key] = BASE64_ENCODING
        else:
            document[DATA_BASE64_KEY] = encoded
        return
    document["data"] = data


def serialize(event: CloudEvent) -> str:
    """Serialize ``event`` to ASCII-safe JSON text."""

    document = to_document(event)
    try:
        return json.dumps(document)
    except (TypeError, ValueError) as exc:
        raise InvalidEventError(f"event is not JSON serializable: {exc}") from exc


__all__ = ["FORMAT_NAME", "deserialize", "from_document", "serialize", "to_document"]
