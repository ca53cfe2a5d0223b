from __future__ import annotations

"""Binary content mode: attributes as ``ce-`` headers, payload as body."""

import logging
from typing import Any, Mapping

from cehttp.event import CloudEvent

from .registry import BINARY_PREFIX, Field, Wire, lookup

logger = logging.getLogger(__name__)

SPEC_VERSION_HEADER = "ce-specversion"


def decode(headers: Mapping[str, str], body: Any = None) -> CloudEvent:
    """Build a :class:`CloudEvent` from binary-mode ``headers`` and ``body``.

    Header names are matched case-insensitively. Headers outside the
    version's vocabulary become extensions when they carry the ``ce-``
    prefix and are ignored otherwise. The body is taken verbatim as
    ``data``; only ``None`` means no data.
    """

    normalized = {name.lower(): value for name, value in headers.items()}
    spec_version = normalized.get(SPEC_VERSION_HEADER)
    table = lookup(spec_version, Wire.BINARY)
    if table is None:
        logger.warning(
            "ce_unknown_specversion",
            extra={"event": "ce_unknown_specversion", "specversion": spec_version, "mode": "binary"},
        )

    attributes: dict[str, Any] = {}
    extensions: dict[str, Any] = {}
    for name, value in normalized.items():
        if name == SPEC_VERSION_HEADER:
            continue
        entry = table.by_wire(name) if table is not None else None
        if entry is not None:
            if entry.field.transient:
                logger.debug(
                    "ce_transient_dropped",
                    extra={"event": "ce_transient_dropped", "header": name},
                )
                continue
            attributes[entry.field.attribute] = entry.deserialize(value)
        elif name.startswith(BINARY_PREFIX) and len(name) > len(BINARY_PREFIX):
            extensions[name[len(BINARY_PREFIX) :]] = value

    attributes["specversion"] = spec_version
    return CloudEvent(data=body, extensions=extensions, **attributes)


def encode(event: CloudEvent) -> tuple[dict[str, Any], Any]:
    """Return ``(headers, body)`` carrying ``event`` in binary mode."""

    headers: dict[str, Any] = {}
    for key, value in event.extensions.items():
        headers[f"{BINARY_PREFIX}{key}"] = value

    table = lookup(event.specversion, Wire.BINARY)
    if table is not None:
        for entry in table.entries():
            value = getattr(event, entry.field.attribute, None)
            if value is None:
                continue
            headers[entry.wire_name] = entry.serialize(value)
    if event.specversion is not None:
        headers[SPEC_VERSION_HEADER] = event.specversion
    return headers, event.data


def is_binary(headers: Mapping[str, str]) -> bool:
    return any(name.lower() == "ce-id" for name in headers)


__all__ = ["SPEC_VERSION_HEADER", "decode", "encode", "is_binary"]
