from __future__ import annotations

import json
from typing import Any, Mapping

from cehttp.codecs import content_type, primitives

DEFAULT_BODY_CHARSET = "utf-8"


def header_items(headers: Mapping[str, Any]) -> dict[str, str]:
    """Render codec header values as HTTP header strings."""

    out: dict[str, str] = {}
    for name, value in headers.items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[name] = "true" if value else "false"
        else:
            out[name] = str(value)
    return out


def body_bytes(body: Any, media_type: str | None = None) -> bytes:
    """Render a codec body as bytes in the charset named by ``media_type``.

    Text and JSON-native payloads are encoded with the ``charset`` parameter
    of ``media_type``, or UTF-8 when it has none.
    """

    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    charset = content_type.charset_of(media_type) or DEFAULT_BODY_CHARSET
    if not isinstance(body, str):
        body = json.dumps(body, ensure_ascii=False)
    return primitives.encode_text(body, charset)


def message_body(content: bytes) -> bytes | None:
    """An empty HTTP body carries no event data."""

    return content or None
