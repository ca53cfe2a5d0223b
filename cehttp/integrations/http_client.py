from __future__ import annotations

"""httpx glue: build outbound requests and decode responses.

Nothing here performs I/O; callers send the returned request with their own
``httpx.Client``/``httpx.AsyncClient``.
"""

from typing import Mapping

import httpx

from cehttp.codecs.dispatch import Mode, from_http, to_http
from cehttp.codecs.structured import FormatDeserializer, content_type_of
from cehttp.event import CloudEvent

from ._message import body_bytes, header_items, message_body


def build_request(
    event: CloudEvent,
    url: str | httpx.URL,
    *,
    mode: str | Mode | None = None,
    method: str = "POST",
) -> httpx.Request:
    headers, body = to_http(event, mode)
    return httpx.Request(
        method,
        url,
        headers=header_items(headers),
        content=body_bytes(body, content_type_of(headers)),
    )


def from_response(
    response: httpx.Response,
    format_deserializers: Mapping[str, FormatDeserializer] | None = None,
) -> CloudEvent:
    """Decode the CloudEvent carried by ``response`` (body must be read)."""

    return from_http(response.headers, message_body(response.content), format_deserializers)


def from_request(
    request: httpx.Request,
    format_deserializers: Mapping[str, FormatDeserializer] | None = None,
) -> CloudEvent:
    return from_http(request.headers, message_body(request.content), format_deserializers)


__all__ = ["build_request", "from_request", "from_response"]
