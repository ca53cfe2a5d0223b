from __future__ import annotations

"""FastAPI glue: decode inbound requests, encode outbound responses."""

import logging
from typing import Any

from fastapi import HTTPException, Request, Response, status

from cehttp.codecs.dispatch import Mode, from_http, to_http
from cehttp.codecs.structured import content_type_of
from cehttp.event import CloudEvent
from cehttp.exceptions import (
    AmbiguousMessageError,
    CloudEventError,
    UnsupportedFormatError,
)

from ._message import body_bytes, header_items, message_body

logger = logging.getLogger(__name__)


async def read_cloudevent(request: Request) -> CloudEvent:
    """FastAPI dependency returning the CloudEvent carried by ``request``.

    Use as ``event: CloudEvent = Depends(read_cloudevent)``.
    """

    raw = await request.body()
    try:
        return from_http(request.headers, message_body(raw))
    except AmbiguousMessageError:
        _log_rejection(request, "ce_required")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "E_CE_REQUIRED",
                "message": "CloudEvents binary or structured message required",
            },
        )
    except UnsupportedFormatError as exc:
        _log_rejection(request, "unsupported_format")
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail={"code": "E_UNSUPPORTED_FORMAT", "format": exc.format_name},
        )
    except CloudEventError as exc:
        _log_rejection(request, "invalid")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "E_CE_INVALID", "message": str(exc)},
        )


def cloudevent_response(
    event: CloudEvent,
    mode: str | Mode | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """Return a :class:`Response` carrying ``event`` in ``mode``."""

    headers, body = to_http(event, mode)
    return Response(
        content=body_bytes(body, content_type_of(headers)),
        status_code=status_code,
        headers=header_items(headers),
    )


def _log_rejection(request: Request, reason: str) -> None:
    extra: dict[str, Any] = {
        "event": "ce_decode_failed",
        "reason": reason,
        "path": request.url.path,
    }
    logger.info("ce_decode_failed", extra=extra)


__all__ = ["cloudevent_response", "read_cloudevent"]
