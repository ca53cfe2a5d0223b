from __future__ import annotations

"""Content-Type helpers for structured-mode messages."""

STRUCTURED_PREFIX = "application/cloudevents+"
FALLBACK_FORMAT = "application/octet-stream"
DEFAULT_CHARSET = "ISO-8859-1"


def parse(content_type: str | None) -> tuple[str, str | None]:
    """Return ``(format, charset)`` for a structured content type.

    ``application/cloudevents+json; charset=utf-8`` yields ``("json",
    "utf-8")``. A value without a ``+`` suffix yields the fallback pair
    ``("application/octet-stream", None)``. When the charset parameter is
    absent the HTTP default ``ISO-8859-1`` applies.
    """

    if not content_type:
        return FALLBACK_FORMAT, None
    media, _, params = content_type.partition(";")
    media = media.strip()
    if not media or "+" not in media:
        return FALLBACK_FORMAT, None
    format_name = media.rsplit("+", 1)[1].strip().lower()
    if not format_name:
        return FALLBACK_FORMAT, None
    return format_name, _charset(params) or DEFAULT_CHARSET


def _charset(params: str) -> str | None:
    for param in params.split(";"):
        name, sep, value = param.partition("=")
        if not sep or name.strip().lower() != "charset":
            continue
        value = value.strip().strip('"').strip()
        if value:
            return value
    return None


def charset_of(content_type: str | None) -> str | None:
    """Return the ``charset`` parameter of any media type, if it has one."""

    if not content_type:
        return None
    return _charset(content_type.partition(";")[2])


def build(format_name: str, charset: str) -> str:
    return f"{STRUCTURED_PREFIX}{format_name}; charset={charset}"


__all__ = [
    "DEFAULT_CHARSET",
    "FALLBACK_FORMAT",
    "STRUCTURED_PREFIX",
    "build",
    "charset_of",
    "parse",
]
