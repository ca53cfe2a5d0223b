"""CloudEvents HTTP binding: binary and structured content mode codecs."""

from .event import CloudEvent
from .exceptions import (
    AmbiguousMessageError,
    CharsetError,
    CloudEventError,
    FieldCodecError,
    InvalidEventError,
    MalformedBase64Error,
    MalformedDocumentError,
    MalformedTimestampError,
    MalformedURIError,
    UnsupportedFormatError,
)
from .codecs.dispatch import (
    Mode,
    classify,
    from_http,
    is_binary,
    is_structured,
    to_binary,
    to_http,
    to_structured,
)

__all__ = [
    "AmbiguousMessageError",
    "CharsetError",
    "CloudEvent",
    "CloudEventError",
    "FieldCodecError",
    "InvalidEventError",
    "MalformedBase64Error",
    "MalformedDocumentError",
    "MalformedTimestampError",
    "MalformedURIError",
    "Mode",
    "UnsupportedFormatError",
    "classify",
    "from_http",
    "is_binary",
    "is_structured",
    "to_binary",
    "to_http",
    "to_structured",
]
