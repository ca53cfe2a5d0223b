"""Exception types raised by the CloudEvents HTTP codecs."""

__all__ = [
    "CloudEventError",
    "FieldCodecError",
    "MalformedBase64Error",
    "MalformedTimestampError",
    "MalformedURIError",
    "CharsetError",
    "UnsupportedFormatError",
    "AmbiguousMessageError",
    "MalformedDocumentError",
    "InvalidEventError",
]


class CloudEventError(ValueError):
    """Base class for all cehttp errors."""
    pass


class FieldCodecError(CloudEventError):
    """Raised when a single attribute cannot be serialized or deserialized.

    ``field`` is the wire name (header or JSON key) being processed when
    the failure happened, or ``None`` when the primitive was called
    directly.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(f"{field}: {message}" if field is not None else message)
        self.reason = message
        self.field = field

    def for_field(self, field: str) -> "FieldCodecError":
        """Return a copy of this error bound to ``field``."""

        return type(self)(self.reason, field=field)


class MalformedBase64Error(FieldCodecError):
    """Raised when a base64 payload is not valid base64."""
    pass


class MalformedTimestampError(FieldCodecError):
    """Raised when a time attribute is not an RFC3339 timestamp."""
    pass


class MalformedURIError(FieldCodecError):
    """Raised when a URI attribute cannot be parsed."""
    pass


class CharsetError(FieldCodecError):
    """Raised when a body cannot be decoded with the announced charset."""
    pass


class UnsupportedFormatError(CloudEventError):
    """Raised when no deserializer is registered for a structured format."""

    def __init__(self, format_name: str) -> None:
        super().__init__(f"unsupported structured format: {format_name!r}")
        self.format_name = format_name


class AmbiguousMessageError(CloudEventError):
    """Raised when a message is neither binary nor structured mode."""
    pass


class MalformedDocumentError(CloudEventError):
    """Raised when a structured body is not a usable event document."""
    pass


class InvalidEventError(CloudEventError):
    """Raised when a CloudEvent is constructed with conflicting attributes."""
    pass
