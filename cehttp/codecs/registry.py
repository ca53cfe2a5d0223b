from __future__ import annotations

"""Version-indexed attribute tables for the binary and JSON wire vocabularies."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from cehttp.exceptions import FieldCodecError

from . import primitives


class Wire(Enum):
    """Wire vocabulary a table maps to."""

    BINARY = "binary"
    JSON = "json"


class Field(Enum):
    """Closed set of CloudEvents context attributes known to the codecs."""

    ID = "id"
    SPEC_VERSION = "specversion"
    SOURCE = "source"
    TYPE = "type"
    SUBJECT = "subject"
    DATA_CONTENT_TYPE = "datacontenttype"
    DATA_SCHEMA = "dataschema"
    SCHEMA_URL = "schemaurl"
    TIME = "time"
    DATA = "data"
    DATA_CONTENT_ENCODING = "datacontentencoding"

    @property
    def attribute(self) -> str:
        """Name of the matching :class:`~cehttp.event.CloudEvent` attribute."""
        return self.value

    @property
    def transient(self) -> bool:
        return self is Field.DATA_CONTENT_ENCODING


@dataclass(frozen=True)
class Codec:
    """Serialize/deserialize pair applied to one attribute."""

    name: str
    serialize: Callable[[Any], Any]
    deserialize: Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


IDENTITY = Codec("identity", _identity, _identity)
URI = Codec("uri", primitives.format_uri, primitives.parse_uri)
TIMESTAMP = Codec("timestamp", primitives.format_timestamp, primitives.parse_timestamp)


@dataclass(frozen=True)
class FieldEntry:
    field: Field
    wire_name: str
    codec: Codec = IDENTITY

    def serialize(self, value: Any) -> Any:
        try:
            return self.codec.serialize(value)
        except FieldCodecError as exc:
            raise exc.for_field(self.wire_name) from exc

    def deserialize(self, value: Any) -> Any:
        try:
            return self.codec.deserialize(value)
        except FieldCodecError as exc:
            raise exc.for_field(self.wire_name) from exc


class FieldTable:
    """Read-only bidirectional mapping between :class:`Field` and wire names."""

    def __init__(self, spec_version: str, wire: Wire, entries: list[FieldEntry]) -> None:
        self.spec_version = spec_version
        self.wire = wire
        self._by_field: Mapping[Field, FieldEntry] = MappingProxyType(
            {entry.field: entry for entry in entries}
        )
        self._by_wire: Mapping[str, FieldEntry] = MappingProxyType(
            {entry.wire_name: entry for entry in entries}
        )

    def __repr__(self) -> str:
        return f"FieldTable(spec_version={self.spec_version!r}, wire={self.wire.value})"

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Field):
            return item in self._by_field
        return item in self._by_wire

    def entries(self) -> Iterator[FieldEntry]:
        return iter(self._by_field.values())

    def by_wire(self, name: str) -> FieldEntry | None:
        return self._by_wire.get(name)

    def by_field(self, field: Field) -> FieldEntry | None:
        return self._by_field.get(field)

    def wire_name(self, field: Field) -> str | None:
        entry = self._by_field.get(field)
        return entry.wire_name if entry is not None else None

    def reserved_names(self) -> frozenset[str]:
        return frozenset(self._by_wire)


V1_0 = "1.0"
V0_3 = "0.3"
SUPPORTED_VERSIONS: tuple[str, ...] = (V1_0, V0_3)

BINARY_PREFIX = "ce-"
CONTENT_TYPE_HEADER = "content-type"
DATA_BASE64_KEY = "data_base64"


def _binary_entries(*extra: FieldEntry) -> list[FieldEntry]:
    return [
        FieldEntry(Field.ID, "ce-id"),
        FieldEntry(Field.SPEC_VERSION, "ce-specversion"),
        FieldEntry(Field.SOURCE, "ce-source", URI),
        FieldEntry(Field.TYPE, "ce-type"),
        FieldEntry(Field.SUBJECT, "ce-subject"),
        FieldEntry(Field.DATA_CONTENT_TYPE, CONTENT_TYPE_HEADER),
        FieldEntry(Field.TIME, "ce-time", TIMESTAMP),
        *extra,
    ]


def _json_entries(*extra: FieldEntry) -> list[FieldEntry]:
    # ``data`` is listed for name reservation; its value follows the
    # data rules in json_format rather than a Codec.
    return [
        FieldEntry(Field.ID, "id"),
        FieldEntry(Field.SPEC_VERSION, "specversion"),
        FieldEntry(Field.SOURCE, "source", URI),
        FieldEntry(Field.TYPE, "type"),
        FieldEntry(Field.SUBJECT, "subject"),
        FieldEntry(Field.DATA_CONTENT_TYPE, "datacontenttype"),
        FieldEntry(Field.TIME, "time", TIMESTAMP),
        FieldEntry(Field.DATA, "data"),
        *extra,
    ]


_TABLES: Mapping[tuple[str, Wire], FieldTable] = MappingProxyType(
    {
        (V1_0, Wire.BINARY): FieldTable(
            V1_0,
            Wire.BINARY,
            _binary_entries(FieldEntry(Field.DATA_SCHEMA, "ce-dataschema", URI)),
        ),
        (V0_3, Wire.BINARY): FieldTable(
            V0_3,
            Wire.BINARY,
            _binary_entries(
                FieldEntry(Field.SCHEMA_URL, "ce-schemaurl", URI),
                FieldEntry(Field.DATA_CONTENT_ENCODING, "ce-datacontentencoding"),
            ),
        ),
        (V1_0, Wire.JSON): FieldTable(
            V1_0,
            Wire.JSON,
            _json_entries(FieldEntry(Field.DATA_SCHEMA, "dataschema", URI)),
        ),
        (V0_3, Wire.JSON): FieldTable(
            V0_3,
            Wire.JSON,
            _json_entries(
                FieldEntry(Field.SCHEMA_URL, "schemaurl", URI),
                FieldEntry(Field.DATA_CONTENT_ENCODING, "datacontentencoding"),
            ),
        ),
    }
)


def lookup(spec_version: str | None, wire: Wire) -> FieldTable | None:
    """Return the table for ``spec_version`` or ``None`` when it is unknown."""

    if not isinstance(spec_version, str):
        return None
    return _TABLES.get((spec_version, wire))


def is_supported(spec_version: str | None) -> bool:
    return spec_version in SUPPORTED_VERSIONS


def reserved_attribute_names(spec_version: str) -> frozenset[str]:
    """Attribute names an extension must not shadow for ``spec_version``."""

    names: set[str] = set()
    binary = lookup(spec_version, Wire.BINARY)
    if binary is not None:
        names.update(entry.field.attribute for entry in binary.entries())
        names.update(
            name[len(BINARY_PREFIX) :]
            for name in binary.reserved_names()
            if name.startswith(BINARY_PREFIX)
        )
    json_table = lookup(spec_version, Wire.JSON)
    if json_table is not None:
        names.update(json_table.reserved_names())
        names.add(DATA_BASE64_KEY)
    return frozenset(names)


__all__ = [
    "BINARY_PREFIX",
    "CONTENT_TYPE_HEADER",
    "Codec",
    "DATA_BASE64_KEY",
    "Field",
    "FieldEntry",
    "FieldTable",
    "IDENTITY",
    "SUPPORTED_VERSIONS",
    "TIMESTAMP",
    "URI",
    "V0_3",
    "V1_0",
    "Wire",
    "is_supported",
    "lookup",
    "reserved_attribute_names",
]
