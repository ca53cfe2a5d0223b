"""Canonical CloudEvent value type."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional
from urllib.parse import SplitResult

from cehttp.codecs import primitives
from cehttp.codecs.registry import (
    BINARY_PREFIX,
    V0_3,
    V1_0,
    is_supported,
    reserved_attribute_names,
)
from cehttp.exceptions import FieldCodecError, InvalidEventError

_URI_ATTRIBUTES = ("source", "dataschema", "schemaurl")
_VERSION_ONLY_ATTRIBUTES = {V1_0: "schemaurl", V0_3: "dataschema"}
_EXTENSION_NAME = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True)
class CloudEvent:
    """Immutable CloudEvents context attributes, payload and extensions.

    ``source``, ``dataschema`` and ``schemaurl`` accept strings and are
    stored as parsed URI references; ``time`` accepts an RFC3339 string and
    is stored as a ``datetime``. Extensions are kept verbatim under their
    unprefixed names in a read-only mapping. Events compare by value but
    are not hashable.
    """

    id: Optional[str] = None
    source: Optional[SplitResult] = None
    type: Optional[str] = None
    specversion: Optional[str] = V1_0
    subject: Optional[str] = None
    datacontenttype: Optional[str] = None
    dataschema: Optional[SplitResult] = None
    schemaurl: Optional[SplitResult] = None
    time: Optional[datetime] = None
    data: Any = None
    extensions: Mapping[str, Any] = field(default_factory=dict)

    # data and extensions may hold unhashable values
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        for name in _URI_ATTRIBUTES:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _convert(primitives.parse_uri, value, name))
        if self.time is not None:
            object.__setattr__(
                self, "time", _convert(primitives.parse_timestamp, self.time, "time")
            )
        extensions = dict(self.extensions or {})
        object.__setattr__(self, "extensions", MappingProxyType(extensions))
        self._check_extensions(extensions)
        self._check_version_slots()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        attributes: Mapping[str, Any],
        data: Any = None,
        *,
        specversion: str | None = None,
    ) -> "CloudEvent":
        """Build an event from a flat attribute mapping.

        Names that are not core attributes become extensions. When the
        mapping has no ``specversion`` the configured default is used.
        """

        from cehttp.configuration import get_codec_config

        core = {f.name for f in fields(cls)} - {"data", "extensions"}
        kwargs: dict[str, Any] = {}
        extensions: dict[str, Any] = {}
        for key, value in attributes.items():
            if key in core:
                kwargs[key] = value
            else:
                extensions[key] = value
        if "specversion" not in kwargs:
            kwargs["specversion"] = specversion or get_codec_config().default_specversion
        return cls(data=data, extensions=extensions, **kwargs)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, name: str, default: Any = None) -> Any:
        """Return a core attribute or extension by name."""

        if name in self.extensions:
            return self.extensions[name]
        if name in _CORE_ATTRIBUTES:
            value = getattr(self, name)
            return default if value is None else value
        return default

    def attributes(self) -> dict[str, Any]:
        """Return present context attributes merged with extensions."""

        out: dict[str, Any] = {}
        for name in _CORE_ATTRIBUTES:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        out.update(self.extensions)
        return out

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _check_extensions(self, extensions: Mapping[str, Any]) -> None:
        supported = is_supported(self.specversion)
        reserved = reserved_attribute_names(self.specversion) if supported else frozenset()
        for key in extensions:
            if not isinstance(key, str) or not key:
                raise InvalidEventError(f"extension names must be non-empty strings: {key!r}")
            if key.lower().startswith(BINARY_PREFIX):
                raise InvalidEventError(f"extension {key!r} must not carry the {BINARY_PREFIX!r} prefix")
            # unknown versions pass foreign keys through untouched
            if supported and not _EXTENSION_NAME.fullmatch(key):
                raise InvalidEventError(
                    f"extension {key!r} must consist of lower-case letters and digits"
                )
            if key in reserved:
                raise InvalidEventError(
                    f"extension {key!r} collides with a reserved attribute of specversion {self.specversion}"
                )

    def _check_version_slots(self) -> None:
        forbidden = _VERSION_ONLY_ATTRIBUTES.get(self.specversion)
        if forbidden is not None and getattr(self, forbidden) is not None:
            raise InvalidEventError(
                f"{forbidden} is not an attribute of specversion {self.specversion}"
            )


_CORE_ATTRIBUTES: tuple[str, ...] = tuple(
    f.name for f in fields(CloudEvent) if f.name not in ("data", "extensions")
)


def _convert(parse, value: Any, name: str) -> Any:
    try:
        return parse(value)
    except FieldCodecError as exc:
        raise exc.for_field(name) from exc


__all__ = ["CloudEvent"]
