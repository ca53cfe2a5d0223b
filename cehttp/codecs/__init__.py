"""Field tables and wire codecs.

Only the dependency-free leaves are imported here; the binary, structured
and dispatch modules depend on :mod:`cehttp.event` and are imported by
their full path.
"""

from . import content_type, primitives, registry
from .registry import Field, FieldTable, Wire, lookup

__all__ = [
    "Field",
    "FieldTable",
    "Wire",
    "content_type",
    "lookup",
    "primitives",
    "registry",
]
