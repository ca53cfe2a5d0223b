from __future__ import annotations

"""Idempotent Prometheus counter registration.

Codec modules may be imported repeatedly (test reloads, multiple apps in one
process), so counters are fetched from the registry when they already exist
instead of being registered twice.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Dict, Tuple

from prometheus_client import CollectorRegistry, Counter, REGISTRY as global_registry

__all__ = [
    "get_metric_value",
    "get_or_create_counter",
    "reset_metrics",
]

RegistryKey = Tuple[CollectorRegistry, str]

_METRIC_CACHE: Dict[RegistryKey, Counter] = {}
_RESET_CALLBACKS: Dict[RegistryKey, Callable[[], None]] = {}


def get_or_create_counter(
    name: str,
    documentation: str,
    labelnames: Sequence[str] | None = None,
    *,
    registry: CollectorRegistry | None = None,
) -> Counter:
    """Return an existing counter or register a new one."""

    reg = registry or global_registry
    labels = tuple(labelnames or ())
    cache_key = (reg, name)
    cached = _METRIC_CACHE.get(cache_key)
    if cached is not None and _labels_match(cached, labels):
        return cached

    existing = _lookup_metric(reg, name)
    if existing is not None and not isinstance(existing, Counter):
        raise TypeError(
            f"Metric '{name}' already registered with incompatible type {type(existing)!r}"
        )
    if existing is not None and not _labels_match(existing, labels):
        reg.unregister(existing)
        existing = None
    metric = existing if existing is not None else Counter(name, documentation, labels, registry=reg)
    _METRIC_CACHE[cache_key] = metric
    _RESET_CALLBACKS[cache_key] = lambda: _reset(metric)
    return metric


def reset_metrics(
    names: Iterable[str] | None = None,
    *,
    registry: CollectorRegistry | None = None,
) -> None:
    """Reset registered counters, all of them when ``names`` is ``None``."""

    reg = registry or global_registry
    requested = None if names is None else set(names)
    for (key_reg, key_name), callback in list(_RESET_CALLBACKS.items()):
        if key_reg is not reg:
            continue
        if requested is not None and key_name not in requested:
            continue
        callback()


def get_metric_value(metric: Counter, labels: Mapping[str, str] | None = None) -> float:
    """Return the ``_total`` sample of ``metric`` for ``labels`` (0 when unset)."""

    for family in metric.collect():
        for sample in family.samples:
            if not sample.name.endswith("_total"):
                continue
            if labels is None and sample.labels:
                continue
            if labels is not None and sample.labels != dict(labels):
                continue
            return float(sample.value)
    return 0.0


def _reset(metric: Counter) -> None:
    if getattr(metric, "_labelnames", ()):
        metric.clear()
    else:
        metric._value.set(0)  # type: ignore[attr-defined]


def _lookup_metric(registry: CollectorRegistry, name: str) -> object | None:
    try:
        collectors = registry._names_to_collectors  # type: ignore[attr-defined]
    except AttributeError:  # pragma: no cover
        return None
    # prometheus_client registers counters under both the bare and _total names
    return collectors.get(name) or collectors.get(f"{name}_total")


def _labels_match(metric: Counter, expected: Sequence[str]) -> bool:
    return tuple(getattr(metric, "_labelnames", ())) == tuple(expected)
