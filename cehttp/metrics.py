from __future__ import annotations

"""Prometheus counters for CloudEvents encode/decode traffic."""

from cehttp.common.metrics_factory import (
    get_metric_value,
    get_or_create_counter,
    reset_metrics as reset_registered_metrics,
)

decoded_total = get_or_create_counter(
    "cloudevents_decoded",
    "Total number of CloudEvents decoded from HTTP messages",
    ["mode"],
)

encoded_total = get_or_create_counter(
    "cloudevents_encoded",
    "Total number of CloudEvents encoded into HTTP messages",
    ["mode"],
)

decode_failures_total = get_or_create_counter(
    "cloudevents_decode_failures",
    "Total number of HTTP messages rejected by the CloudEvents decoders",
    ["reason"],
)

_NAMES = ("cloudevents_decoded", "cloudevents_encoded", "cloudevents_decode_failures")


def record_decoded(mode: str) -> None:
    decoded_total.labels(mode=mode).inc()


def record_encoded(mode: str) -> None:
    encoded_total.labels(mode=mode).inc()


def record_decode_failure(exc: BaseException) -> None:
    decode_failures_total.labels(reason=type(exc).__name__).inc()


def reset_metrics() -> None:
    """Reset all codec counters."""

    reset_registered_metrics(_NAMES)


__all__ = [
    "decode_failures_total",
    "decoded_total",
    "encoded_total",
    "get_metric_value",
    "record_decode_failure",
    "record_decoded",
    "record_encoded",
    "reset_metrics",
]
