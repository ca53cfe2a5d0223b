from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

MODES: tuple[str, ...] = ("binary", "structured")

_CODEC_ALIASES: dict[str, str] = {
    "format": "structured_format",
    "charset": "structured_charset",
    "mode": "default_mode",
    "specversion": "default_specversion",
}


@dataclass
class CodecConfig:
    """Defaults applied when callers do not choose a wire encoding explicitly."""

    structured_format: str = field(
        default="json", metadata={"env": "CEHTTP_STRUCTURED_FORMAT"}
    )
    structured_charset: str = field(
        default="utf-8", metadata={"env": "CEHTTP_STRUCTURED_CHARSET"}
    )
    default_mode: str = field(
        default="binary", metadata={"env": "CEHTTP_DEFAULT_MODE"}
    )
    default_specversion: str = field(
        default="1.0", metadata={"env": "CEHTTP_DEFAULT_SPECVERSION"}
    )

    def __post_init__(self) -> None:
        self.default_mode = str(self.default_mode).strip().lower()
        if self.default_mode not in MODES:
            raise ValueError(
                f"Unsupported codec mode: {self.default_mode!r} (expected one of {', '.join(MODES)})"
            )
        self.structured_format = str(self.structured_format).strip().lower()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CodecConfig":
        """Construct :class:`CodecConfig` from a raw ``codec`` section."""

        normalized = _apply_aliases(data, _CODEC_ALIASES, logger_prefix="codec")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise TypeError(f"Unknown codec settings: {', '.join(unknown)}")
        return cls(**normalized)


def find_config_file(cwd: Path | None = None) -> str | None:
    """Return the first discoverable configuration file in ``cwd``."""

    base = Path.cwd() if cwd is None else cwd

    for name in ("cehttp.yml", "cehttp.yaml"):
        candidate = base / name
        if candidate.is_file():
            return str(candidate)
    return None


def _read_config_mapping(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                logger.error("Failed to parse configuration file %s: %s", path, exc)
                raise ValueError(f"Failed to parse configuration file {path}") from exc
    except (FileNotFoundError, OSError) as exc:
        logger.error("Unable to open configuration file %s: %s", path, exc)
        raise

    if not isinstance(data, dict):
        raise TypeError("cehttp config must be a mapping")
    return data


def _apply_aliases(
    section: Mapping[str, Any], aliases: Mapping[str, str], *, logger_prefix: str
) -> dict[str, Any]:
    normalized = dict(section)
    for alias, canonical in aliases.items():
        if canonical in normalized:
            normalized.pop(alias, None)
            continue
        if alias in normalized:
            logger.warning(
                "%s: key '%s' is deprecated; use '%s' instead",
                logger_prefix,
                alias,
                canonical,
            )
            normalized[canonical] = normalized.pop(alias)
    return normalized


def apply_env_overrides(
    config: CodecConfig, environ: Mapping[str, str] | None = None
) -> CodecConfig:
    """Return a copy of ``config`` with ``CEHTTP_*`` environment overrides applied."""

    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for f in fields(config):
        key = f.metadata.get("env")
        if key and env.get(key):
            overrides[f.name] = env[key]
    if not overrides:
        return config
    return replace(config, **overrides)


def load_config(path: str) -> CodecConfig:
    """Parse YAML/JSON and populate :class:`CodecConfig` from its ``codec`` section."""

    data = _read_config_mapping(path)
    section = data.get("codec", {})
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise TypeError("codec section must be a mapping")
    return CodecConfig.from_mapping(section)


__all__ = [
    "CodecConfig",
    "MODES",
    "apply_env_overrides",
    "find_config_file",
    "load_config",
]
