"""Process-wide codec configuration accessors."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import logging

from cehttp.config import CodecConfig, apply_env_overrides, find_config_file, load_config

logger = logging.getLogger(__name__)

_CONFIG_OVERRIDE: CodecConfig | None = None
_CONFIG_CACHE: CodecConfig | None = None
_CONFIG_SOURCE_PATH: str | None = None


def set_config_override(config: CodecConfig | None) -> None:
    """Set a process-wide override for the codec configuration."""

    global _CONFIG_OVERRIDE
    _CONFIG_OVERRIDE = config


def reset_config_cache() -> None:
    """Clear the cached codec configuration."""

    global _CONFIG_CACHE, _CONFIG_SOURCE_PATH
    _CONFIG_CACHE = None
    _CONFIG_SOURCE_PATH = None


@contextmanager
def config_override(config: CodecConfig | None) -> Iterator[None]:
    """Temporarily override the configuration returned by :func:`get_codec_config`."""

    previous = _CONFIG_OVERRIDE
    set_config_override(config)
    try:
        yield
    finally:
        set_config_override(previous)


def get_codec_config(path: str | Path | None = None) -> CodecConfig:
    """Return the active codec configuration.

    Resolution order: explicit ``path``, process override, cached
    ``cehttp.yml`` from the working directory, then built-in defaults.
    Environment overrides are applied on top of file-based settings.
    """

    if path is not None:
        return apply_env_overrides(load_config(str(path)))

    override = _CONFIG_OVERRIDE
    if override is not None:
        return override

    global _CONFIG_CACHE, _CONFIG_SOURCE_PATH
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    cfg_path = find_config_file()
    if cfg_path:
        base = load_config(cfg_path)
        _CONFIG_SOURCE_PATH = cfg_path
    else:
        logger.debug("No cehttp config file discovered; using defaults")
        base = CodecConfig()
        _CONFIG_SOURCE_PATH = None
    _CONFIG_CACHE = apply_env_overrides(base)
    return _CONFIG_CACHE


def get_config_path() -> str | None:
    """Return the file the cached configuration was loaded from."""

    if _CONFIG_OVERRIDE is not None:
        return None
    if _CONFIG_CACHE is None:
        get_codec_config()
    return _CONFIG_SOURCE_PATH


__all__ = [
    "config_override",
    "get_codec_config",
    "get_config_path",
    "reset_config_cache",
    "set_config_override",
]
