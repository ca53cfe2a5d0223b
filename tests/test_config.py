from pathlib import Path
import json
import logging

import pytest
import yaml

from cehttp.config import CodecConfig, apply_env_overrides, find_config_file, load_config
from cehttp import configuration


def test_defaults():
    cfg = CodecConfig()
    assert cfg.structured_format == "json"
    assert cfg.structured_charset == "utf-8"
    assert cfg.default_mode == "binary"
    assert cfg.default_specversion == "1.0"


def test_load_config_yaml(tmp_path: Path) -> None:
    data = {
        "structured_format": "JSON",
        "structured_charset": "ISO-8859-1",
        "default_mode": "Structured",
    }
    config_file = tmp_path / "ce.yaml"
    config_file.write_text(yaml.safe_dump({"codec": data}))
    cfg = load_config(str(config_file))
    assert cfg.structured_format == "json"
    assert cfg.structured_charset == "ISO-8859-1"
    assert cfg.default_mode == "structured"


def test_load_config_json(tmp_path: Path) -> None:
    config_file = tmp_path / "ce.json"
    config_file.write_text(json.dumps({"codec": {"default_specversion": "0.3"}}))
    assert load_config(str(config_file)).default_specversion == "0.3"


def test_load_config_without_codec_section(tmp_path: Path) -> None:
    config_file = tmp_path / "ce.yml"
    config_file.write_text(yaml.safe_dump({"other": {"x": 1}}))
    assert load_config(str(config_file)) == CodecConfig()


def test_load_config_aliases_warn(tmp_path: Path, caplog) -> None:
    config_file = tmp_path / "ce.yml"
    config_file.write_text(yaml.safe_dump({"codec": {"charset": "utf-16", "mode": "structured"}}))
    with caplog.at_level(logging.WARNING):
        cfg = load_config(str(config_file))
    assert cfg.structured_charset == "utf-16"
    assert cfg.default_mode == "structured"
    assert "deprecated" in caplog.text


def test_load_config_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        load_config("nope.yml")


def test_load_config_malformed(tmp_path: Path) -> None:
    p = tmp_path / "bad.yml"
    p.write_text("codec: [unclosed")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_load_config_rejects_bad_shapes(tmp_path: Path) -> None:
    p = tmp_path / "list.yml"
    p.write_text(yaml.safe_dump(["a", "b"]))
    with pytest.raises(TypeError):
        load_config(str(p))
    p.write_text(yaml.safe_dump({"codec": "json"}))
    with pytest.raises(TypeError):
        load_config(str(p))
    p.write_text(yaml.safe_dump({"codec": {"unknown_key": 1}}))
    with pytest.raises(TypeError):
        load_config(str(p))


def test_invalid_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        CodecConfig(default_mode="batch")


def test_env_overrides() -> None:
    cfg = apply_env_overrides(
        CodecConfig(),
        {"CEHTTP_DEFAULT_MODE": "structured", "CEHTTP_STRUCTURED_CHARSET": "utf-16"},
    )
    assert cfg.default_mode == "structured"
    assert cfg.structured_charset == "utf-16"
    assert apply_env_overrides(CodecConfig(), {}) == CodecConfig()


def test_find_config_file(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None
    (tmp_path / "cehttp.yaml").write_text("codec: {}\n")
    assert find_config_file(tmp_path) == str(tmp_path / "cehttp.yaml")


def test_get_codec_config_discovers_file(configure_codec) -> None:
    path = configure_codec({"codec": {"default_mode": "structured"}})
    assert configuration.get_codec_config().default_mode == "structured"
    assert configuration.get_config_path() == path


def test_get_codec_config_applies_env_on_top_of_file(configure_codec, monkeypatch) -> None:
    configure_codec({"codec": {"structured_charset": "ISO-8859-1"}})
    monkeypatch.setenv("CEHTTP_STRUCTURED_CHARSET", "utf-16")
    assert configuration.get_codec_config().structured_charset == "utf-16"


def test_get_codec_config_defaults_without_file(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert configuration.get_codec_config() == CodecConfig()
    assert configuration.get_config_path() is None


def test_config_override_is_scoped() -> None:
    override = CodecConfig(default_mode="structured")
    with configuration.config_override(override):
        assert configuration.get_codec_config() is override
    assert configuration.get_codec_config() is not override
