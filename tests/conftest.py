"""Test configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest
import yaml

from cehttp import CloudEvent
from cehttp import configuration
from cehttp.metrics import reset_metrics


@pytest.fixture(autouse=True)
def _isolate_codec_state(monkeypatch):
    for key in (
        "CEHTTP_STRUCTURED_FORMAT",
        "CEHTTP_STRUCTURED_CHARSET",
        "CEHTTP_DEFAULT_MODE",
        "CEHTTP_DEFAULT_SPECVERSION",
    ):
        monkeypatch.delenv(key, raising=False)
    configuration.reset_config_cache()
    configuration.set_config_override(None)
    reset_metrics()
    try:
        yield
    finally:
        configuration.reset_config_cache()
        configuration.set_config_override(None)
        reset_metrics()


@pytest.fixture
def configure_codec(tmp_path, monkeypatch):
    def _apply(data: dict, *, filename: str = "cehttp.yml") -> str:
        cfg_path = tmp_path / filename
        cfg_path.write_text(yaml.safe_dump(data))
        monkeypatch.chdir(tmp_path)
        configuration.reset_config_cache()
        return str(cfg_path)

    yield _apply


@pytest.fixture
def v1_event() -> CloudEvent:
    return CloudEvent(
        id="A234-1234-1234",
        source="https://example.com/sensors/tn-1234567/alerts",
        type="com.example.someevent",
        specversion="1.0",
        subject="123",
        datacontenttype="text/plain",
        dataschema="https://example.com/schema/alert.json",
        time=datetime(2018, 4, 5, 17, 31, tzinfo=timezone.utc),
        data="hello",
        extensions={"comexampleextension1": "value"},
    )


@pytest.fixture
def v03_event() -> CloudEvent:
    return CloudEvent(
        id="B234-1234-1234",
        source="/mycontext",
        type="com.example.someevent",
        specversion="0.3",
        datacontenttype="text/plain",
        schemaurl="https://example.com/schema/alert.json",
        time="2018-04-05T17:31:00Z",
        data="hello",
        extensions={"comexampleextension1": "value"},
    )
