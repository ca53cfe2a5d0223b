import json

import pytest

from cehttp import CloudEvent
from cehttp.codecs import json_format, structured
from cehttp.exceptions import UnsupportedFormatError

FORMATS = {"json": json_format.deserialize}


def test_encode_sets_content_type_and_delegates_body(v1_event):
    calls = []

    def serialize(event):
        calls.append(event)
        return "{}"

    headers, body = structured.encode(v1_event, "json", serialize, "utf-8")
    assert headers == {"content-type": "application/cloudevents+json; charset=utf-8"}
    assert body == b"{}"
    assert calls == [v1_event]


def test_encode_passes_bytes_through(v1_event):
    _, body = structured.encode(v1_event, "avro", lambda e: b"\x00\x01", "utf-8")
    assert body == b"\x00\x01"


def test_decode_uses_charset_from_content_type():
    seen = {}

    def deserializer(body, charset):
        seen["charset"] = charset
        return json_format.deserialize(body, charset)

    body = json.dumps({"specversion": "1.0", "id": "1", "subject": "é"}, ensure_ascii=False)
    headers = {"Content-Type": "application/cloudevents+json; charset=ISO-8859-1"}
    event = structured.decode(headers, body.encode("latin-1"), {"json": deserializer})
    assert seen["charset"] == "ISO-8859-1"
    assert event.subject == "é"


def test_decode_default_charset_is_latin1():
    seen = {}

    def deserializer(body, charset):
        seen["charset"] = charset
        return CloudEvent(id="1")

    structured.decode({"content-type": "application/cloudevents+json"}, b"{}", {"json": deserializer})
    assert seen["charset"] == "ISO-8859-1"


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("application/cloudevents+xml; charset=utf-8", "xml"),
        ("text/plain", "application/octet-stream"),
    ],
)
def test_decode_without_deserializer_is_unsupported(content_type, expected):
    with pytest.raises(UnsupportedFormatError) as excinfo:
        structured.decode({"content-type": content_type}, b"{}", FORMATS)
    assert excinfo.value.format_name == expected


@pytest.mark.parametrize("fixture", ["v1_event", "v03_event"])
@pytest.mark.parametrize("charset", ["utf-8", "ISO-8859-1", "utf-16"])
def test_roundtrip_independent_of_charset(fixture, charset, request):
    event = request.getfixturevalue(fixture)
    headers, body = structured.encode(event, "json", json_format.serialize, charset)
    assert structured.decode(headers, body, FORMATS) == event


def test_extension_fidelity(v1_event):
    headers, body = structured.encode(v1_event, "json", json_format.serialize, "utf-8")
    decoded = structured.decode(headers, body, FORMATS)
    assert decoded.extensions["comexampleextension1"] == "value"


def test_is_structured():
    assert structured.is_structured({"Content-Type": "Application/CloudEvents+json"})
    assert not structured.is_structured({"content-type": "application/json"})
    assert not structured.is_structured({"ce-id": "1"})
