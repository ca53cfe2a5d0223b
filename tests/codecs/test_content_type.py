import pytest

from cehttp.codecs import content_type


@pytest.mark.parametrize(
    "value, expected",
    [
        ("application/cloudevents+json; charset=utf-8", ("json", "utf-8")),
        ("application/cloudevents+json", ("json", "ISO-8859-1")),
        ("text/plain", ("application/octet-stream", None)),
        ("text/plain; charset=utf-8", ("application/octet-stream", None)),
        ("application/cloudevents+json;charset= UTF-16 ", ("json", "UTF-16")),
        ('application/cloudevents+json; charset="utf-8"', ("json", "utf-8")),
        ("application/cloudevents+json; foo=bar; CHARSET=utf-8", ("json", "utf-8")),
        ("application/cloudevents+JSON", ("json", "ISO-8859-1")),
        ("application/vnd.a+b+avro", ("avro", "ISO-8859-1")),
        ("; charset=utf-8", ("application/octet-stream", None)),
        ("application/cloudevents+", ("application/octet-stream", None)),
        ("", ("application/octet-stream", None)),
        (None, ("application/octet-stream", None)),
    ],
)
def test_parse(value, expected):
    assert content_type.parse(value) == expected


def test_build():
    assert (
        content_type.build("json", "utf-8")
        == "application/cloudevents+json; charset=utf-8"
    )


def test_charset_of_reads_any_media_type():
    assert content_type.charset_of("text/plain; charset=iso-8859-1") == "iso-8859-1"
    assert content_type.charset_of('text/plain; Charset="UTF-16"') == "UTF-16"
    assert content_type.charset_of("application/json") is None
    assert content_type.charset_of(None) is None
