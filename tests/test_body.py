import io
import json

import pytest
from requests.structures import CaseInsensitiveDict

from wrapfetch.body import BodyKind, classify_body, transform_body
from wrapfetch.forms import MultipartForm, URLEncodedParams


class _Blob:
    def read(self):
        return b"blob"


def _stream():
    yield b"chunk"


@pytest.mark.parametrize(
    ("body", "kind"),
    [
        (MultipartForm({"a": "b"}), BodyKind.MULTIPART),
        (b"raw", BodyKind.BINARY),
        (bytearray(b"raw"), BodyKind.BINARY),
        (io.BytesIO(b"raw"), BodyKind.FILE),
        (_Blob(), BodyKind.BLOB),
        (_stream(), BodyKind.STREAM),
        (memoryview(b"raw"), BodyKind.BYTE_VIEW),
        (URLEncodedParams({"a": "b"}), BodyKind.URLENCODED),
        ({"a": 1}, BodyKind.PLAIN_OBJECT),
        ([1, 2], BodyKind.PLAIN_OBJECT),
        ("text", BodyKind.PRIMITIVE),
        (42, BodyKind.PRIMITIVE),
    ],
)
def test_classify_body(body, kind):
    assert classify_body(body) is kind


def test_wire_ready_body_passes_through_without_header():
    headers = CaseInsensitiveDict()
    body = b"raw"

    payload, method = transform_body(body, headers, None)

    assert payload is body
    assert method is None
    assert "Content-Type" not in headers


def test_multipart_body_passes_through_without_header():
    headers = CaseInsensitiveDict()
    form = MultipartForm({"a": "b"})

    payload, _ = transform_body(form, headers, "POST")

    assert payload is form
    assert "Content-Type" not in headers


def test_byte_view_is_unwrapped():
    headers = CaseInsensitiveDict()

    payload, _ = transform_body(memoryview(b"abc"), headers, "PUT")

    assert payload == b"abc"
    assert isinstance(payload, bytes)


def test_urlencoded_params_are_serialized():
    headers = CaseInsensitiveDict()
    params = URLEncodedParams({"a": "b c"})

    payload, _ = transform_body(params, headers, "POST")

    assert payload == "a=b+c"
    assert headers["Content-Type"] == (
        "application/x-www-form-urlencoded;charset=utf-8"
    )


def test_plain_object_becomes_json_and_defaults_method_to_post():
    headers = CaseInsensitiveDict()

    payload, method = transform_body({"test": "sa"}, headers, None)

    assert json.loads(payload) == {"test": "sa"}
    assert method == "POST"
    assert headers["Content-Type"] == "application/json;charset=utf-8"


def test_plain_object_keeps_explicit_method():
    headers = CaseInsensitiveDict()

    _, method = transform_body({"baz": "zab"}, headers, "delete")

    assert method == "delete"


def test_primitive_gets_default_content_type():
    headers = CaseInsensitiveDict()

    payload, method = transform_body("yay", headers, "POST")

    assert payload == "yay"
    assert method == "POST"
    assert headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_existing_content_type_is_kept():
    headers = CaseInsensitiveDict({"content-type": "application/vnd.api+json"})

    transform_body({"a": 1}, headers, None)

    assert headers["Content-Type"] == "application/vnd.api+json"
