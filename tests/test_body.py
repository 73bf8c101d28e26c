import io

import pytest

from fc_client.body import BodyKind, RequestBody, as_body, content_md5, encode_body
from fc_client.errors import BodyEncodingError


def test_as_body_classifies_values():
    assert as_body(None).kind is BodyKind.ABSENT
    assert as_body("").kind is BodyKind.ABSENT
    assert as_body(b"raw").kind is BodyKind.BYTES
    assert as_body("text").kind is BodyKind.TEXT
    assert as_body(io.BytesIO(b"data")).kind is BodyKind.STREAM
    assert as_body(chunk for chunk in [b"a"]).kind is BodyKind.STREAM
    assert as_body({"a": 1}).kind is BodyKind.JSON
    assert as_body([1, 2]).kind is BodyKind.JSON


def test_as_body_rejects_unsupported_shape():
    with pytest.raises(BodyEncodingError):
        as_body(object())


def test_content_md5_encodes_hex_digest():
    assert content_md5(b"hello") == "NWQ0MTQwMmFiYzRiMmE3NmI5NzE5ZDkxMTAxN2M1OTI="


def test_encode_text_body():
    encoded = encode_body(RequestBody.from_text("hello"))
    assert encoded.data == b"hello"
    assert encoded.headers == {
        "content-type": "application/octet-stream",
        "content-length": "5",
        "content-md5": "NWQ0MTQwMmFiYzRiMmE3NmI5NzE5ZDkxMTAxN2M1OTI=",
    }


def test_encode_bytes_body_passes_through():
    encoded = encode_body(RequestBody.from_bytes(b"\x00\x01"))
    assert encoded.data == b"\x00\x01"
    assert encoded.headers["content-type"] == "application/octet-stream"
    assert encoded.headers["content-length"] == "2"


def test_encode_structured_body_as_compact_json():
    encoded = encode_body(RequestBody.from_value({"serviceName": "demo"}))
    assert encoded.data == b'{"serviceName":"demo"}'
    assert encoded.headers == {
        "content-type": "application/json",
        "content-length": "22",
        "content-md5": "Mjg4MDRjYWU5Yzk0YzY5M2EwM2RhMzAxZTYxYjc2NDY=",
    }


def test_encode_stream_skips_length_and_md5():
    stream = io.BytesIO(b"payload")
    encoded = encode_body(RequestBody.from_stream(stream))
    assert encoded.data is stream
    assert encoded.headers == {"content-type": "application/octet-stream"}
    assert stream.tell() == 0


def test_encode_unserializable_value():
    with pytest.raises(BodyEncodingError):
        encode_body(RequestBody.from_value({"when": object()}))


def test_encode_absent_body():
    assert encode_body(RequestBody.absent()) is None


@pytest.mark.parametrize("value", [{1, 2}, frozenset({"a"}), range(3)])
def test_as_body_rejects_non_iterator_iterables(value):
    with pytest.raises(BodyEncodingError):
        as_body(value)


def test_from_stream_rejects_plain_iterable():
    with pytest.raises(BodyEncodingError):
        RequestBody.from_stream({b"a", b"b"})


def test_as_body_accepts_iterator():
    assert as_body(iter([b"a", b"b"])).kind is BodyKind.STREAM
