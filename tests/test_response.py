import pytest
from requests.structures import CaseInsensitiveDict

from fc_client.errors import ApiError, ResponseDecodeError
from fc_client.response import decode_body, interpret_response


def _headers(**values):
    return CaseInsensitiveDict({key.replace("_", "-"): value for key, value in values.items()})


def test_json_body_is_parsed():
    envelope = interpret_response(200, _headers(content_type="application/json"), b'{"a": 1}')
    assert envelope.data == {"a": 1}
    assert envelope.headers["content-type"] == "application/json"


def test_non_json_body_is_text_by_default():
    assert decode_body(b"plain", _headers(content_type="text/plain")) == "plain"


def test_non_json_body_is_bytes_with_raw_buf():
    assert decode_body(b"\xff\x00", _headers(content_type="application/octet-stream"), raw_buf=True) == b"\xff\x00"


def test_raw_buf_ignored_when_error_type_header_present():
    headers = _headers(content_type="text/plain", x_fc_error_type="UnhandledInvocationError")
    assert decode_body(b"boom", headers, raw_buf=True) == "boom"


def test_invalid_json_raises_decode_error():
    with pytest.raises(ResponseDecodeError):
        decode_body(b"{not json", _headers(content_type="application/json"))


def test_invalid_utf8_raises_decode_error():
    with pytest.raises(ResponseDecodeError):
        decode_body(b"\xff\xfe", _headers(content_type="text/plain"))


def test_error_response_maps_to_api_error():
    headers = _headers(content_type="application/json", x_fc_request_id="req-1")
    body = b'{"ErrorCode": "ServiceNotFound", "ErrorMessage": "foo"}'
    with pytest.raises(ApiError) as exc_info:
        interpret_response(404, headers, body, method="GET", path="/services/demo")

    err = exc_info.value
    assert err.status == 404
    assert err.error_code == "ServiceNotFound"
    assert err.message == "foo"
    assert err.request_id == "req-1"
    assert err.name == "FCServiceNotFoundError"
    assert str(err) == "GET /services/demo failed with 404. requestid: req-1, message: foo."


def test_error_message_lower_camel_case_fallback():
    headers = _headers(content_type="application/json")
    with pytest.raises(ApiError) as exc_info:
        interpret_response(400, headers, b'{"errorCode": "InvalidArgument", "errorMessage": "bad"}')
    assert exc_info.value.message == "bad"
    assert exc_info.value.error_code == "InvalidArgument"


def test_text_error_body_becomes_message():
    with pytest.raises(ApiError) as exc_info:
        interpret_response(502, _headers(content_type="text/html"), b"bad gateway")
    assert exc_info.value.message == "bad gateway"
    assert exc_info.value.error_code is None
