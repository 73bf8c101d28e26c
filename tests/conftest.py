import json
import os
from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from fc_client import FCClient

FIXED_DATE = "Tue, 15 Nov 1994 08:12:31 GMT"


@pytest.fixture(autouse=True)
def mock_env():
    with patch.dict(os.environ, {
        "FC_ACCOUNT_ID": "123456",
        "FC_REGION": "cn-shanghai",
        "FC_ACCESS_KEY_ID": "AKID",
        "FC_ACCESS_KEY_SECRET": "s3cr3t",
    }):
        yield


@pytest.fixture
def make_response():
    def _make(status=200, body=b"", headers=None, json_body=None):
        response = requests.Response()
        response.status_code = status
        response.headers = CaseInsensitiveDict(headers or {})
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            response.headers.setdefault("content-type", "application/json; charset=utf-8")
        response._content = body
        return response
    return _make


@pytest.fixture
def session(make_response):
    mock_session = MagicMock(spec=requests.Session)
    mock_session.request.return_value = make_response(json_body={})
    return mock_session


@pytest.fixture
def frozen_date(mocker):
    return mocker.patch("fc_client.dispatcher.formatdate", return_value=FIXED_DATE)


@pytest.fixture
def client(session, frozen_date):
    return FCClient(
        "123456",
        access_key_id="AKID",
        access_key_secret="s3cr3t",
        region="cn-shanghai",
        session=session,
    )


@pytest.fixture
def sent_request(session):
    """Return (method, url, kwargs) of the single request sent through `session`."""
    def _sent():
        assert session.request.call_count == 1
        args, kwargs = session.request.call_args
        return args[0], args[1], kwargs
    return _sent
