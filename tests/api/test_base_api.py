"""Tests for the base API implementation."""

import pytest
import requests
from unittest.mock import Mock, MagicMock
from requests.exceptions import Timeout, ConnectionError, RequestException

from parpass.api.base_api import BaseAPI
from parpass.error_codes import ErrorCode
from parpass.exceptions import (
    APIError,
    APINotFoundError,
    APIResponseError,
    APITimeoutError,
    APIValidationError,
)

@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session

@pytest.fixture
def base_api(mock_session):
    """Create a BaseAPI instance for testing."""
    return BaseAPI(base_url="https://api.test.com/api/", session=mock_session)

def _response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    return response

def test_base_api_initialization(base_api):
    """Test BaseAPI initialization."""
    assert base_api.base_url == "https://api.test.com/api"
    assert base_api.timeout == BaseAPI.DEFAULT_TIMEOUT
    assert base_api.session.headers['Accept'] == 'application/json'
    assert base_api.session.headers['User-Agent'].startswith('parpass/')

def test_custom_timeout():
    api = BaseAPI("http://localhost:3001/api", timeout=(1, 2))
    assert api.timeout == (1, 2)

def test_create_session_never_retries():
    """Failed calls are not replayed by the transport."""
    api = BaseAPI("https://api.test.com")
    session = api._create_session()
    assert session.adapters["https://"].max_retries.total == 0
    assert session.adapters["http://"].max_retries.total == 0

def test_build_url(base_api):
    assert base_api._build_url("/courses") == "https://api.test.com/api/courses"
    assert base_api._build_url("stats/overview") == "https://api.test.com/api/stats/overview"

@pytest.mark.parametrize("status_code,payload,text,expected_error", [
    (400, {"error": "Bad Request"}, "", "Request failed: HTTP 400: Bad Request (Code: invalid_response)"),
    (401, {"message": "Unauthorized"}, "", "Request failed: HTTP 401: Unauthorized (Code: invalid_response)"),
    (500, None, "Internal Server Error", "Request failed: HTTP 500: Internal Server Error (Code: server_error)")
])
def test_validate_response_errors(base_api, status_code, payload, text, expected_error):
    """Test response validation with different error scenarios."""
    with pytest.raises(APIResponseError) as exc_info:
        base_api._validate_response(_response(status_code, payload, text))
    assert str(exc_info.value) == expected_error
    assert exc_info.value.status_code == status_code

def test_validate_response_not_found(base_api):
    with pytest.raises(APINotFoundError) as exc_info:
        base_api._validate_response(_response(404, {"error": "Member not found"}))
    assert exc_info.value.code == ErrorCode.NOT_FOUND
    assert exc_info.value.status_code == 404
    assert "Member not found" in exc_info.value.message

@pytest.mark.parametrize("text,payload,expected_result", [
    ('{"key": "value"}', {"key": "value"}, {"key": "value"}),
    ('[{"id": 1}, {"id": 2}]', [{"id": 1}, {"id": 2}], [{"id": 1}, {"id": 2}]),
    ("", None, None),
    ("null", None, None)
])
def test_parse_response_formats(base_api, text, payload, expected_result):
    """Test parsing different response formats."""
    assert base_api._parse_response(_response(200, payload, text)) == expected_result

def test_parse_response_invalid_format(base_api):
    """Test parsing invalid JSON format."""
    with pytest.raises(APIValidationError) as exc_info:
        base_api._parse_response(_response(200, None, "invalid json"))
    assert "Failed to parse response" in str(exc_info.value)

@pytest.mark.parametrize("exception_class,expected_error", [
    (Timeout, APITimeoutError),
    (ConnectionError, APIResponseError),
    (RequestException, APIResponseError),
    (Exception, APIError)
])
def test_make_request_error_handling(base_api, exception_class, expected_error):
    """Test error handling in make_request method."""
    base_api.session.request.side_effect = exception_class("Test error")
    with pytest.raises(expected_error):
        base_api._make_request("GET", "/test")

def test_make_request_success(base_api):
    """Test successful request."""
    base_api.session.request.return_value = _response(200, {"success": True})
    assert base_api._make_request("GET", "/test") == {"success": True}

def test_make_request_uses_configured_timeout(base_api):
    base_api.session.request.return_value = _response(200, {"success": True})
    base_api._make_request("GET", "/test")
    assert base_api.session.request.call_args[1]["timeout"] == BaseAPI.DEFAULT_TIMEOUT

    base_api._make_request("GET", "/test", timeout=(1, 3))
    assert base_api.session.request.call_args[1]["timeout"] == (1, 3)

def test_make_request_with_params_and_data(base_api):
    """Test request with query parameters and data."""
    base_api.session.request.return_value = _response(200, {"success": True})

    result = base_api._make_request(
        "POST",
        "/test",
        params={"key": "value"},
        data={"data": "test"}
    )

    assert result == {"success": True}
    base_api.session.request.assert_called_once()
    kwargs = base_api.session.request.call_args[1]
    assert kwargs.get("method") == "POST"
    assert kwargs.get("url") == "https://api.test.com/api/test"
    assert kwargs.get("params") == {"key": "value"}
    assert kwargs.get("json") == {"data": "test"}

def test_get_list_accepts_null(base_api):
    base_api.session.request.return_value = _response(200, None, "null")
    assert base_api._get_list("/courses") == []

def test_get_list_rejects_object(base_api):
    base_api.session.request.return_value = _response(200, {"id": "c1"})
    with pytest.raises(APIValidationError):
        base_api._get_list("/courses")

def test_get_object_rejects_list(base_api):
    base_api.session.request.return_value = _response(200, [{"id": "c1"}])
    with pytest.raises(APIValidationError):
        base_api._get_object("/courses/c1")
