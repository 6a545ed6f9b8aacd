"""Tests for logging filters and error aggregation."""

import logging
from unittest.mock import patch

import pytest

from parpass.config.error_aggregator import ErrorAggregator, aggregate_error, init_error_aggregator
from parpass.config.logging_config import ErrorAggregationConfig
from parpass.config.logging_filters import SensitiveDataFilter
from parpass.exceptions import APIError, APINotFoundError, ValidationError, handle_errors

def _record(msg, *args):
    return logging.LogRecord("parpass", logging.INFO, __file__, 1, msg, args, None)

def test_parpass_codes_are_masked():
    record = _record("Looking up member %s", "PP100001")
    SensitiveDataFilter().filter(record)
    assert record.getMessage() == "Looking up member ***MASKED***"

def test_context_is_masked():
    record = _record("Signed in")
    record.context = {"parpass_code": "PP100001", "member_id": "m1", "nested": {"email": "a@b.c"}}
    SensitiveDataFilter().filter(record)
    assert record.context == {
        "parpass_code": "***MASKED***",
        "member_id": "m1",
        "nested": {"email": "***MASKED***"}
    }

def test_aggregator_reports_at_threshold():
    aggregator = ErrorAggregator(ErrorAggregationConfig(error_threshold=2))
    with patch.object(aggregator, "_report") as report:
        aggregator.add_error("HTTP 500", "favorites")
        assert report.call_count == 0
        aggregator.add_error("HTTP 500", "favorites")
        assert report.call_count == 1
    assert report.call_args[0][0].count == 2
    assert aggregator.pending == {}

def test_aggregator_groups_by_configured_fields():
    aggregator = ErrorAggregator(ErrorAggregationConfig(categorize_by=["message"]))
    aggregator.add_error("HTTP 500", "favorites")
    aggregator.add_error("HTTP 500", "reviews")
    group = aggregator.pending["HTTP 500"]
    assert group.count == 2
    assert group.services == {"favorites", "reviews"}

def test_aggregator_shutdown_flushes():
    aggregator = ErrorAggregator(ErrorAggregationConfig())
    aggregator.add_error("timeout", "api")
    with patch.object(aggregator, "_report") as report:
        aggregator.shutdown()
    report.assert_called_once()
    assert aggregator.pending == {}

def test_aggregate_error_without_aggregator():
    aggregate_error("ignored", "api")

def test_handle_errors_fallback_suppresses():
    aggregator = init_error_aggregator(ErrorAggregationConfig())
    calls = []

    with handle_errors(APIError, "favorites", "toggle", fallback=lambda: calls.append("reverted")):
        raise APIError("boom")

    assert calls == ["reverted"]
    assert aggregator.pending["boom"].code == "request_failed"

def test_handle_errors_reraises_without_fallback():
    with pytest.raises(APIError) as exc_info:
        with handle_errors(APIError, "favorites", "toggle"):
            raise APIError("boom")
    assert exc_info.value.message == "boom"

def test_error_hints():
    assert APINotFoundError("Not found: HTTP 404").hint != APIError("boom").hint
    assert ValidationError("Please select a rating").hint is None
