"""Tests for logger context handling."""

import logging

import pytest

from parpass.utils.logging_utils import LoggerMixin, format_context, log_execution

class Worker(LoggerMixin):
    pass

def test_format_context_drops_secrets():
    assert format_context({"member_id": "m1", "parpass_code": "PP100001", "course_id": None}) == "member_id=m1"

def test_scoped_context(caplog):
    worker = Worker()
    worker.set_log_context(member_id="m1")

    with caplog.at_level(logging.INFO, logger=__name__):
        with worker.log_context(course_id="c1"):
            worker.info("Inside")
        worker.info("Outside")

    assert caplog.messages == ["Inside | member_id=m1 course_id=c1", "Outside | member_id=m1"]

def test_log_execution_reraises(caplog):
    @log_execution(level='INFO')
    def explode():
        raise RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger=__name__):
        with pytest.raises(RuntimeError):
            explode()

    assert caplog.messages[0] == "explode started"
    assert "explode failed" in caplog.messages[1]
