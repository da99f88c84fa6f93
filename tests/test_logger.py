# ---------- TESTS FOR STRUCTURED LOGGER ----------

import json
import logging

import pytest

from skillpath.utils.logger import (
    JSONFormatter,
    clear_correlation_ids,
    log_performance,
    set_correlation_id,
)


def _record(message="Hello", **extra):
    record = logging.LogRecord("skillpath.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def clean_context():
    clear_correlation_ids()
    yield
    clear_correlation_ids()


def test_formatter_outputs_json_with_extra_fields():
    output = json.loads(
        JSONFormatter().format(_record(extra_fields={"share_id": "abc", "duration_ms": 12.5}))
    )

    assert output["message"] == "Hello"
    assert output["level"] == "INFO"
    assert output["logger"] == "skillpath.test"
    assert output["share_id"] == "abc"
    assert output["duration_ms"] == 12.5


def test_formatter_includes_correlation_ids():
    set_correlation_id(request_id="req-1", session_id="sess-1")

    output = json.loads(JSONFormatter().format(_record()))

    assert output["request_id"] == "req-1"
    assert output["session_id"] == "sess-1"


def test_clear_correlation_ids():
    set_correlation_id(session_id="sess-1")
    clear_correlation_ids()

    assert "session_id" not in json.loads(JSONFormatter().format(_record()))


def test_log_performance_logs_duration(caplog):
    with caplog.at_level(logging.INFO):
        with log_performance("question_generation", session_id="sess-1"):
            pass

    completed = [r for r in caplog.records if r.getMessage() == "Completed question_generation"]
    assert completed
    assert completed[0].extra_fields["status"] == "success"
    assert "duration_ms" in completed[0].extra_fields


def test_log_performance_reraises(caplog):
    with caplog.at_level(logging.INFO):
        with pytest.raises(RuntimeError):
            with log_performance("skill_analysis"):
                raise RuntimeError("boom")

    assert any(r.getMessage() == "Failed skill_analysis" for r in caplog.records)
