"""Tests for request correlation in log events."""
import logging

import structlog

from meilimelo.logging import (
    add_request_context,
    clear_request_context,
    configure_logging,
    get_request_id,
    get_trace_id,
    set_request_context,
)


def test_set_request_context_defaults_trace_to_request_id() -> None:
    set_request_context(request_id="abc")
    try:
        assert get_request_id() == "abc"
        assert get_trace_id() == "abc"
    finally:
        clear_request_context()
    assert get_request_id() == ""


def test_processor_injects_ids() -> None:
    set_request_context(request_id="abc", trace_id="t-1")
    try:
        event = add_request_context(None, "info", {"event": "meili_request"})
    finally:
        clear_request_context()
    assert event == {"event": "meili_request", "request_id": "abc", "trace_id": "t-1"}


def test_processor_without_context_leaves_event_alone() -> None:
    assert add_request_context(None, "info", {"event": "x"}) == {"event": "x"}


def test_configure_logging_filters_below_level(capsys) -> None:
    configure_logging(json_logs=True, level=logging.WARNING)
    try:
        log = structlog.get_logger("meilimelo.test")
        log.debug("meili_request", method="GET")
        log.warning("meili_request_failed", method="GET", status=500)
        out = capsys.readouterr().out
    finally:
        structlog.reset_defaults()
    assert "meili_request_failed" in out
    assert '"event": "meili_request"' not in out
