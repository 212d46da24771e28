"""
Unit Tests for request-aware logging
"""
import json
import logging

from maintenance_portal.core.logging import (
    PortalJsonFormatter,
    RequestContextFilter,
    get_logger,
    request_id,
    user_id,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("maintenance_portal.test", logging.INFO, __file__, 10, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestContext:

    def test_filter_copies_context_vars(self):
        rid, uid = request_id.set("req-1"), user_id.set("2")
        try:
            record = make_record()
            RequestContextFilter().filter(record)
        finally:
            request_id.reset(rid)
            user_id.reset(uid)

        assert record.request_id == "req-1"
        assert record.user_id == "2"

    def test_filter_outside_request(self):
        record = make_record()
        RequestContextFilter().filter(record)

        assert record.request_id == "-"

    def test_json_formatter_drops_empty_context(self):
        record = make_record(complaint_id="c-1")
        RequestContextFilter().filter(record)

        line = json.loads(PortalJsonFormatter("%(message)s").format(record))

        assert line["message"] == "hello"
        assert line["complaint_id"] == "c-1"
        assert line["service"] == "maintenance-portal"
        assert "request_id" not in line


class TestPortalLogger:

    def test_bound_fields_merge_with_extra(self, caplog):
        log = get_logger("maintenance_portal.test").bind(complaint_id="c-9")

        with caplog.at_level(logging.INFO, logger="maintenance_portal.test"):
            log.info("Photo stored", extra={"filename": "a.jpg"})

        record = caplog.records[-1]
        assert record.complaint_id == "c-9"
        assert record.filename == "a.jpg"

    def test_bind_does_not_mutate_parent(self):
        parent = get_logger("maintenance_portal.test")
        parent.bind(complaint_id="c-1")

        assert parent.extra == {}
