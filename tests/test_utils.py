"""Tests for shared datetime utilities and request logging context."""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from fleet_availability.logging_context import (
    LOG_FORMAT,
    NO_VENDOR,
    RequestContextFilter,
    get_request_id,
    get_request_logger,
    get_vendor_id,
    install_request_filter,
    request_scope,
    set_request_id,
)
from fleet_availability.utils import format_time_range, to_utc


class TestToUtc:
    def test_naive_string_is_utc(self):
        assert to_utc("2025-03-01T10:00") == datetime(2025, 3, 1, 10, tzinfo=timezone.utc)

    def test_zulu_suffix(self):
        assert to_utc("2025-03-01T10:00:00Z") == datetime(2025, 3, 1, 10, tzinfo=timezone.utc)

    def test_offset_converted(self):
        assert to_utc("2025-03-01T12:00+02:00").hour == 10

    def test_aware_datetime_converted(self):
        plus_one = timezone(timedelta(hours=1))
        assert to_utc(datetime(2025, 3, 1, 11, tzinfo=plus_one)).hour == 10

    def test_date_is_midnight(self):
        assert to_utc(date(2025, 4, 1)) == datetime(2025, 4, 1, tzinfo=timezone.utc)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError, match="Invalid ISO-8601"):
            to_utc("next tuesday")


class TestFormatTimeRange:
    def test_same_day(self):
        assert format_time_range(datetime(2025, 3, 1, 14), datetime(2025, 3, 1, 15, 30)) == "14:00-15:30"

    def test_multi_day(self):
        assert format_time_range(datetime(2025, 4, 1), datetime(2025, 4, 3)) == (
            "2025-04-01 00:00 to 2025-04-03 00:00"
        )


class TestRequestLogging:
    def test_request_id_round_trip(self):
        set_request_id("REQ-test")
        assert get_request_id() == "REQ-test"

    def test_scope_binds_and_restores(self):
        before = get_request_id()
        with request_scope("VENDOR-A") as request_id:
            assert get_request_id() == request_id
            assert get_vendor_id() == "VENDOR-A"
        assert get_request_id() == before
        assert get_vendor_id() == NO_VENDOR

    def test_filter_stamps_record(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with request_scope("VENDOR-B", request_id="REQ-fixed"):
            RequestContextFilter().filter(record)
        assert record.request_id == "REQ-fixed"
        assert record.vendor_id == "VENDOR-B"
        assert logging.Formatter(LOG_FORMAT).format(record).endswith(
            "[REQ-fixed vendor=VENDOR-B] [x] INFO: msg"
        )

    def test_filter_attached_once(self):
        logger = get_request_logger("fleet_availability.test")
        get_request_logger("fleet_availability.test")
        assert sum(isinstance(f, RequestContextFilter) for f in logger.filters) == 1

    def test_handler_filter_installed_once(self):
        handler = logging.NullHandler()
        install_request_filter(handler)
        install_request_filter(handler)
        assert sum(isinstance(f, RequestContextFilter) for f in handler.filters) == 1
