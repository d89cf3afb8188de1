"""Tests for configuration loading and validation."""

import dataclasses

import pytest

from fleet_availability.config import (
    AppConfig,
    AvailabilityConfig,
    CalendarConfig,
    _csv_tuple,
    _safe_float,
    _safe_int,
    _validate_config,
)


def _with_availability(**changes) -> AppConfig:
    config = AppConfig()
    return dataclasses.replace(
        config, availability=dataclasses.replace(config.availability, **changes)
    )


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_defaults(self):
        assert AvailabilityConfig().blocking_statuses == ("accepted", "completed")
        assert CalendarConfig().booking_color == "#3B82F6"

    def test_invalid_trip_minutes(self):
        with pytest.raises(ValueError, match="DEFAULT_TRIP_MINUTES"):
            _validate_config(_with_availability(default_trip_minutes=0))

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="STORAGE_TIMEOUT_SEC"):
            _validate_config(_with_availability(storage_timeout_sec=0.0))

    def test_empty_blocking_statuses(self):
        with pytest.raises(ValueError, match="at least one"):
            _validate_config(_with_availability(blocking_statuses=()))

    def test_unknown_blocking_status(self):
        with pytest.raises(ValueError, match="unknown"):
            _validate_config(_with_availability(blocking_statuses=("accepted", "booked")))

    def test_rejected_cannot_block(self):
        with pytest.raises(ValueError, match="rejected"):
            _validate_config(_with_availability(blocking_statuses=("accepted", "rejected")))

    def test_invalid_color(self):
        config = AppConfig()
        config = dataclasses.replace(
            config, calendar=dataclasses.replace(config.calendar, booking_color="blue")
        )
        with pytest.raises(ValueError, match="CALENDAR_BOOKING_COLOR"):
            _validate_config(config)


class TestEnvParsing:
    def test_safe_int_parsing(self):
        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_bad_value(self, monkeypatch):
        monkeypatch.setenv("FLEET_TEST_INT", "two")
        with pytest.raises(ValueError, match="FLEET_TEST_INT"):
            _safe_int("FLEET_TEST_INT", "1")

    def test_safe_float_parsing(self):
        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)

    def test_csv_tuple(self, monkeypatch):
        monkeypatch.setenv("FLEET_TEST_CSV", " Accepted, completed ,")
        assert _csv_tuple("FLEET_TEST_CSV", "") == ("accepted", "completed")
