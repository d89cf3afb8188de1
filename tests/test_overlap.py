"""Tests for half-open interval overlap."""

import random

import pytest

from fleet_availability.errors import InvalidWindowError
from fleet_availability.overlap import find_overlaps, validate_window, windows_overlap
from fleet_availability.schemas.availability_schema import ConflictRecord
from tests.conftest import at, make_entry


class TestWindowsOverlap:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (("10:00", "11:30"), ("11:00", "12:00"), True),   # partial overlap
            (("10:00", "11:30"), ("11:30", "13:00"), False),  # touching, a before b
            (("11:30", "13:00"), ("10:00", "11:30"), False),  # touching, b before a
            (("10:00", "12:00"), ("10:30", "11:00"), True),   # b inside a
            (("10:30", "11:00"), ("10:00", "12:00"), True),   # a inside b
            (("10:00", "11:00"), ("10:00", "11:00"), True),   # identical
            (("10:00", "11:00"), ("12:00", "13:00"), False),  # disjoint
            (("10:00", "11:00"), ("10:59", "11:01"), True),   # one-minute overlap
        ],
    )
    def test_boundaries(self, a, b, expected):
        day = "2025-03-01T"
        a_start, a_end = at(day + a[0]), at(day + a[1])
        b_start, b_end = at(day + b[0]), at(day + b[1])
        assert windows_overlap(a_start, a_end, b_start, b_end) is expected
        assert windows_overlap(b_start, b_end, a_start, a_end) is expected

    def test_matches_minute_sampling(self):
        rng = random.Random(20250301)
        base = at("2025-03-01T00:00")
        for _ in range(500):
            a1, a2 = sorted(rng.sample(range(60), 2))
            b1, b2 = sorted(rng.sample(range(60), 2))
            shared = set(range(a1, a2)) & set(range(b1, b2))
            got = windows_overlap(
                base.replace(minute=a1), base.replace(minute=a2),
                base.replace(minute=b1), base.replace(minute=b2),
            )
            assert got is bool(shared), (a1, a2, b1, b2)


class TestValidateWindow:
    def test_accepts_strings_and_normalizes(self):
        start, end = validate_window("2025-03-01T10:00", "2025-03-01T12:00+01:00")
        assert start == at("2025-03-01T10:00")
        assert end == at("2025-03-01T11:00")

    def test_rejects_empty_window(self):
        with pytest.raises(InvalidWindowError):
            validate_window("2025-03-01T10:00", "2025-03-01T10:00")

    def test_rejects_inverted_window(self):
        with pytest.raises(InvalidWindowError) as info:
            validate_window("2025-03-01T12:00", "2025-03-01T10:00")
        assert info.value.start_at == at("2025-03-01T12:00")


class TestFindOverlaps:
    def test_collects_every_overlap_without_short_circuit(self):
        records = [
            ConflictRecord.from_schedule(make_entry("2025-03-01T08:00", "2025-03-01T09:00", entry_id="a")),
            ConflictRecord.from_schedule(make_entry("2025-03-01T09:30", "2025-03-01T10:30", entry_id="b")),
            ConflictRecord.from_schedule(make_entry("2025-03-01T10:00", "2025-03-01T11:00", entry_id="c")),
            ConflictRecord.from_schedule(make_entry("2025-03-01T11:00", "2025-03-01T12:00", entry_id="d")),
        ]
        found = find_overlaps(records, at("2025-03-01T09:00"), at("2025-03-01T11:00"))
        assert [r.id for r in found] == ["b", "c"]

    def test_empty_input(self):
        assert find_overlaps([], at("2025-03-01T09:00"), at("2025-03-01T10:00")) == []
