"""Tests for isodatetime utility module."""

from datetime import UTC, datetime, timedelta, timezone

from gatehouse.utils import isodatetime


class TestToTimestamp:
    """Tests for to_timestamp()."""

    def test_utc_datetime_ends_with_z(self):
        dt = datetime(2026, 10, 19, 10, 30, 0, tzinfo=UTC)
        assert isodatetime.to_timestamp(dt) == "2026-10-19T10:30:00.000000Z"

    def test_naive_datetime_treated_as_utc(self):
        dt = datetime(2026, 10, 19, 10, 30, 0)
        assert isodatetime.to_timestamp(dt) == "2026-10-19T10:30:00.000000Z"

    def test_other_timezone_converted_to_utc(self):
        dt = datetime(2026, 10, 19, 18, 30, 0, tzinfo=timezone(timedelta(hours=8)))
        assert isodatetime.to_timestamp(dt) == "2026-10-19T10:30:00.000000Z"

    def test_timestamps_sort_as_text(self):
        """Whole seconds and fractional seconds should compare correctly as strings."""
        whole = isodatetime.to_timestamp(datetime(2026, 10, 19, 10, 30, 0, tzinfo=UTC))
        fraction = isodatetime.to_timestamp(datetime(2026, 10, 19, 10, 30, 0, 500000, tzinfo=UTC))
        assert whole < fraction


class TestToDatetime:
    """Tests for to_datetime()."""

    def test_parses_z_suffix(self):
        dt = isodatetime.to_datetime("2026-10-19T10:30:00.000000Z")
        assert dt == datetime(2026, 10, 19, 10, 30, 0, tzinfo=UTC)

    def test_inverse_of_to_timestamp(self):
        dt = datetime(2026, 10, 19, 10, 30, 0, 123456, tzinfo=UTC)
        assert isodatetime.to_datetime(isodatetime.to_timestamp(dt)) == dt


class TestNow:
    """Tests for now(), utcnow() and after_seconds()."""

    def test_now_is_utc_string(self):
        assert isodatetime.now().endswith("Z")

    def test_utcnow_is_aware(self):
        assert isodatetime.utcnow().tzinfo is not None

    def test_after_seconds_in_future(self):
        before = isodatetime.utcnow()
        later = isodatetime.after_seconds(60)
        assert later - before >= timedelta(seconds=59)
