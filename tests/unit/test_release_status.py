from datetime import date, datetime, timedelta, timezone

from catalog.services.release_status import (
    ReleaseStatus,
    compute_release_status,
    has_recent_air_date,
    is_new_release,
    latest_date,
)
from catalog.utils.timezone import safe_datetime_diff_days, to_utc_datetime

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def days_ago(n):
    return NOW - timedelta(days=n)


def test_no_dates_has_no_status():
    assert compute_release_status(None, None, None, NOW) is None


def test_future_theatrical_is_upcoming():
    assert compute_release_status(None, days_ago(-10), None, NOW) == ReleaseStatus.UPCOMING
    assert compute_release_status(days_ago(-3), None, None, NOW) == ReleaseStatus.UPCOMING


def test_in_theaters_window():
    assert compute_release_status(None, days_ago(10), None, NOW) == ReleaseStatus.IN_THEATERS
    assert compute_release_status(None, days_ago(45), None, NOW) == ReleaseStatus.IN_THEATERS
    assert compute_release_status(None, days_ago(46), None, NOW) == ReleaseStatus.RELEASED


def test_release_date_used_when_no_theatrical_date():
    assert compute_release_status(days_ago(5), None, None, NOW) == ReleaseStatus.IN_THEATERS


def test_digital_wins_over_theatrical():
    assert compute_release_status(None, days_ago(30), days_ago(3), NOW) == ReleaseStatus.NEW_ON_STREAMING
    assert compute_release_status(None, days_ago(90), days_ago(20), NOW) == ReleaseStatus.RELEASED


def test_future_digital_keeps_theatrical_status():
    assert compute_release_status(None, days_ago(10), days_ago(-20), NOW) == ReleaseStatus.IN_THEATERS


def test_custom_windows():
    assert compute_release_status(None, days_ago(10), None, NOW, in_theaters_days=7) == ReleaseStatus.RELEASED
    assert compute_release_status(None, None, days_ago(20), NOW, new_on_streaming_days=30) == ReleaseStatus.NEW_ON_STREAMING


def test_is_new_release_uses_latest_date():
    assert is_new_release([days_ago(100), days_ago(3), None], NOW)
    assert not is_new_release([days_ago(15)], NOW)
    assert is_new_release([days_ago(14)], NOW)
    assert not is_new_release([], NOW)
    assert not is_new_release([None, None], NOW)


def test_future_date_is_not_new_release():
    assert not is_new_release([days_ago(-1)], NOW)


def test_accepts_naive_dates_and_strings():
    assert is_new_release(["2026-10-10"], NOW)
    assert is_new_release([datetime(2026, 10, 17)], NOW)
    assert is_new_release([date(2026, 10, 16)], NOW)
    assert not is_new_release(["not a date"], NOW)


def test_latest_date():
    assert latest_date([days_ago(3), days_ago(1), None]) == days_ago(1)
    assert latest_date([]) is None


def test_has_recent_air_date():
    assert has_recent_air_date(days_ago(6), NOW, 7)
    assert not has_recent_air_date(days_ago(8), NOW, 7)
    assert not has_recent_air_date(None, NOW, 7)
    assert not has_recent_air_date(days_ago(-2), NOW, 7)


def test_timezone_helpers():
    assert to_utc_datetime("2026-10-18T10:00:00Z") == datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc)
    assert to_utc_datetime("") is None
    assert to_utc_datetime(12345) is None
    assert safe_datetime_diff_days(NOW, days_ago(2)) == 2.0
    assert safe_datetime_diff_days(None, NOW) is None
