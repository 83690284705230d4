from __future__ import annotations

from datetime import datetime, timedelta, timezone

from shiptrack.domain.activity import activity_window, bucket_by_week, weeks_ago

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_weeks_ago_counts_whole_weeks():
    assert weeks_ago(NOW, NOW) == 0
    assert weeks_ago(NOW, NOW - timedelta(days=6, hours=23)) == 0
    assert weeks_ago(NOW, NOW - timedelta(days=7)) == 1
    assert weeks_ago(NOW, NOW - timedelta(days=20)) == 2


def test_weeks_ago_treats_naive_values_as_utc():
    naive = (NOW - timedelta(days=8)).replace(tzinfo=None)
    assert weeks_ago(NOW, naive) == 1


def test_activity_window_spans_requested_weeks():
    start, end = activity_window(NOW, 7)
    assert end == NOW
    assert end - start == timedelta(days=49)


def test_bucket_by_week_groups_routes_and_skips_empty_weeks():
    rows = [
        ("A", NOW - timedelta(hours=1)),
        ("A", NOW - timedelta(days=1)),
        ("B", NOW - timedelta(days=2)),
        ("C", NOW - timedelta(days=22)),
    ]
    assert bucket_by_week(NOW, rows) == {"0": {"A": 2, "B": 1}, "3": {"C": 1}}


def test_bucket_by_week_empty_input():
    assert bucket_by_week(NOW, []) == {}
