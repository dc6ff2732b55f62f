# blog_api/utils/test_datetime_utils.py
"""
Timestamp helper tests.

Usage: python -m pytest blog_api/utils/test_datetime_utils.py -v
"""

from datetime import datetime, date, timedelta, timezone

from blog_api.utils.datetime_utils import DateTimeUtils

def test_now_is_utc_aware():
    now = DateTimeUtils.now()
    assert now.tzinfo == timezone.utc

def test_for_firestore():
    """Dates become datetimes and every datetime becomes UTC-aware, recursively"""
    test_data = {
        'day': date(2020, 1, 15),
        'timestamp': datetime(2024, 1, 15, 10, 30),
        'nested': {
            'event_date': date(2023, 12, 25)
        },
        'list_data': [
            {'created_at': datetime(2024, 1, 1)}
        ],
        'title': "unchanged",
    }

    converted = DateTimeUtils.for_firestore(test_data)

    assert converted['day'] == datetime(2020, 1, 15, tzinfo=timezone.utc)
    assert converted['timestamp'].tzinfo == timezone.utc
    assert isinstance(converted['nested']['event_date'], datetime)
    assert converted['list_data'][0]['created_at'].tzinfo == timezone.utc
    assert converted['title'] == "unchanged"

def test_for_firestore_converts_offsets_to_utc():
    kst = timezone(timedelta(hours=9))
    converted = DateTimeUtils.for_firestore(datetime(2024, 1, 15, 9, 0, tzinfo=kst))
    assert converted == datetime(2024, 1, 15, 0, 0, tzinfo=timezone.utc)
    assert converted.tzinfo == timezone.utc

def test_from_firestore():
    stored = {
        'created_at': datetime(2024, 1, 15, 10, 30),
        'posts': [{'updated_at': datetime(2024, 1, 16, tzinfo=timezone(timedelta(hours=-5)))}],
    }

    restored = DateTimeUtils.from_firestore(stored)

    assert restored['created_at'].tzinfo == timezone.utc
    assert restored['posts'][0]['updated_at'] == datetime(2024, 1, 16, 5, 0, tzinfo=timezone.utc)

def test_to_iso_string():
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"
    kst = timezone(timedelta(hours=9))
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 19, 30, tzinfo=kst)) == "2024-01-15T10:30:00Z"
