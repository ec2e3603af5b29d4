import datetime

import pytest
import pytz
from freezegun import freeze_time

from nypl.hold_eligibility.util.datetime_helpers import (
    from_timestamp,
    parse_date,
    utc_now,
    utc_today,
)


def test_from_timestamp() -> None:
    assert from_timestamp(0) == datetime.datetime(1970, 1, 1, tzinfo=pytz.UTC)


@freeze_time("2024-03-01 23:30:00")
def test_utc_now_and_today() -> None:
    now = utc_now()
    assert now.tzinfo == pytz.UTC
    assert now == datetime.datetime(2024, 3, 1, 23, 30, tzinfo=pytz.UTC)
    assert utc_today() == datetime.date(2024, 3, 1)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-03-01", datetime.date(2024, 3, 1)),
        ("2024-03-01T10:15:00Z", datetime.date(2024, 3, 1)),
        (datetime.date(2024, 3, 1), datetime.date(2024, 3, 1)),
        (datetime.datetime(2024, 3, 1, 10, 15), datetime.date(2024, 3, 1)),
        ("", None),
        (None, None),
    ],
)
def test_parse_date(
    value: str | datetime.date | None, expected: datetime.date | None
) -> None:
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", ["not a date", "n/a", 20240301])
def test_parse_date_invalid(value: object) -> None:
    with pytest.raises(ValueError):
        parse_date(value)
