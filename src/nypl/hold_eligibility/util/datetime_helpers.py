import datetime

import pytz
from dateutil.parser import isoparse


def from_timestamp(ts: float) -> datetime.datetime:
    """Return a UTC datetime object from a timestamp.

    :return: datetime object
    """
    return datetime.datetime.fromtimestamp(ts, tz=pytz.UTC)


def utc_now() -> datetime.datetime:
    """Get the current time in UTC.

    :return: datetime object
    """
    return datetime.datetime.now(tz=pytz.UTC)


def utc_today() -> datetime.date:
    """Get the current calendar date in UTC."""
    return utc_now().date()


def parse_date(value: object) -> datetime.date | None:
    """Parse the date portion of an ISO 8601 date or datetime string.

    Sierra reports dates such as expiration dates as `YYYY-MM-DD`, but
    some endpoints return full timestamps, so both are accepted.

    :raise ValueError: If `value` is not a valid ISO 8601 string.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO 8601 string, got {value!r}")
    return isoparse(value).date()
