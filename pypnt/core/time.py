# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""GPS Time Conversions

All conversions use a fixed leap-second offset (``GPS_UTC_OFFSET``); no
leap-second table is consulted, so results are exact only for epochs where
that offset applies.
"""

from datetime import datetime, timedelta, timezone
from typing import Union

import numpy as np

from .constants import GPS_UTC_OFFSET, GPST0, HALF_WEEK, WEEK_SECONDS

GPS_EPOCH = datetime(*GPST0, tzinfo=timezone.utc)


def ensure_utc_timezone(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    if dt.tzinfo is not timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def gps_time(civil_timestamp: datetime) -> float:
    """
    Convert a civil (UTC) timestamp to GPS time in milliseconds

    Parameters:
    -----------
    civil_timestamp : datetime
        UTC timestamp. Naive datetimes are interpreted as UTC.

    Returns:
    --------
    float
        Milliseconds since the GPS epoch (1980-01-06 00:00:00 UTC), including
        the fixed leap-second offset. No week rollover is applied.

    Raises:
    -------
    TypeError
        If ``civil_timestamp`` is not a datetime
    """
    if not isinstance(civil_timestamp, datetime):
        raise TypeError(f"Expected datetime, got {type(civil_timestamp).__name__}")

    delta = ensure_utc_timezone(civil_timestamp) - GPS_EPOCH
    # Integer microseconds, then scale, to keep microsecond precision
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    return (micros / 1e6 + GPS_UTC_OFFSET) * 1000.0


def gps_seconds(civil_timestamp: datetime) -> float:
    """GPS time of a civil timestamp, in seconds"""
    return gps_time(civil_timestamp) / 1000.0


def gps_seconds_to_datetime(seconds: float) -> datetime:
    """
    Convert GPS seconds back to a UTC datetime

    Inverse of :func:`gps_seconds` under the same fixed leap-second offset.
    """
    return GPS_EPOCH + timedelta(seconds=float(seconds) - GPS_UTC_OFFSET)


def gps_seconds_to_week_tow(seconds: float) -> tuple:
    """
    Convert GPS seconds to GPS week number and time of week

    Parameters:
    -----------
    seconds : float
        GPS seconds since GPS epoch

    Returns:
    --------
    tuple : (week, tow)
        GPS week number and time of week in seconds
    """
    if seconds < 0:
        raise ValueError(f"GPS seconds cannot be negative: {seconds}")

    week = int(seconds // WEEK_SECONDS)
    tow = seconds - week * WEEK_SECONDS
    return week, tow


def week_tow_to_gps_seconds(week: int, tow: float) -> float:
    """
    Convert GPS week number and time of week to GPS seconds

    Parameters:
    -----------
    week : int
        GPS week number
    tow : float
        Time of week in seconds (0-604800)

    Returns:
    --------
    float
        GPS seconds since GPS epoch
    """
    if week < 0:
        raise ValueError(f"GPS week cannot be negative: {week}")

    if tow < 0 or tow >= WEEK_SECONDS:
        raise ValueError(f"Time of week must be in range [0, 604800): {tow}")

    return week * WEEK_SECONDS + tow


def time_of_week_diff(t: Union[float, np.ndarray],
                      toe: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Time from ephemeris reference epoch with half-week rollover

    Computes ``t - toe`` folded into ``[-302400, 302400)`` so that a time of
    ephemeris given as seconds of week can be compared against full GPS
    seconds, including across a week boundary.

    Parameters:
    -----------
    t : float or np.ndarray
        GPS time (s)
    toe : float or np.ndarray
        Time of ephemeris (s of week, or GPS seconds)

    Returns:
    --------
    float or np.ndarray
        Elapsed time tk (s)
    """
    return np.mod(t - toe + HALF_WEEK, WEEK_SECONDS) - HALF_WEEK
