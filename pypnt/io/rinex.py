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

"""RINEX 3 navigation file reader for GPS broadcast ephemerides.

Record layout (columns are 0-indexed slices)::

    line 1   [1:3] PRN, [3:23] epoch (Y M D h m s), then af0, af1, af2
    line 2-8 [0:4] blank, then four 19-column D-exponent floats

Numeric fields are parsed leniently: a field that is blank or malformed
becomes 0.0 and a missing continuation line leaves its fields at 0.0.
Malformed input therefore produces records that look plausible but carry
wrong numbers; nothing is reported.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, Union

from ..core.constants import (RINEX_DATA_SKIP, RINEX_FIELD_WIDTH,
                              RINEX_HEADER_END, RINEX_NAV_DATA_LINES,
                              RINEX_NAV_MIN_LINE)
from ..core.data_structures import EphemerisRecord, EphemerisSet
from ..core.time import gps_time

logger = logging.getLogger(__name__)

# Field names carried by each continuation line, in column order
DATA_LINE_FIELDS = (
    ('iode', 'crs', 'delta_n', 'm0'),
    ('cuc', 'eccentricity', 'cus', 'sqrt_a'),
    ('toe', 'cic', 'omega0', 'cis'),
    ('i0', 'crc', 'omega', 'omega_dot'),
    ('idot', 'codes_on_l2_channel', 'gps_week', 'l2_p_data_flag'),
    ('sv_accuracy', 'sv_health', 'tgd', 'iodc'),
    ('transmission_time', 'fit_interval'),
)

# Clock fields on the first line: (name, start column)
CLOCK_FIELDS = (
    ('sv_clock_bias', 23),
    ('sv_clock_drift', 42),
    ('sv_clock_drift_rate', 61),
)


def parse_float(text: str) -> float:
    """
    Parse a RINEX floating point field, returning 0.0 on failure

    Accepts Fortran 'D' exponents. This is lossy: blank and malformed
    fields are indistinguishable from a true zero.
    """
    try:
        return float(text.strip().replace('D', 'E').replace('d', 'e'))
    except ValueError:
        return 0.0


def parse_int(text: str) -> int:
    """Parse an integer field, returning 0 on failure"""
    try:
        return int(text.strip())
    except ValueError:
        return 0


def parse_epoch(text: str) -> tuple:
    """
    Parse the epoch of a record's first line

    Parameters:
    -----------
    text : str
        Columns holding "year month day hour minute second"

    Returns:
    --------
    tuple
        (year, month, day, hour, minute, second) as ints; unparsable
        tokens become 0

    Raises:
    -------
    ValueError
        If fewer than six tokens are present
    """
    parts = text.split()
    if len(parts) < 6:
        raise ValueError(f"Malformed RINEX epoch: '{text.strip()}'")
    return tuple(parse_int(p) for p in parts[:6])


def epoch_to_gps_millis(epoch: tuple) -> float:
    """GPS milliseconds of a (Y, M, D, h, m, s) epoch taken as UTC.

    Raises ValueError for an impossible calendar date.
    """
    year, month, day, hour, minute, second = epoch
    return gps_time(datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc))


def parse_data_line(line: str) -> list[float]:
    """Split a continuation line into at most four float fields"""
    body = line[RINEX_DATA_SKIP:]
    return [
        parse_float(body[i:i + RINEX_FIELD_WIDTH])
        for i in range(0, min(len(body), 4 * RINEX_FIELD_WIDTH), RINEX_FIELD_WIDTH)
    ]


def _parse_record(first_line: str, lines: Iterator[str]) -> EphemerisRecord:
    values = {
        'sat_id': parse_int(first_line[1:3]),
        'system': first_line[0] if first_line[0].strip() else 'G',
    }
    epoch = parse_epoch(first_line[3:23])
    values['epoch'] = epoch
    values['gps_millis'] = epoch_to_gps_millis(epoch)
    for name, start in CLOCK_FIELDS:
        values[name] = parse_float(first_line[start:start + RINEX_FIELD_WIDTH])

    # Continuation lines consumed in order; EOF leaves the rest at 0.0
    for line_no in range(RINEX_NAV_DATA_LINES):
        data_line = next(lines, None)
        if data_line is None:
            logger.debug(f"Record {values['system']}{values['sat_id']:02d} truncated "
                         f"after {line_no} continuation lines")
            break
        for name, value in zip(DATA_LINE_FIELDS[line_no], parse_data_line(data_line)):
            values[name] = value

    return EphemerisRecord(**values)


def parse_nav_lines(lines: Iterable[str]) -> EphemerisSet:
    """
    Parse GPS navigation records from RINEX text lines

    Parameters:
    -----------
    lines : Iterable[str]
        Lines of a RINEX navigation file, header included

    Returns:
    --------
    EphemerisSet
        Records in input order
    """
    stripped = (line.rstrip('\r\n') for line in lines)

    for line in stripped:
        if RINEX_HEADER_END in line:
            break

    records = []
    for line in stripped:
        if len(line) < RINEX_NAV_MIN_LINE:
            logger.debug(f"Skipping short navigation line ({len(line)} chars)")
            continue
        records.append(_parse_record(line, stripped))

    return EphemerisSet(records)


def parse_navigation_file(path: Union[str, Path]) -> EphemerisSet:
    """
    Read a RINEX navigation file into an ephemeris set

    Parameters:
    -----------
    path : str or Path
        RINEX 3 navigation file

    Returns:
    --------
    EphemerisSet
        All records in file order

    Raises:
    -------
    FileNotFoundError
        If the file does not exist
    ValueError
        If a record carries a malformed epoch
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Navigation file not found: {path}")

    with open(path, 'r', encoding='ascii', errors='replace') as f:
        nav = parse_nav_lines(f)

    logger.info(f"Read {len(nav)} ephemeris records from {path.name}")
    return nav


class RinexNavReader:
    """RINEX navigation reader returning an :class:`EphemerisSet`."""

    def __init__(self, filename: Union[str, Path]):
        self.filename = Path(filename)
        if not self.filename.exists():
            raise FileNotFoundError(f"Navigation file not found: {filename}")

    def read(self) -> EphemerisSet:
        return parse_navigation_file(self.filename)
