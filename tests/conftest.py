"""Shared fixtures: synthetic RINEX 3 GPS navigation files."""

import logging
import math
from types import SimpleNamespace

import matplotlib
matplotlib.use("Agg")

import pytest

from pypnt.io.rinex import DATA_LINE_FIELDS

HEADER = [
    "     3.04           N: GNSS NAV DATA    G: GPS              RINEX VERSION / TYPE",
    "pypnt tests         pypnt               20230612 000000 UTC PGM / RUN BY / DATE",
    "GPSA   1.1176D-08  0.0000D+00 -5.9605D-08  0.0000D+00       IONOSPHERIC CORR",
    "    18                                                      LEAP SECONDS",
    "                                                            END OF HEADER",
]

# Broadcast parameters of a plausible GPS satellite, epoch 2023-06-12 02:00
GPS_PARAMS = {
    'iode': 45.0, 'crs': -10.5, 'delta_n': 4.5e-9, 'm0': 1.2,
    'cuc': -5.6e-7, 'eccentricity': 0.0123, 'cus': 8.9e-6, 'sqrt_a': 5153.65,
    'toe': 93600.0, 'cic': 1.1e-7, 'omega0': -2.1, 'cis': -4.2e-8,
    'i0': 0.96, 'crc': 220.5, 'omega': 1.3, 'omega_dot': -8.1e-9,
    'idot': 2.1e-10, 'codes_on_l2_channel': 1.0, 'gps_week': 2266.0, 'l2_p_data_flag': 0.0,
    'sv_accuracy': 2.0, 'sv_health': 0.0, 'tgd': -1.1e-8, 'iodc': 45.0,
    'transmission_time': 86400.0, 'fit_interval': 4.0,
}
GPS_EPOCH = (2023, 6, 12, 2, 0, 0)
GPS_CLOCK = (-1.234e-4, -2.5e-12, 0.0)

# Circular equatorial orbit; GPS time 604800 s is 1980-01-12 23:59:42 UTC
CIRCULAR_PARAMS = {
    'sqrt_a': math.sqrt(26560000.0), 'eccentricity': 0.0, 'i0': 0.0,
    'omega0': 0.0, 'omega': 0.0, 'm0': 0.0, 'toe': 0.0,
}
CIRCULAR_EPOCH = (1980, 1, 12, 23, 59, 42)


def format_rinex_float(value):
    """19-column D-exponent field"""
    return f"{value:19.12E}".replace("E", "D")


def build_nav_record(prn=17, epoch=GPS_EPOCH, clock=(0.0, 0.0, 0.0), system='G',
                     n_lines=7, **params):
    """Lines of one GPS navigation record, unspecified parameters are zero"""
    first = (f"{system}{prn:02d} {epoch[0]:04d} {epoch[1]:02d} {epoch[2]:02d} "
             f"{epoch[3]:02d} {epoch[4]:02d} {epoch[5]:02d}"
             + "".join(format_rinex_float(c) for c in clock))
    lines = [first]
    for names in DATA_LINE_FIELDS[:n_lines]:
        lines.append("    " + "".join(format_rinex_float(params.get(n, 0.0)) for n in names))
    return lines


def build_nav_text(*records):
    lines = list(HEADER)
    for rec in records:
        lines.extend(rec)
    return "\n".join(lines) + "\n"


@pytest.fixture
def nav_builder():
    return SimpleNamespace(
        record=build_nav_record,
        text=build_nav_text,
        fmt=format_rinex_float,
        gps_params=dict(GPS_PARAMS),
        gps_epoch=GPS_EPOCH,
        gps_clock=GPS_CLOCK,
        circular_params=dict(CIRCULAR_PARAMS),
        circular_epoch=CIRCULAR_EPOCH,
    )


@pytest.fixture
def write_nav(tmp_path):
    def _write(text, name="test_nav.rnx"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def gps_nav_file(nav_builder, write_nav):
    """Two G17 records two hours apart and one G05 record"""
    params = nav_builder.gps_params
    later = dict(params, toe=params['toe'] + 7200.0, m0=params['m0'] + 0.5)
    text = nav_builder.text(
        nav_builder.record(17, GPS_EPOCH, GPS_CLOCK, **params),
        nav_builder.record(5, GPS_EPOCH, GPS_CLOCK, **dict(params, omega0=0.4)),
        nav_builder.record(17, (2023, 6, 12, 4, 0, 0), GPS_CLOCK, **later),
    )
    return write_nav(text)


@pytest.fixture(autouse=True)
def reset_pypnt_logger():
    yield
    logger = logging.getLogger("pypnt")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
