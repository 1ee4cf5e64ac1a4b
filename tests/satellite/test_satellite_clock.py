"""Tests for the satellite clock model."""

import math

import numpy as np
import pytest

from pypnt.core.constants import F_REL, MU_GPS
from pypnt.core.data_structures import EphemerisRecord
from pypnt.satellite.clock import apply_tgd, compute_satellite_clock
from pypnt.satellite.kepler import solve_kepler


@pytest.fixture
def clock_record():
    return EphemerisRecord(
        sat_id=17, gps_millis=1.0e6, toe=1000.0,
        sv_clock_bias=1.0e-4, sv_clock_drift=2.0e-11, sv_clock_drift_rate=1.0e-18,
        sqrt_a=5153.65, eccentricity=0.0, tgd=-1.1e-8,
    )


def test_polynomial_model_for_circular_orbit(clock_record):
    dts, ddts = compute_satellite_clock(clock_record, 1300.0)
    assert dts == pytest.approx(1.0e-4 + 2.0e-11 * 300.0 + 1.0e-18 * 300.0**2, rel=1e-12)
    assert ddts == pytest.approx(2.0e-11 + 2.0 * 1.0e-18 * 300.0, rel=1e-12)


def test_relativistic_correction():
    e = 0.0123
    rec = EphemerisRecord(gps_millis=0.0, toe=0.0, sqrt_a=5153.65, eccentricity=e, m0=1.2,
                          sv_clock_bias=-1.234e-4)
    t = 600.0
    dts, _ = compute_satellite_clock(rec, t)

    n = math.sqrt(MU_GPS / rec.semi_major_axis**3)
    E = solve_kepler(1.2 + n * t, e)
    expected = -1.234e-4 + F_REL * e * 5153.65 * math.sin(E)
    assert dts == pytest.approx(expected, rel=1e-9)
    # Relativistic term of a GPS orbit is tens of nanoseconds at most
    assert abs(dts - (-1.234e-4)) < 5e-8


def test_array_times(clock_record):
    times = np.array([1000.0, 1100.0, 1200.0])
    dts, ddts = compute_satellite_clock(clock_record, times)
    assert dts.shape == (3,)
    assert ddts.shape == (3,)
    assert dts[0] == pytest.approx(1.0e-4)


def test_missing_orbit_skips_relativistic_term():
    rec = EphemerisRecord(gps_millis=0.0, sv_clock_bias=5e-5, eccentricity=0.5)
    dts, ddts = compute_satellite_clock(rec, 10.0)
    assert dts == pytest.approx(5e-5)
    assert ddts == 0.0


def test_tgd_applied(clock_record):
    assert apply_tgd(clock_record, 1.0e-4) == pytest.approx(1.0e-4 + 1.1e-8)
