"""Tests for broadcast orbit propagation."""

import dataclasses
import math
from datetime import datetime, timedelta, timezone

import numpy as np
import pandas as pd
import pytest

from pypnt.core.constants import MU_GPS, OMGE, WEEK_SECONDS
from pypnt.core.data_structures import ECEF, EphemerisRecord, State
from pypnt.core.time import gps_seconds
from pypnt.io.rinex import parse_navigation_file
from pypnt.satellite.ephemeris import select_ephemeris
from pypnt.satellite.propagator import Satellite, propagate, time_grid
from pypnt.satellite.satellite_position import (compute_satellite_position,
                                                compute_satellite_positions)

START = datetime(2023, 6, 12, 2, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def circular_record(nav_builder):
    return EphemerisRecord(sat_id=1, gps_millis=WEEK_SECONDS * 1000.0, **nav_builder.circular_params)


@pytest.fixture
def g17_records(gps_nav_file):
    return parse_navigation_file(gps_nav_file).for_satellite(17)


def test_circular_orbit_at_reference_time(circular_record):
    pos = compute_satellite_position(circular_record, WEEK_SECONDS)
    assert pos.x == pytest.approx(26560000.0, rel=1e-12)
    assert pos.y == pytest.approx(0.0, abs=1e-6)
    assert pos.z == 0.0


def test_toe_equal_to_query_time(circular_record):
    """tk is zero; only the earth rotation at toe turns the node"""
    toe = 93600.0
    rec = dataclasses.replace(circular_record, toe=toe)
    pos = compute_satellite_position(rec, 2266 * WEEK_SECONDS + toe)

    omega = -OMGE * toe
    assert pos.norm() == pytest.approx(26560000.0, rel=1e-12)
    assert pos.z == 0.0
    assert math.atan2(pos.y, pos.x) == pytest.approx(math.atan2(math.sin(omega), math.cos(omega)))


def test_circular_orbit_end_to_end(nav_builder, write_nav):
    lines = nav_builder.record(1, nav_builder.circular_epoch, **nav_builder.circular_params)
    records = parse_navigation_file(write_nav(nav_builder.text(lines)))
    assert records[0].gps_seconds == WEEK_SECONDS

    sat = Satellite(1, "circular")
    start = datetime(*nav_builder.circular_epoch, tzinfo=timezone.utc)
    n = sat.propagate(start, timedelta(seconds=10), timedelta(seconds=1), records)

    assert n == 10
    first = sat.states[0]
    assert first.time == WEEK_SECONDS
    np.testing.assert_allclose(first.position.to_array(), [26560000.0, 0.0, 0.0], atol=1e-3)

    pos = sat.positions
    np.testing.assert_allclose(np.linalg.norm(pos, axis=1), 26560000.0, rtol=1e-12)
    np.testing.assert_array_equal(pos[:, 2], 0.0)

    # Inertial motion minus earth rotation
    tk = sat.times - WEEK_SECONDS
    rate = math.sqrt(MU_GPS / 26560000.0**3) - OMGE
    np.testing.assert_allclose(np.arctan2(pos[:, 1], pos[:, 0]), rate * tk, atol=1e-10)


def test_realistic_orbit_radius(g17_records):
    times = gps_seconds(START) + np.arange(0.0, 7200.0, 60.0)
    pos = compute_satellite_positions(g17_records, times)

    assert pos.shape == (len(times), 3)
    radius = np.linalg.norm(pos, axis=1)
    assert np.all(radius > 26.0e6)
    assert np.all(radius < 27.2e6)
    # Broadcast inclination 0.96 rad bounds |z|
    assert np.all(np.abs(pos[:, 2]) <= radius * math.sin(0.97))


def test_batch_matches_single_epoch(g17_records):
    times = gps_seconds(START) + np.arange(0.0, 3 * 3600.0, 600.0)
    batch = compute_satellite_positions(g17_records, times)

    for t, pos in zip(times, batch):
        eph = select_ephemeris(g17_records, t)
        single = compute_satellite_position(eph, t)
        np.testing.assert_allclose(pos, single.to_array(), atol=1e-2)


def test_selection_switches_records(g17_records):
    t0 = gps_seconds(START)
    assert select_ephemeris(g17_records, t0 + 3500.0) is g17_records[0]
    assert select_ephemeris(g17_records, t0 + 3700.0) is g17_records[1]


def test_empty_ephemeris_is_fatal():
    with pytest.raises(ValueError):
        compute_satellite_positions([], [0.0])
    with pytest.raises(ValueError):
        propagate(17, START, 10.0, 1.0, [])
    with pytest.raises(ValueError):
        Satellite(17, "G17").propagate(START, 10.0, 1.0, [])


def test_time_grid_sample_count():
    assert len(time_grid(START, timedelta(seconds=1), timedelta(milliseconds=1))) == 1000
    assert len(time_grid(START, 1.0, 0.3)) == 3
    assert len(time_grid(START, 0.5, 1.0)) == 0
    assert len(time_grid(START, -5.0, 1.0)) == 0

    grid = time_grid(START, 3.0, 1.0)
    np.testing.assert_allclose(grid - gps_seconds(START), [0.0, 1.0, 2.0])


def test_time_grid_rejects_non_positive_step():
    with pytest.raises(ValueError):
        time_grid(START, 10.0, 0.0)
    with pytest.raises(ValueError):
        time_grid(START, 10.0, timedelta(seconds=-1))


def test_time_grid_sub_microsecond_step():
    """Float steps are not rounded to whole microseconds"""
    grid = time_grid(START, 1e-6, 1e-7)
    assert len(grid) == int(np.floor(1e-6 / 1e-7))
    assert len(grid) >= 9

    grid = time_grid(START, 1.0, 2.5e-6)
    assert len(grid) == int(np.floor(1.0 / 2.5e-6))
    assert 399999 <= len(grid) <= 400000
    # Absolute GPS seconds carry ~2.4e-7 s of float resolution
    np.testing.assert_allclose(np.diff(grid[:100]), 2.5e-6, atol=5e-7)

    grid = time_grid(START, timedelta(seconds=1), 2.5e-6)
    assert len(grid) == int(np.floor(1.0 / 2.5e-6))


def test_propagate_returns_states(g17_records):
    states = propagate(17, START, 5.0, 1.0, g17_records)
    assert len(states) == 5
    assert all(isinstance(s, State) and isinstance(s.position, ECEF) for s in states)
    assert [s.time for s in states] == sorted(s.time for s in states)
    assert states[0].time == gps_seconds(START)


def test_propagation_replaces_history(g17_records):
    sat = Satellite(17, "G17")
    assert sat.propagate(START, 20.0, 1.0, g17_records) == 20
    assert sat.propagate(START + timedelta(hours=1), 5.0, 1.0, g17_records) == 5

    assert len(sat.states) == 5
    assert sat.states[0].time == gps_seconds(START + timedelta(hours=1))


def test_satellite_dataframe(g17_records):
    sat = Satellite(17, "G17")
    sat.propagate(START, 3.0, 1.0, g17_records)
    df = sat.to_dataframe()

    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ['time', 'x', 'y', 'z']
    assert len(df) == 3
    np.testing.assert_allclose(df[['x', 'y', 'z']].to_numpy(), sat.positions)


def test_empty_history_accessors():
    sat = Satellite(3, "G03")
    assert sat.times.shape == (0,)
    assert sat.positions.shape == (0, 3)
    assert len(sat.to_dataframe()) == 0
