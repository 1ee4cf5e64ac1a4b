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

"""Satellite position computation from GPS broadcast ephemeris

Implements the broadcast orbit model of IS-GPS-200 (Table 20-IV): mean
motion, Kepler solution, second-harmonic corrections and rotation into the
Earth-fixed frame. The batch form gathers one parameter row per epoch and
evaluates every step as a numpy array expression.
"""

from typing import Sequence, Union

import numpy as np

from ..core.constants import MU_GPS, OMGE
from ..core.data_structures import ECEF, EphemerisRecord
from ..core.time import time_of_week_diff
from .ephemeris import reference_times, select_ephemeris_indices
from .kepler import solve_kepler

# Orbit parameters gathered per epoch, in column order
ORBIT_PARAMS = (
    'sqrt_a', 'eccentricity', 'i0', 'omega0', 'omega', 'm0', 'toe',
    'delta_n', 'omega_dot', 'idot', 'cus', 'cuc', 'crs', 'crc', 'cis', 'cic',
)


def _param_table(records: Sequence[EphemerisRecord]) -> np.ndarray:
    return np.array([[getattr(rec, name) for name in ORBIT_PARAMS] for rec in records],
                    dtype=float).reshape(-1, len(ORBIT_PARAMS))


def _orbit_to_ecef(t: np.ndarray, ephem: np.ndarray) -> np.ndarray:
    """
    Broadcast orbit model over a batch of epochs.

    Parameters
    ----------
    t : ndarray, shape (N,)
        GPS time of each epoch (s)
    ephem : ndarray, shape (N, 16)
        Orbit parameters of the ephemeris used at each epoch, columns in
        ``ORBIT_PARAMS`` order

    Returns
    -------
    ndarray, shape (N, 3)
        ECEF positions (m)
    """
    (sqrt_a, e, i0, omega0, omega, m0, toe, delta_n,
     omega_dot, idot, cus, cuc, crs, crc, cis, cic) = ephem.T

    tk = time_of_week_diff(t, toe)

    with np.errstate(divide='ignore', invalid='ignore'):
        # Mean motion and mean anomaly
        a = sqrt_a ** 2
        n0 = np.sqrt(MU_GPS / a ** 3)
        n = n0 + delta_n
        M = m0 + n * tk

        E = solve_kepler(M, e)
        sin_E = np.sin(E)
        cos_E = np.cos(E)

        # True anomaly and argument of latitude
        nu = np.arctan2(np.sqrt(1.0 - e * e) * sin_E, cos_E - e)
        phi = nu + omega

        # Second harmonic perturbations
        sin_2phi = np.sin(2.0 * phi)
        cos_2phi = np.cos(2.0 * phi)
        du = cus * sin_2phi + cuc * cos_2phi
        dr = crs * sin_2phi + crc * cos_2phi
        di = cis * sin_2phi + cic * cos_2phi

        u = phi + du
        r = a * (1.0 - e * cos_E) + dr
        i = i0 + di + idot * tk

        # Position in orbital plane
        x = r * np.cos(u)
        y = r * np.sin(u)

        # Longitude of ascending node, corrected for earth rotation
        Omega = omega0 + (omega_dot - OMGE) * tk - OMGE * toe
        cos_O = np.cos(Omega)
        sin_O = np.sin(Omega)
        cos_i = np.cos(i)

        return np.column_stack((
            x * cos_O - y * cos_i * sin_O,
            x * sin_O + y * cos_i * cos_O,
            y * np.sin(i),
        ))


def compute_satellite_position(eph: EphemerisRecord, time: float) -> ECEF:
    """
    Compute satellite ECEF position from one ephemeris at one epoch

    Parameters:
    -----------
    eph : EphemerisRecord
        Broadcast ephemeris
    time : float
        GPS time (s)

    Returns:
    --------
    ECEF
        Satellite position (m)
    """
    t = np.array([float(time)])
    pos = _orbit_to_ecef(t, _param_table([eph]))[0]
    return ECEF(float(pos[0]), float(pos[1]), float(pos[2]))


def compute_satellite_positions(records: Sequence[EphemerisRecord],
                                times: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """
    Compute satellite ECEF positions over a grid of epochs

    For every epoch the record with the nearest reference time is selected
    (see :func:`select_ephemeris_indices`) and the broadcast orbit model is
    evaluated. Records are not filtered by satellite.

    Parameters:
    -----------
    records : Sequence[EphemerisRecord]
        Ephemerides of a single satellite
    times : array_like
        GPS times (s)

    Returns:
    --------
    np.ndarray, shape (N, 3)
        ECEF positions (m), one row per epoch in input order

    Raises:
    -------
    ValueError
        If ``records`` is empty
    """
    records = list(records)
    t = np.atleast_1d(np.asarray(times, dtype=float)).ravel()

    idx = select_ephemeris_indices(reference_times(records), t)
    if t.size == 0:
        return np.zeros((0, 3))

    ephem = _param_table(records)[idx]
    return _orbit_to_ecef(t, ephem)
