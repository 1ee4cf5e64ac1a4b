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

"""Satellite clock computation and correction"""

from typing import Union

import numpy as np

from ..core.constants import F_REL, MU_GPS
from ..core.data_structures import EphemerisRecord
from ..core.time import time_of_week_diff
from .kepler import solve_kepler


def compute_satellite_clock(eph: EphemerisRecord,
                            time: Union[float, np.ndarray]) -> tuple:
    """
    Compute satellite clock bias and drift

    Parameters:
    -----------
    eph : EphemerisRecord
        Satellite ephemeris
    time : float or np.ndarray
        Time of interest (GPS seconds)

    Returns:
    --------
    dts : float or np.ndarray
        Satellite clock bias (s), relativistic correction included
    ddts : float or np.ndarray
        Satellite clock drift (s/s)
    """
    t = np.asarray(time, dtype=float)

    # Time from clock reference epoch
    dt = t - eph.gps_seconds

    # Clock bias (polynomial model)
    dts = eph.sv_clock_bias + eph.sv_clock_drift * dt + eph.sv_clock_drift_rate * dt**2

    # Clock drift
    ddts = eph.sv_clock_drift + 2.0 * eph.sv_clock_drift_rate * dt

    # Relativistic correction, only when orbital parameters are available
    if eph.sqrt_a > 0:
        a = eph.semi_major_axis
        n = np.sqrt(MU_GPS / a**3) + eph.delta_n
        M = eph.m0 + n * time_of_week_diff(t, eph.toe)
        E = solve_kepler(M, eph.eccentricity)

        dts = dts + F_REL * eph.eccentricity * eph.sqrt_a * np.sin(E)

        dE_dt = n / (1.0 - eph.eccentricity * np.cos(E))
        ddts = ddts + F_REL * eph.eccentricity * eph.sqrt_a * np.cos(E) * dE_dt

    if t.ndim == 0:
        return float(dts), float(ddts)
    return dts, ddts


def apply_tgd(eph: EphemerisRecord, dts: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Clock bias for single-frequency L1 users: the group delay is subtracted."""
    return dts - eph.tgd
