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

"""Satellite orbit propagation over a time grid"""

import logging
from datetime import datetime, timedelta
from typing import Sequence, Union

import numpy as np
import pandas as pd

from ..core.data_structures import ECEF, EphemerisRecord, State
from ..core.time import gps_seconds
from .satellite_position import compute_satellite_positions

__all__ = ['Satellite', 'TimeSpan', 'propagate', 'time_grid']

logger = logging.getLogger(__name__)

TimeSpan = Union[timedelta, float, int]


def _to_seconds(span: TimeSpan) -> float:
    if isinstance(span, timedelta):
        return span.total_seconds()
    return float(span)


def time_grid(start_time: datetime, duration: TimeSpan, step: TimeSpan) -> np.ndarray:
    """
    GPS times of a regular sampling grid

    Parameters:
    -----------
    start_time : datetime
        First epoch (UTC)
    duration : timedelta or float
        Length of the grid (s)
    step : timedelta or float
        Spacing between epochs (s), must be positive

    Returns:
    --------
    np.ndarray
        floor(duration / step) GPS times (s), starting at ``start_time``
    """
    step_s = _to_seconds(step)
    if not step_s > 0:
        raise ValueError(f"Step must be positive, got {step}")

    # Exact integer division when both spans are timedeltas
    if isinstance(duration, timedelta) and isinstance(step, timedelta):
        n_epochs = duration // step
    else:
        n_epochs = int(np.floor(_to_seconds(duration) / step_s))
    n_epochs = max(n_epochs, 0)
    return gps_seconds(start_time) + np.arange(n_epochs) * step_s


def propagate(satellite_id: int,
              start_time: datetime,
              duration: TimeSpan,
              step: TimeSpan,
              ephemeris_records: Sequence[EphemerisRecord]) -> list[State]:
    """
    Propagate a satellite's ECEF position over a time grid

    Parameters:
    -----------
    satellite_id : int
        Satellite PRN, used for logging only
    start_time : datetime
        First epoch (UTC)
    duration : timedelta or float
        Propagation span (s)
    step : timedelta or float
        Step size (s), must be positive
    ephemeris_records : Sequence[EphemerisRecord]
        Ephemerides to select from; they are used as given, without
        filtering by ``satellite_id``

    Returns:
    --------
    list[State]
        One state per epoch, in time order

    Raises:
    -------
    ValueError
        If ``step`` is not positive or no ephemeris is given
    """
    records = list(ephemeris_records)
    if not records:
        raise ValueError(f"No ephemeris records for satellite {satellite_id}")

    times = time_grid(start_time, duration, step)
    positions = compute_satellite_positions(records, times)

    logger.debug(f"Satellite {satellite_id}: propagated {len(times)} epochs "
                 f"from {len(records)} ephemerides")

    return [State(float(t), ECEF(*map(float, pos))) for t, pos in zip(times, positions)]


class Satellite:
    """Space vehicle with its propagation history.

    Attributes
    ----------
    id : int
        Satellite PRN
    name : str
        Display name
    states : list[State]
        Result of the last propagation
    """

    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name
        self.states: list[State] = []

    def propagate(self, start: datetime, duration: TimeSpan, step: TimeSpan,
                  ephemeris_records: Sequence[EphemerisRecord]) -> int:
        """
        Propagate and replace the state history

        Returns:
        --------
        int
            Number of states produced
        """
        self.states = propagate(self.id, start, duration, step, ephemeris_records)
        return len(self.states)

    @property
    def times(self) -> np.ndarray:
        """GPS times of the state history (s)"""
        return np.array([s.time for s in self.states], dtype=float)

    @property
    def positions(self) -> np.ndarray:
        """ECEF positions of the state history, shape (N, 3)"""
        return np.array([s.position.to_array() for s in self.states], dtype=float).reshape(-1, 3)

    def to_dataframe(self) -> pd.DataFrame:
        """State history with columns time, x, y, z"""
        pos = self.positions
        return pd.DataFrame({
            'time': self.times,
            'x': pos[:, 0],
            'y': pos[:, 1],
            'z': pos[:, 2],
        })

    def __repr__(self):
        return f"Satellite(id={self.id}, name='{self.name}', states={len(self.states)})"
