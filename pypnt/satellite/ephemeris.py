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

"""Ephemeris selection"""

from typing import Sequence, Union

import numpy as np

from ..core.data_structures import EphemerisRecord


def reference_times(records: Sequence[EphemerisRecord]) -> np.ndarray:
    """Reference epochs of the records in GPS seconds, in input order"""
    return np.array([rec.gps_seconds for rec in records], dtype=float)


def select_ephemeris_indices(ref_times: Union[Sequence[float], np.ndarray],
                             times: Union[float, np.ndarray]) -> np.ndarray:
    """
    Index of the nearest ephemeris for each requested epoch

    Each epoch is matched independently to the record whose reference time
    is closest. Equidistant records resolve to the one that comes first in
    input order.

    Parameters:
    -----------
    ref_times : array_like
        Reference times of the candidate records (GPS seconds)
    times : float or np.ndarray
        Requested epochs (GPS seconds)

    Returns:
    --------
    np.ndarray
        Integer indices into ``ref_times``, one per epoch

    Raises:
    -------
    ValueError
        If there are no candidate records
    """
    ref = np.asarray(ref_times, dtype=float).ravel()
    if ref.size == 0:
        raise ValueError("No ephemeris records to select from")

    t = np.atleast_1d(np.asarray(times, dtype=float)).ravel()

    # Running minimum over records keeps memory O(N) in the number of epochs;
    # strict comparison leaves ties with the earlier record
    best = np.zeros(t.shape, dtype=np.intp)
    best_dist = np.abs(t - ref[0])
    for k in range(1, ref.size):
        dist = np.abs(t - ref[k])
        closer = dist < best_dist
        best[closer] = k
        best_dist[closer] = dist[closer]
    return best


def select_ephemeris(records: Sequence[EphemerisRecord], time: float) -> EphemerisRecord:
    """
    Select the ephemeris closest in time to ``time``

    Parameters:
    -----------
    records : Sequence[EphemerisRecord]
        Candidate records, normally already filtered to one satellite.
        No satellite filtering is done here.
    time : float
        Time of interest (GPS seconds)

    Returns:
    --------
    EphemerisRecord
        Record with minimum |time - reference time|
    """
    records = list(records)
    idx = select_ephemeris_indices(reference_times(records), time)
    return records[int(idx[0])]
