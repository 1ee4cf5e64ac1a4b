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

"""Core data structures for ephemeris and orbit processing"""

from dataclasses import asdict, dataclass, field, fields
from typing import Iterator, Optional

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class ECEF:
    """Earth-Centered Earth-Fixed position.

    Attributes
    ----------
    x, y, z : float
        Cartesian coordinates in meters
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_array(self) -> np.ndarray:
        """Position as a float array of shape (3,)"""
        return np.array([self.x, self.y, self.z], dtype=float)

    def norm(self) -> float:
        """Geocentric distance (m)"""
        return float(np.linalg.norm(self.to_array()))

    def to_lla(self) -> 'LLA':
        """Geodetic conversion is not provided by this package."""
        raise NotImplementedError("ECEF to geodetic conversion is not implemented")


@dataclass(frozen=True)
class LLA:
    """Geodetic position: latitude, longitude (rad) and altitude (m)."""
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0

    def to_ecef(self) -> ECEF:
        """Geodetic conversion is not provided by this package."""
        raise NotImplementedError("Geodetic to ECEF conversion is not implemented")


@dataclass(frozen=True)
class State:
    """Satellite position at one epoch.

    Attributes
    ----------
    time : float
        GPS time (s)
    position : ECEF
        Satellite position (m)
    """
    time: float
    position: ECEF


@dataclass(frozen=True)
class EphemerisRecord:
    """One GPS broadcast navigation message.

    Field names follow the RINEX navigation record layout. Angles are in
    radians (semicircles already converted by the RINEX producer), rates in
    rad/s, distances in meters, times in seconds.

    Attributes
    ----------
    sat_id : int
        Satellite PRN
    system : str
        Constellation letter from the record header ('G' for GPS)
    epoch : tuple
        Time of clock as (year, month, day, hour, minute, second)
    gps_millis : float
        Time of clock in GPS milliseconds since the GPS epoch
    sv_clock_bias, sv_clock_drift, sv_clock_drift_rate : float
        Clock polynomial af0 (s), af1 (s/s), af2 (s/s^2)
    sqrt_a : float
        Square root of the semi-major axis (m^0.5)
    toe : float
        Time of ephemeris (s of GPS week)

    Notes
    -----
    Records are immutable. The orbital and clock parameters are only
    meaningful together with ``toe`` and ``gps_millis``.
    """
    sat_id: int = 0
    system: str = 'G'
    epoch: tuple = (0, 0, 0, 0, 0, 0)
    gps_millis: float = 0.0
    sv_clock_bias: float = 0.0
    sv_clock_drift: float = 0.0
    sv_clock_drift_rate: float = 0.0
    iode: float = 0.0
    crs: float = 0.0
    delta_n: float = 0.0
    m0: float = 0.0
    cuc: float = 0.0
    eccentricity: float = 0.0
    cus: float = 0.0
    sqrt_a: float = 0.0
    toe: float = 0.0
    cic: float = 0.0
    omega0: float = 0.0
    cis: float = 0.0
    i0: float = 0.0
    crc: float = 0.0
    omega: float = 0.0
    omega_dot: float = 0.0
    idot: float = 0.0
    codes_on_l2_channel: float = 0.0
    gps_week: float = 0.0
    l2_p_data_flag: float = 0.0
    sv_accuracy: float = 0.0
    sv_health: float = 0.0
    tgd: float = 0.0
    iodc: float = 0.0
    transmission_time: float = 0.0
    fit_interval: float = 0.0

    @property
    def gps_seconds(self) -> float:
        """Reference (clock) epoch in GPS seconds"""
        return self.gps_millis / 1000.0

    @property
    def semi_major_axis(self) -> float:
        """Semi-major axis (m)"""
        return self.sqrt_a ** 2

    @property
    def is_healthy(self) -> bool:
        return self.sv_health == 0

    @property
    def prn(self) -> str:
        """Satellite name as in RINEX 3, e.g. 'G17'"""
        return f"{self.system}{self.sat_id:02d}"


@dataclass
class EphemerisSet:
    """Ordered collection of ephemeris records in file order.

    Records are neither sorted by time nor grouped by satellite; use
    :meth:`for_satellite` before propagating.
    """
    records: list[EphemerisRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[EphemerisRecord]:
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]

    def satellites(self) -> list[int]:
        """Sorted unique satellite ids present in the set"""
        return sorted({rec.sat_id for rec in self.records})

    def for_satellite(self, sat_id: int, system: Optional[str] = None) -> 'EphemerisSet':
        """
        Records of one satellite, in file order

        Parameters:
        -----------
        sat_id : int
            Satellite PRN
        system : str, optional
            Constellation letter; when None any system matches

        Returns:
        --------
        EphemerisSet
            New set holding only the matching records
        """
        return EphemerisSet([
            rec for rec in self.records
            if rec.sat_id == sat_id and (system is None or rec.system == system)
        ])

    def to_dataframe(self) -> pd.DataFrame:
        """One row per record, one column per record field"""
        columns = [f.name for f in fields(EphemerisRecord)]
        return pd.DataFrame([asdict(rec) for rec in self.records], columns=columns)
