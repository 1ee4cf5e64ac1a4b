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

"""
Satellite computation module for GPS broadcast orbits.

Modules
-------
ephemeris : module
    Nearest-in-time ephemeris selection
kepler : module
    Fixed-point solver for Kepler's equation (numba kernel)
satellite_position : module
    Broadcast orbit model, single epoch and vectorized over a time grid
clock : module
    Satellite clock bias and drift with relativistic and TGD corrections
propagator : module
    Time grid propagation and the :class:`Satellite` state container

Usage Examples
--------------
    >>> from pypnt.satellite import Satellite
    >>> sat = Satellite(17, "GPS 17")
    >>> n = sat.propagate(start, timedelta(seconds=60), timedelta(seconds=1), records)
    >>> sat.positions.shape
    (60, 3)

Notes
-----
All times are GPS seconds since the GPS epoch. Positions are ECEF meters.
"""

from .clock import *
from .ephemeris import *
from .kepler import solve_kepler
from .propagator import *
from .satellite_position import *
