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

"""Core Module.

Fundamental components shared by the parser and the orbit propagator:

- **Constants**: physical constants, GPS time parameters, RINEX layout and
  Kepler solver limits
- **Data Structures**: ECEF/LLA value types, propagated states, broadcast
  ephemeris records and record sets
- **Time**: civil-to-GPS time conversion with a fixed leap-second offset,
  week/TOW helpers and the half-week rollover used by the orbit model

Example Usage:
    >>> from datetime import datetime, timezone
    >>> from pypnt.core import gps_time
    >>> gps_time(datetime(1980, 1, 6, tzinfo=timezone.utc))
    18000.0
"""

from .constants import *
from .data_structures import *
from .time import *
