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

"""GNSS Constants and System Parameters"""

import numpy as np

# Physical Constants
CLIGHT = 299792458.0  # speed of light (m/s)

# Time System Parameters
GPST0 = [1980, 1, 6, 0, 0, 0]  # GPS time reference epoch
GPS_UTC_OFFSET = 18.0          # GPS-UTC leap seconds (fixed, valid through 2024)
WEEK_SECONDS = 604800.0        # seconds in a GPS week
HALF_WEEK = 302400.0           # half a GPS week (s)

# Earth Parameters (WGS84)
OMGE = 7.2921151467E-5         # earth angular velocity (rad/s)
MU_GPS = 3.9860050E14          # GPS gravitational constant (m^3/s^2)

# Relativistic clock correction constant F = -2*sqrt(mu)/c^2 (s/m^0.5)
F_REL = -2.0 * np.sqrt(MU_GPS) / CLIGHT**2

# Kepler solver limits
KEPLER_MAX_ITER = 30           # maximum fixed-point iterations
KEPLER_TOL = 1e-8              # convergence threshold on summed |dE| (rad)

# RINEX navigation layout
RINEX_HEADER_END = "END OF HEADER"
RINEX_NAV_MIN_LINE = 79        # minimum width of a record's first line
RINEX_NAV_DATA_LINES = 7       # continuation lines per GPS record
RINEX_FIELD_WIDTH = 19         # width of one D-exponent float field
RINEX_DATA_SKIP = 4            # leading columns skipped on continuation lines
