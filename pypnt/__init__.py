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
PyPNT - GPS Broadcast Ephemeris and Orbit Propagation

Reads GPS navigation messages from RINEX 3 navigation files and propagates
satellite positions in the Earth-Centered Earth-Fixed frame with the
broadcast orbit model.
"""

__version__ = "1.0.0"
__author__ = "PyPNT Development Team"
__title__ = "pypnt"
__description__ = "GPS broadcast ephemeris parsing and satellite orbit propagation"

from .core import *
from .io import *
from .satellite import *
