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

"""I/O utilities for pypnt."""

from .rinex import (DATA_LINE_FIELDS, RinexNavReader, parse_data_line,
                    parse_epoch, parse_float, parse_nav_lines,
                    parse_navigation_file)

__all__ = [
    'RinexNavReader', 'parse_navigation_file', 'parse_nav_lines',
    'parse_float', 'parse_epoch', 'parse_data_line', 'DATA_LINE_FIELDS',
]
