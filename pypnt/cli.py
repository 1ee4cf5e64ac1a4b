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

"""Command line propagation of one satellite from a RINEX navigation file"""

import argparse
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from .core.time import gps_seconds_to_datetime
from .io.rinex import parse_navigation_file
from .logger import setup_logger
from .satellite.propagator import Satellite

logger = logging.getLogger("pypnt.cli")


def _parse_start(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO 8601 time: {value}") from None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pypnt',
        description='Propagate a GPS satellite position from RINEX broadcast ephemeris')
    parser.add_argument('nav', type=str, help='RINEX 3 navigation file')
    parser.add_argument('--sat', type=int, default=17, help='Satellite PRN (default: 17)')
    parser.add_argument('--name', type=str, default=None, help='Satellite display name')
    parser.add_argument('--start', type=_parse_start, default=None,
                        help='Start time, ISO 8601 UTC (default: now)')
    parser.add_argument('--duration', type=float, default=1.0, help='Span in seconds')
    parser.add_argument('--step', type=float, default=0.001, help='Step in seconds')
    parser.add_argument('--csv', type=str, default=None, help='Write states to a CSV file')
    parser.add_argument('--plot', type=str, default=None, help='Write a plot image')
    parser.add_argument('--log-level', type=str, default='INFO', help='Log level')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level, log_file=args.log_file)

    start = args.start or datetime.now(timezone.utc)
    satellite = Satellite(args.sat, args.name or f"G{args.sat:02d}")

    try:
        nav = parse_navigation_file(args.nav)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read navigation file: {e}")
        return 1

    ephemeris = nav.for_satellite(args.sat)
    logger.info(f"Total records: {len(nav)}")
    logger.info(f"Filtered records for {args.sat}: {len(ephemeris)}")

    if len(ephemeris) == 0:
        logger.error(f"No ephemeris for satellite {args.sat}")
        return 1

    try:
        begin = time.perf_counter()
        n_states = satellite.propagate(start, args.duration, args.step, ephemeris)
        elapsed_ms = (time.perf_counter() - begin) * 1000.0
    except ValueError as e:
        logger.error(f"Propagation failed: {e}")
        return 1

    if n_states:
        first = satellite.states[0]
        logger.info(f"First state at {gps_seconds_to_datetime(first.time):%Y-%m-%d %H:%M:%S.%f} UTC: "
                    f"[{first.position.x:.3f}, {first.position.y:.3f}, {first.position.z:.3f}] m")
    logger.info(f"Propagated {n_states} states over {args.duration:g} s in {elapsed_ms:.3f} ms")

    if args.csv:
        satellite.to_dataframe().to_csv(args.csv, index=False, float_format='%.6f')
        logger.info(f"States saved to {args.csv}")

    if args.plot and n_states:
        from .plot import save_state_plot
        save_state_plot(satellite, args.plot)

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
