#!/usr/bin/env python3
"""
Satellite Orbit Propagation Example using PyPNT

This example demonstrates:
1. Reading a RINEX navigation file
2. Selecting the ephemerides of one satellite
3. Propagating its ECEF position over a time grid
4. Checking the satellite clock and plotting the history
"""

import argparse
import logging
from datetime import datetime, timedelta, timezone

import numpy as np

from pypnt.io.rinex import RinexNavReader
from pypnt.plot import save_state_plot
from pypnt.satellite import Satellite, compute_satellite_clock, select_ephemeris


def setup_logging():
    """Setup logging configuration"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)


def propagate_example(nav_file, sat_id, start, hours, step, plot_file=None):
    logger = setup_logging()

    logger.info(f"Reading navigation file: {nav_file}")
    nav = RinexNavReader(nav_file).read()
    records = nav.for_satellite(sat_id)
    logger.info(f"Satellites in file: {nav.satellites()}")
    logger.info(f"G{sat_id:02d}: {len(records)} of {len(nav)} ephemerides")

    if len(records) == 0:
        logger.error(f"No ephemeris for G{sat_id:02d}")
        return None

    sat = Satellite(sat_id, f"GPS {sat_id}")
    n = sat.propagate(start, timedelta(hours=hours), timedelta(seconds=step), records)

    radius = np.linalg.norm(sat.positions, axis=1)
    logger.info(f"Propagated {n} states, radius {radius.min() / 1e3:.1f} - {radius.max() / 1e3:.1f} km")

    t0 = sat.states[0].time
    eph = select_ephemeris(records, t0)
    dts, ddts = compute_satellite_clock(eph, t0)
    logger.info(f"Clock at start: bias {dts * 1e6:.3f} us, drift {ddts:.3e} s/s "
                f"(IODE {eph.iode:.0f}, healthy={eph.is_healthy})")

    if plot_file:
        save_state_plot(sat, plot_file)

    return sat


def main():
    parser = argparse.ArgumentParser(description='Propagate a GPS satellite from RINEX navigation data')
    parser.add_argument('nav', type=str, help='RINEX 3 navigation file')
    parser.add_argument('--sat', type=int, default=17, help='Satellite PRN')
    parser.add_argument('--start', type=str, required=True, help='Start time, ISO 8601 UTC')
    parser.add_argument('--hours', type=float, default=2.0, help='Span in hours')
    parser.add_argument('--step', type=float, default=30.0, help='Step in seconds')
    parser.add_argument('--plot', type=str, help='Output plot file')
    args = parser.parse_args()

    start = datetime.fromisoformat(args.start).replace(tzinfo=timezone.utc)
    propagate_example(args.nav, args.sat, start, args.hours, args.step, args.plot)


if __name__ == '__main__':
    main()
