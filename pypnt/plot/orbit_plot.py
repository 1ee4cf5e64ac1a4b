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

"""Time series plots of propagated ECEF positions"""

import logging
from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import numpy as np

from ..satellite.propagator import Satellite

logger = logging.getLogger(__name__)


def plot_states(satellite: Satellite, axes: Optional[np.ndarray] = None):
    """
    Plot ECEF components and geocentric radius against time

    Parameters:
    -----------
    satellite : Satellite
        Satellite with a propagation history
    axes : np.ndarray of Axes, optional
        Four axes to draw into; a new 2x2 figure is created if None

    Returns:
    --------
    matplotlib.figure.Figure
        Figure holding the plots
    """
    if axes is None:
        fig, axes = plt.subplots(2, 2, figsize=(12, 8), sharex=True)
    else:
        fig = np.ravel(axes)[0].figure
    axes = np.ravel(axes)

    times = satellite.times
    pos = satellite.positions
    # Elapsed time keeps the axis readable for GPS seconds ~1e9
    elapsed = times - times[0] if times.size else times

    panels = [
        (pos[:, 0] / 1e3, 'X (km)'),
        (pos[:, 1] / 1e3, 'Y (km)'),
        (pos[:, 2] / 1e3, 'Z (km)'),
        (np.linalg.norm(pos, axis=1) / 1e3, 'Radius (km)'),
    ]
    for ax, (values, label) in zip(axes, panels):
        ax.plot(elapsed, values, '-')
        ax.set_ylabel(label)
        ax.grid(True)
    for ax in axes[2:]:
        ax.set_xlabel('Time since start (s)')

    fig.suptitle(f"{satellite.name} (PRN {satellite.id}) ECEF position")
    fig.tight_layout()
    return fig


def save_state_plot(satellite: Satellite, filename: Union[str, Path], dpi: int = 100) -> Path:
    """Plot a propagation history and write it to an image file"""
    fig = plot_states(satellite)
    path = Path(filename)
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    logger.info(f"Plot saved to {path}")
    return path
