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

"""Kepler's equation solver"""

from typing import Union

import numpy as np
from numba import njit

from ..core.constants import KEPLER_MAX_ITER, KEPLER_TOL


@njit(cache=True)
def _kepler_fixed_point(M, e, max_iter, tol):
    """
    Fixed-point iteration E = M + e*sin(E) over a batch of epochs.

    Parameters
    ----------
    M : ndarray
        Mean anomalies (rad), 1-D float64
    e : ndarray
        Eccentricities, same shape as M
    max_iter : int
        Maximum number of iterations
    tol : float
        Threshold on the sum of |E_{k+1} - E_k| over the whole batch

    Returns
    -------
    E : ndarray
        Eccentric anomalies (rad); the last iterate if not converged
    """
    E = M.copy()
    for _ in range(max_iter):
        E_next = M + e * np.sin(E)
        if np.sum(np.abs(E_next - E)) < tol:
            return E_next
        E = E_next
    return E


def solve_kepler(mean_anomaly: Union[float, np.ndarray],
                 eccentricity: Union[float, np.ndarray],
                 max_iter: int = KEPLER_MAX_ITER,
                 tol: float = KEPLER_TOL) -> Union[float, np.ndarray]:
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly

    Starts from E = M and iterates E = M + e*sin(E) until the summed
    absolute change over all epochs drops below ``tol`` or ``max_iter``
    iterations have run. Non-convergence is not reported; the last
    estimate is returned.

    Parameters:
    -----------
    mean_anomaly : float or np.ndarray
        Mean anomaly (rad)
    eccentricity : float or np.ndarray
        Eccentricity, broadcastable to ``mean_anomaly``
    max_iter : int
        Maximum number of iterations
    tol : float
        Convergence threshold (rad)

    Returns:
    --------
    float or np.ndarray
        Eccentric anomaly (rad), scalar for scalar input
    """
    M = np.asarray(mean_anomaly, dtype=float)
    shape = M.shape
    e = np.broadcast_to(np.asarray(eccentricity, dtype=float), shape).astype(float).ravel()

    E = _kepler_fixed_point(M.ravel().copy(), e, int(max_iter), float(tol))

    if M.ndim == 0:
        return float(E[0])
    return E.reshape(shape)
