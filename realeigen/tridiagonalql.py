# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from math import hypot
import logging
import numpy as np

from .utils import EPS, NonConvergenceError

logger = logging.getLogger(__name__)

def diagonalize_tridiagonal(v: np.ndarray, d: np.ndarray, e: np.ndarray, max_iterations: int) -> None:
    """
    Symmetric tridiagonal QL algorithm with implicit shifts (tql2 of Bowdler, Martin, Reinsch
    and Wilkinson, Handbook for Auto. Comp., Vol. II, and EISPACK).

    Expects the output of :func:`tridiagonalize`. On exit d holds the eigenvalues in
    descending order, e is zero and the columns of v are the corresponding eigenvectors.
    """
    n = d.shape[0]
    e[:n-1] = e[1:].copy()
    e[n-1] = 0.0

    f = 0.0
    tst1 = 0.0
    for l in range(n):

        # find small subdiagonal element
        tst1 = max(tst1, abs(d[l]) + abs(e[l]))
        m = l
        while m < n:
            if abs(e[m]) <= EPS * tst1:
                break
            m += 1

        # if m == l, d[l] is already an eigenvalue
        iteration = 0
        while m > l:
            if iteration == max_iterations:
                raise NonConvergenceError(l, iteration)
            iteration += 1

            # implicit shift
            g = float(d[l])
            p = (d[l+1] - g) / (2.0 * e[l])
            r = hypot(p, 1.0)
            if p < 0:
                r = -r
            d[l] = e[l] / (p + r)
            d[l+1] = e[l] * (p + r)
            dl1 = float(d[l+1])
            h = g - d[l]
            d[l+2:] -= h
            f = f + h

            # implicit QL transformation
            p = float(d[m])
            c = c2 = c3 = 1.0
            el1 = float(e[l+1])
            s = s2 = 0.0
            for i in range(m-1, l-1, -1):
                c3 = c2
                c2 = c
                s2 = s
                g = c * e[i]
                h = c * p
                r = hypot(p, e[i])
                e[i+1] = s * r
                s = e[i] / r
                c = p / r
                p = c * d[i] - s * g
                d[i+1] = h + s * (c * g + s * d[i])

                col = v[:,i+1].copy()
                v[:,i+1] = s * v[:,i] + c * col
                v[:,i] = c * v[:,i] - s * col
            p = -s * s2 * c3 * el1 * e[l] / dl1
            e[l] = s * p
            d[l] = c * p

            if abs(e[l]) <= EPS * tst1:
                break
        if iteration > 0:
            logger.debug("Eigenvalue %d converged after %d QL iterations", l, iteration)
        d[l] = d[l] + f
        e[l] = 0.0

    # selection sort, largest eigenvalue first
    for i in range(n-1):
        k = i
        p = d[i]
        for j in range(i+1, n):
            if d[j] > p:
                k = j
                p = d[j]
        if k != i:
            d[k] = d[i]
            d[i] = p
            v[:,[i, k]] = v[:,[k, i]]
