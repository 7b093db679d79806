# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from math import sqrt
import numpy as np

def tridiagonalize(v: np.ndarray, d: np.ndarray, e: np.ndarray) -> None:
    """
    Householder reduction of a symmetric matrix to tridiagonal form (tred2 of Bowdler, Martin,
    Reinsch and Wilkinson, Handbook for Auto. Comp., Vol. II, and EISPACK).

    On entry v holds the symmetric matrix. On exit d holds the diagonal, e[1:] the
    off-diagonal with e[0] = 0, and v the orthogonal matrix Q with Q^T A Q tridiagonal.
    """
    n = v.shape[0]
    d[:] = v[n-1,:]

    # reduction, last column first
    for i in range(n-1, 0, -1):
        scale = float(np.sum(np.abs(d[:i])))
        h = 0.0
        if scale == 0.0:
            e[i] = d[i-1]
            d[:i] = v[i-1,:i]
            v[i,:i] = 0.0
            v[:i,i] = 0.0
        else:
            d[:i] /= scale
            h = float(np.dot(d[:i], d[:i]))
            f = float(d[i-1])
            g = sqrt(h)
            if f > 0:
                g = -g
            e[i] = scale * g
            h = h - f * g
            d[i-1] = f - g
            e[:i] = 0.0

            # similarity transformation of the remaining columns
            for j in range(i):
                f = float(d[j])
                v[j,i] = f
                g = e[j] + v[j,j] * f + float(np.dot(v[j+1:i,j], d[j+1:i]))
                e[j+1:i] += v[j+1:i,j] * f
                e[j] = g
            e[:i] /= h
            f = float(np.dot(e[:i], d[:i]))
            hh = f / (h + h)
            e[:i] -= hh * d[:i]
            for j in range(i):
                f = float(d[j])
                g = float(e[j])
                v[j:i,j] -= f * e[j:i] + g * d[j:i]
                d[j] = v[i-1,j]
                v[i,j] = 0.0
        d[i] = h

    # accumulation of the transformations
    for i in range(n-1):
        v[n-1,i] = v[i,i]
        v[i,i] = 1.0
        h = float(d[i+1])
        if h != 0.0:
            d[:i+1] = v[:i+1,i+1] / h
            g = v[:i+1,i+1] @ v[:i+1,:i+1]
            v[:i+1,:i+1] -= np.outer(d[:i+1], g)
        v[:i+1,i+1] = 0.0
    d[:] = v[n-1,:]
    v[n-1,:] = 0.0
    v[n-1,n-1] = 1.0
    e[0] = 0.0
