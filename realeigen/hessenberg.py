# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from math import sqrt
import numpy as np

def reduce_hessenberg(h: np.ndarray, v: np.ndarray, ort: np.ndarray) -> None:
    """
    Orthogonal reduction of a general matrix to upper Hessenberg form (orthes and ortran of
    Martin and Wilkinson, Handbook for Auto. Comp., Vol. II, and EISPACK).

    On entry h holds the matrix. On exit h is upper Hessenberg and v holds the orthogonal
    matrix Q with Q^T A Q = H. ort is scratch space of length n.
    """
    n = h.shape[0]
    low, high = 0, n-1

    for m in range(low+1, high):

        # scale column
        scale = float(np.sum(np.abs(h[m:high+1,m-1])))
        if scale == 0.0:
            continue

        # Householder vector
        ort[m:high+1] = h[m:high+1,m-1] / scale
        hh = float(np.dot(ort[m:high+1], ort[m:high+1]))
        g = sqrt(hh)
        if ort[m] > 0:
            g = -g
        hh = hh - ort[m] * g
        ort[m] = ort[m] - g

        # H = (I - u u^T / h) H (I - u u^T / h)
        u = ort[m:high+1]
        f = (u @ h[m:high+1,m:]) / hh
        h[m:high+1,m:] -= np.outer(u, f)
        f = (h[:high+1,m:high+1] @ u) / hh
        h[:high+1,m:high+1] -= np.outer(f, u)

        ort[m] = scale * ort[m]
        h[m,m-1] = scale * g

    # accumulate transformations, needs the fully reduced h
    v[:,:] = np.eye(n)
    for m in range(high-1, low, -1):
        if h[m,m-1] == 0.0:
            continue
        ort[m+1:high+1] = h[m+1:high+1,m-1]
        g = ort[m:high+1] @ v[m:high+1,m:high+1]
        # double division avoids possible underflow
        g = (g / ort[m]) / h[m,m-1]
        v[m:high+1,m:high+1] += np.outer(ort[m:high+1], g)

    # the entries below the subdiagonal held the Householder vectors
    h[np.tril_indices(n, -2)] = 0.0
