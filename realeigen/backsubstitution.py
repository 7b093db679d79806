# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

import numpy as np
import opt_einsum as oe

from .utils import EPS, cdiv

def schur_eigenvectors(h: np.ndarray, d: np.ndarray, e: np.ndarray, norm: float) -> None:
    """
    Back substitution on the real Schur form h with eigenvalues d + i e. The upper triangle
    of h is overwritten with the eigenvectors of the Schur form: column j for a real
    eigenvalue, columns j-1 and j for the real and imaginary part of a complex pair. norm
    is the sum of the magnitudes of the Hessenberg entries, it must be positive and bounds
    the pivots from below.
    """
    nn = h.shape[0]
    for n in range(nn-1, -1, -1):
        p = d[n]
        q = e[n]
        if q == 0:
            _real_vector(h, d, e, norm, n, p)
        elif q < 0:
            _complex_vector(h, d, e, norm, n, p, q)

def _real_vector(h: np.ndarray, d: np.ndarray, e: np.ndarray, norm: float, n: int, p: float) -> None:
    l = n
    h[n,n] = 1.0
    z = s = 0.0
    for i in range(n-1, -1, -1):
        w = h[i,i] - p
        r = float(np.dot(h[i,l:n+1], h[l:n+1,n]))
        if e[i] < 0.0:
            z = w
            s = r
            continue

        l = i
        if e[i] == 0.0:
            if w != 0.0:
                h[i,n] = -r / w
            else:
                h[i,n] = -r / (EPS * norm)
        else:
            # solve real equations
            x = h[i,i+1]
            y = h[i+1,i]
            q = (d[i] - p) * (d[i] - p) + e[i] * e[i]
            t = (x * s - z * r) / q
            h[i,n] = t
            if abs(x) > abs(z):
                h[i+1,n] = (-r - w * t) / x
            else:
                h[i+1,n] = (-s - y * t) / z

        # overflow control
        t = abs(h[i,n])
        if (EPS * t) * t > 1:
            h[i:n+1,n] /= t

def _complex_vector(h: np.ndarray, d: np.ndarray, e: np.ndarray, norm: float, n: int, p: float, q: float) -> None:
    l = n-1

    # last vector component imaginary so matrix is triangular
    if abs(h[n,n-1]) > abs(h[n-1,n]):
        h[n-1,n-1] = q / h[n,n-1]
        h[n-1,n] = -(h[n,n] - p) / h[n,n-1]
    else:
        h[n-1,n-1], h[n-1,n] = cdiv(0.0, -h[n-1,n], h[n-1,n-1] - p, q)
    h[n,n-1] = 0.0
    h[n,n] = 1.0

    z = r = s = 0.0
    for i in range(n-2, -1, -1):
        ra = float(np.dot(h[i,l:n+1], h[l:n+1,n-1]))
        sa = float(np.dot(h[i,l:n+1], h[l:n+1,n]))
        w = h[i,i] - p

        if e[i] < 0.0:
            z = w
            r = ra
            s = sa
            continue

        l = i
        if e[i] == 0:
            h[i,n-1], h[i,n] = cdiv(-ra, -sa, w, q)
        else:
            # solve complex equations
            x = h[i,i+1]
            y = h[i+1,i]
            vr = (d[i] - p) * (d[i] - p) + e[i] * e[i] - q * q
            vi = (d[i] - p) * 2.0 * q
            if vr == 0.0 and vi == 0.0:
                vr = EPS * norm * (abs(w) + abs(q) + abs(x) + abs(y) + abs(z))
            h[i,n-1], h[i,n] = cdiv(x*r - z*ra + q*sa, x*s - z*sa - q*ra, vr, vi)
            if abs(x) > (abs(z) + abs(q)):
                h[i+1,n-1] = (-ra - w * h[i,n-1] + q * h[i,n]) / x
                h[i+1,n] = (-sa - w * h[i,n] - q * h[i,n-1]) / x
            else:
                h[i+1,n-1], h[i+1,n] = cdiv(-r - y * h[i,n-1], -s - y * h[i,n], z, q)

        # overflow control
        t = max(abs(h[i,n-1]), abs(h[i,n]))
        if (EPS * t) * t > 1:
            h[i:n+1,n-1] /= t
            h[i:n+1,n] /= t

def back_transform(v: np.ndarray, h: np.ndarray) -> None:
    """Multiply the accumulated transformation v with the Schur eigenvectors, v = v triu(h)."""
    v[:,:] = oe.contract("ik,kj->ij", v, np.triu(h))

def normalize_eigenvectors(v: np.ndarray, e: np.ndarray) -> None:
    """
    Scale every eigenvector by its largest component and then to unit length, zeroing
    components below EPS. The real and imaginary columns of a complex pair are treated
    as one vector.
    """
    n = v.shape[0]
    i = 0
    while i < n:
        cols = slice(i, i+1) if e[i] == 0.0 else slice(i, i+2)
        vec = v[:,cols]
        vmax = float(np.max(np.abs(vec)))
        if vmax > 0.0:
            vec /= vmax
            vec /= np.sqrt(np.sum(vec * vec))
            vec[np.abs(vec) < EPS] = 0.0
        i = cols.stop
