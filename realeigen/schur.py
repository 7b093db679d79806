# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""
Reduction of an upper Hessenberg matrix to real Schur form with the double shift QR
algorithm (hqr2 of Martin and Wilkinson, Handbook for Auto. Comp., Vol. II, and EISPACK).
"""

from enum import Enum
from math import sqrt
import logging
import numpy as np

from .utils import EPS, NonConvergenceError

logger = logging.getLogger(__name__)

class SchurStep(Enum):
    #: The trailing 1x1 block is decoupled.
    ONE_ROOT = 0
    #: The trailing 2x2 block is decoupled.
    TWO_ROOTS = 1
    #: No negligible subdiagonal at the bottom, perform a double shift QR step.
    QR_STEP = 2

def classify(l: int, n: int) -> SchurStep:
    """Select the next step from the lowest negligible subdiagonal l of the active block ending at n."""
    if l == n:
        return SchurStep.ONE_ROOT
    if l == n-1:
        return SchurStep.TWO_ROOTS
    return SchurStep.QR_STEP

class SchurIterator:
    """
    Drives an upper Hessenberg matrix h to quasi upper triangular form, storing the real and
    imaginary parts of the eigenvalues in d and e. All orthogonal transformations are
    accumulated into v, which has to contain the transformation of the Hessenberg reduction.
    Complex conjugate pairs are stored next to each other, the one with positive imaginary
    part first.
    """

    h: np.ndarray
    v: np.ndarray
    d: np.ndarray
    e: np.ndarray
    #: Sum of the magnitudes of the Hessenberg entries.
    norm: float
    max_iterations: int
    low: int
    high: int
    _exshift: float

    def __init__(self, h: np.ndarray, v: np.ndarray, d: np.ndarray, e: np.ndarray, max_iterations: int) -> None:
        self.h = h
        self.v = v
        self.d = d
        self.e = e
        self.max_iterations = max_iterations
        self.low = 0
        self.high = h.shape[0]-1
        self.norm = float(np.sum(np.abs(np.triu(h, -1))))
        self._exshift = 0.0

    def __call__(self) -> None:
        n = self.high
        iteration = 0
        while n >= self.low:
            l = self._small_subdiagonal(n)
            match classify(l, n):
                case SchurStep.ONE_ROOT:
                    self._one_root(n)
                    logger.debug("Real eigenvalue %d isolated after %d iterations", n, iteration)
                    n -= 1
                    iteration = 0
                case SchurStep.TWO_ROOTS:
                    self._two_roots(n)
                    logger.debug("Eigenvalues %d and %d isolated after %d iterations", n-1, n, iteration)
                    n -= 2
                    iteration = 0
                case SchurStep.QR_STEP:
                    if iteration == self.max_iterations:
                        raise NonConvergenceError(n, iteration)
                    self._qr_step(l, n, iteration)
                    iteration += 1
        self._clear_lower()

    def _clear_lower(self) -> None:
        # bulges and negligible subdiagonals are zero in the Schur form
        h, e = self.h, self.e
        h[np.tril_indices(h.shape[0], -2)] = 0.0
        for i in range(1, h.shape[0]):
            if not (e[i-1] > 0.0 and e[i] < 0.0):
                h[i,i-1] = 0.0

    def _small_subdiagonal(self, n: int) -> int:
        h = self.h
        l = n
        while l > self.low:
            s = abs(h[l-1,l-1]) + abs(h[l,l])
            if s == 0.0:
                s = self.norm
            if abs(h[l,l-1]) < EPS * s:
                break
            l -= 1
        return l

    def _one_root(self, n: int) -> None:
        h = self.h
        h[n,n] = h[n,n] + self._exshift
        self.d[n] = h[n,n]
        self.e[n] = 0.0

    def _two_roots(self, n: int) -> None:
        h, v, d, e = self.h, self.v, self.d, self.e
        w = h[n,n-1] * h[n-1,n]
        p = (h[n-1,n-1] - h[n,n]) / 2.0
        q = p * p + w
        z = sqrt(abs(q))
        h[n,n] = h[n,n] + self._exshift
        h[n-1,n-1] = h[n-1,n-1] + self._exshift
        x = h[n,n]

        if q < 0:
            d[n-1] = x + p
            d[n] = x + p
            e[n-1] = z
            e[n] = -z
            return

        # real pair
        z = p + z if p >= 0 else p - z
        d[n-1] = x + z
        d[n] = d[n-1]
        if z != 0.0:
            d[n] = x - w / z
        e[n-1] = 0.0
        e[n] = 0.0
        x = h[n,n-1]
        s = abs(x) + abs(z)
        p = x / s
        q = z / s
        r = sqrt(p * p + q * q)
        p = p / r
        q = q / r

        # row modification
        row = h[n-1,n-1:].copy()
        h[n-1,n-1:] = q * row + p * h[n,n-1:]
        h[n,n-1:] = q * h[n,n-1:] - p * row

        # column modification
        col = h[:n+1,n-1].copy()
        h[:n+1,n-1] = q * col + p * h[:n+1,n]
        h[:n+1,n] = q * h[:n+1,n] - p * col

        # accumulate transformations
        low, high = self.low, self.high
        col = v[low:high+1,n-1].copy()
        v[low:high+1,n-1] = q * col + p * v[low:high+1,n]
        v[low:high+1,n] = q * v[low:high+1,n] - p * col

    def _qr_step(self, l: int, n: int, iteration: int) -> None:
        h, v = self.h, self.v
        low, high = self.low, self.high

        # form shift
        x = h[n,n]
        y = h[n-1,n-1]
        w = h[n,n-1] * h[n-1,n]

        # Wilkinson's original ad hoc shift
        if iteration == 10:
            logger.debug("Exceptional shift at row %d", n)
            self._exshift += x
            for i in range(low, n+1):
                h[i,i] -= x
            s = abs(h[n,n-1]) + abs(h[n-1,n-2])
            x = y = 0.75 * s
            w = -0.4375 * s * s

        # MATLAB's ad hoc shift
        if iteration == 30:
            s = (y - x) / 2.0
            s = s * s + w
            if s > 0:
                logger.debug("Second exceptional shift at row %d", n)
                s = sqrt(s)
                if y < x:
                    s = -s
                s = x - w / ((y - x) / 2.0 + s)
                for i in range(low, n+1):
                    h[i,i] -= s
                self._exshift += s
                x = y = w = 0.964

        # look for two consecutive small subdiagonal elements
        m = n-2
        while m >= l:
            z = h[m,m]
            r = x - z
            s = y - z
            p = (r * s - w) / h[m+1,m] + h[m,m+1]
            q = h[m+1,m+1] - z - r - s
            r = h[m+2,m+1]
            s = abs(p) + abs(q) + abs(r)
            p = p / s
            q = q / s
            r = r / s
            if m == l:
                break
            if abs(h[m,m-1]) * (abs(q) + abs(r)) < \
               EPS * (abs(p) * (abs(h[m-1,m-1]) + abs(z) + abs(h[m+1,m+1]))):
                break
            m -= 1

        for i in range(m+2, n+1):
            h[i,i-2] = 0.0
            if i > m+2:
                h[i,i-3] = 0.0

        # double QR step involving rows l:n and columns m:n
        for k in range(m, n):
            notlast = k != n-1
            if k != m:
                p = h[k,k-1]
                q = h[k+1,k-1]
                r = h[k+2,k-1] if notlast else 0.0
                x = abs(p) + abs(q) + abs(r)
                if x == 0.0:
                    continue
                p = p / x
                q = q / x
                r = r / x

            s = sqrt(p * p + q * q + r * r)
            if p < 0:
                s = -s
            if s == 0:
                continue
            if k != m:
                h[k,k-1] = -s * x
            elif l != m:
                h[k,k-1] = -h[k,k-1]
            p = p + s
            x = p / s
            y = q / s
            z = r / s
            q = q / p
            r = r / p

            # row modification
            rows = h[k:k+3,k:] if notlast else h[k:k+2,k:]
            pr = rows[0] + q * rows[1]
            if notlast:
                pr = pr + r * rows[2]
                rows[2] -= pr * z
            rows[0] -= pr * x
            rows[1] -= pr * y

            # column modification
            top = min(n, k+3) + 1
            cols = h[:top,k:k+3] if notlast else h[:top,k:k+2]
            pc = x * cols[:,0] + y * cols[:,1]
            if notlast:
                pc = pc + z * cols[:,2]
                cols[:,2] -= pc * r
            cols[:,0] -= pc
            cols[:,1] -= pc * q

            # accumulate transformations
            vcols = v[low:high+1,k:k+3] if notlast else v[low:high+1,k:k+2]
            pv = x * vcols[:,0] + y * vcols[:,1]
            if notlast:
                pv = pv + z * vcols[:,2]
                vcols[:,2] -= pv * r
            vcols[:,0] -= pv
            vcols[:,1] -= pv * q
