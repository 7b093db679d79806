# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional
from dataclasses import dataclass
import logging
import numpy as np

from .backend import ArrayLike, ArrayNamespace, get_namespace, from_host, is_array
from .options import EigenOptions, find_options
from .matrixinput import square_matrix, flat_matrix, is_symmetric
from .tridiagonalization import tridiagonalize
from .tridiagonalql import diagonalize_tridiagonal
from .hessenberg import reduce_hessenberg
from .schur import SchurIterator
from .backsubstitution import schur_eigenvectors, back_transform, normalize_eigenvectors
from .utils import check_index

logger = logging.getLogger(__name__)

class _EigenBuilder:
    """Working buffers of a single decomposition. Only d, e and v survive the construction."""

    n: int
    symmetric: bool
    d: np.ndarray
    e: np.ndarray
    v: np.ndarray

    def __init__(self, mat: np.ndarray, options: EigenOptions) -> None:
        self.n = mat.shape[0]
        self.symmetric = is_symmetric(mat, options.symmetry_tolerance)
        self.d = np.zeros(self.n)
        self.e = np.zeros(self.n)
        self.v = np.zeros((self.n, self.n))
        max_iterations = options.iteration_limit(self.n)

        if self.symmetric:
            logger.debug("Decomposing symmetric matrix of order %d", self.n)
            # tridiagonalize reads one triangle only
            if options.symmetry_tolerance > 0.0:
                self.v[:,:] = 0.5 * (mat + mat.T)
            else:
                self.v[:,:] = mat
            tridiagonalize(self.v, self.d, self.e)
            diagonalize_tridiagonal(self.v, self.d, self.e, max_iterations)
        else:
            logger.debug("Decomposing general matrix of order %d", self.n)
            h = mat.copy()
            reduce_hessenberg(h, self.v, np.zeros(self.n))
            schur = SchurIterator(h, self.v, self.d, self.e, max_iterations)
            schur()
            if schur.norm != 0.0:
                schur_eigenvectors(h, self.d, self.e, schur.norm)
                back_transform(self.v, h)
            normalize_eigenvectors(self.v, self.e)

@dataclass(frozen=True, init=False, eq=False)
class EigenDecomposition[T: ArrayLike]:
    """
    Eigenvalues and eigenvectors of a real square matrix A.

    If A is symmetric, A = V D V^T where D is diagonal and V is orthogonal. The eigenvalues are
    sorted in descending order and column i of V is the eigenvector of the i-th eigenvalue.

    Otherwise D is block diagonal with the real eigenvalues in 1x1 blocks and every complex
    pair :math:`\\lambda \\pm i\\mu` with :math:`\\mu > 0` in a 2x2 block
    :math:`[[\\lambda, \\mu], [-\\mu, \\lambda]]`, and A V = V D. For the eigenvalue
    :math:`\\lambda + i\\mu` at index i, column i of V holds the real part and column i+1 the
    imaginary part of the eigenvector; for its conjugate at i+1 the roles are swapped. The
    eigenvectors are normalized but in general not orthogonal, V may be badly conditioned.

    The decomposition is computed once in the constructor, all accessors return copies.
    """

    #: Order of the decomposed matrix.
    order: int
    #: True if the symmetric algorithm was used.
    symmetric: bool
    #: Array namespace of the returned arrays.
    namespace: ArrayNamespace[T]

    _d: np.ndarray
    _e: np.ndarray
    _v: np.ndarray

    def __init__(
            self,
            matrix: Any,
            n: Optional[int] = None,
            strict: bool = True, *,
            namespace: Optional[ArrayNamespace[T]] = None,
            options: Optional[EigenOptions] = None) -> None:
        """
        Decompose a square matrix, given as two dimensional array or as sequence of rows. n
        defaults to the number of rows. If strict is False, the matrix may have more rows and
        columns than n, which are ignored. The input is copied and never modified.
        """
        if namespace is None:
            namespace = get_namespace(matrix) if is_array(matrix) else get_namespace(np)
        mat = square_matrix(matrix, n, strict)
        if options is None:
            options = find_options(namespace) or EigenOptions(namespace=namespace)
        builder = _EigenBuilder(mat, options)
        self._assign(namespace, builder.symmetric, builder.d, builder.e, builder.v)

    @classmethod
    def from_flat(
            cls,
            flat: Any,
            n: int,
            column_major_order: bool = False,
            strict: bool = True, *,
            namespace: Optional[ArrayNamespace[T]] = None,
            options: Optional[EigenOptions] = None) -> "EigenDecomposition[T]":
        """
        Decompose a square matrix of order n stored in a flat array in row-major order, or in
        column-major order if column_major_order is True. If strict is False, the array may be
        longer than n*n.
        """
        if namespace is None:
            namespace = get_namespace(flat) if is_array(flat) else get_namespace(np)
        mat = flat_matrix(flat, n, column_major_order, strict)
        return cls(mat, n, namespace=namespace, options=options)

    def _assign(self, namespace: ArrayNamespace[T], symmetric: bool, d: np.ndarray, e: np.ndarray, v: np.ndarray) -> None:
        object.__setattr__(self, "order", int(d.shape[0]))
        object.__setattr__(self, "symmetric", bool(symmetric))
        object.__setattr__(self, "namespace", namespace)
        object.__setattr__(self, "_d", np.array(d, dtype=np.float64, copy=True))
        object.__setattr__(self, "_e", np.array(e, dtype=np.float64, copy=True))
        object.__setattr__(self, "_v", np.array(v, dtype=np.float64, copy=True))

    #-------------------------------------------------------------------------
    #accessors

    def number_of_rows(self) -> int:
        return self.order

    def number_of_columns(self) -> int:
        return self.order

    def get_v(self) -> T:
        """Eigenvector matrix, one column per eigenvalue."""
        return from_host(self.namespace, self._v)

    def get_vt(self) -> T:
        """Transpose of the eigenvector matrix, one row per eigenvalue."""
        return from_host(self.namespace, self._v.T)

    def get_d(self) -> T:
        """Block diagonal eigenvalue matrix."""
        n = self.order
        mat = np.diag(self._d)
        for i in range(n):
            if self._e[i] > 0:
                mat[i,i+1] = self._e[i]
            elif self._e[i] < 0:
                mat[i,i-1] = self._e[i]
        return from_host(self.namespace, mat)

    def real_eigenvalues(self) -> T:
        return from_host(self.namespace, self._d)

    def imag_eigenvalues(self) -> T:
        return from_host(self.namespace, self._e)

    def real_eigenvalue(self, i: int) -> float:
        check_index(i, self.order)
        return float(self._d[i])

    def imag_eigenvalue(self, i: int) -> float:
        check_index(i, self.order)
        return float(self._e[i])

    def real_eigenvector(self, k: int) -> T:
        """Real part of the eigenvector of the k-th eigenvalue."""
        check_index(k, self.order)
        return from_host(self.namespace, self._v[:,k])

    def imag_eigenvector(self, k: int) -> T:
        """Imaginary part of the eigenvector of the k-th eigenvalue, zero for real eigenvalues."""
        check_index(k, self.order)
        if self._e[k] == 0.0:
            return from_host(self.namespace, np.zeros(self.order))
        col = k-1 if self._e[k] < 0.0 else k+1
        return from_host(self.namespace, self._v[:,col])

    #-------------------------------------------------------------------------
    #some magic

    def __repr__(self) -> str:
        return f"EigenDecomposition(order={self.order}, symmetric={self.symmetric})"

def decomposition_from_state[T: ArrayLike](
        namespace: ArrayNamespace[T],
        symmetric: bool,
        d: np.ndarray,
        e: np.ndarray,
        v: np.ndarray) -> EigenDecomposition[T]:
    """Recreate a decomposition from stored eigenvalues and eigenvectors without recomputing it."""
    n = d.shape[0]
    if e.shape != (n,) or v.shape != (n, n):
        raise ValueError("Eigenvalues and eigenvectors do not match in size")
    obj = EigenDecomposition.__new__(EigenDecomposition)
    obj._assign(namespace, symmetric, d, e, v)
    return obj

def decomposition_state(obj: EigenDecomposition) -> tuple[bool, np.ndarray, np.ndarray, np.ndarray]:
    """Copies of the symmetric flag, the eigenvalues d, e and the eigenvectors v, as host arrays."""
    return obj.symmetric, obj._d.copy(), obj._e.copy(), obj._v.copy()
