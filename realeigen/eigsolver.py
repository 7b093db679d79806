# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Protocol
from dataclasses import dataclass

from .backend import ArrayLike, namespace_of_arrays
from .eigendecomposition import EigenDecomposition

class MatrixEigenvalueDecomposition(Protocol):
    """Protocol for a matrix eigenvalue decomposition."""

    def __call__(self, mat: ArrayLike, /) -> tuple[ArrayLike, ArrayLike]:
        """
        Decompose a matrix into its eigenvalues and eigenvectors.
        """
        ...

@dataclass
class EigenSolver:
    """
    Eigenvalue solver for real symmetric matrices, a drop-in for ``linalg.eigh``.
    Eigenvalues are returned in ascending order unless descending is set.
    """

    #: Return the largest eigenvalue first.
    descending: bool = False

    def __call__[T: ArrayLike](self, mat: T, /) -> tuple[T, T]:
        xp = namespace_of_arrays(mat)
        decomp = EigenDecomposition(mat, namespace=xp)
        if not decomp.symmetric:
            raise ValueError("EigenSolver requires a symmetric matrix.")
        vals, vecs = decomp.real_eigenvalues(), decomp.get_v()
        if self.descending:
            return vals, vecs
        return xp.flip(vals, axis=0), xp.flip(vecs, axis=1)
