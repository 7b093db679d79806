# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Type
from dataclasses import dataclass
import h5py

from .backend import ArrayNamespace, get_namespace
from .eigendecomposition import EigenDecomposition
from .eigsolver import EigenSolver
from .options import EigenOptions, set_options as _set_options, get_options as _get_options
from .io import write as _write
from .io import read as _read

#-------------------------------------------------------------------------------------------------
# Construction wrapper
@dataclass(frozen=True)
class RealEigen[NDArray: Any]:

    #: Array namespace for the underlying array library.
    namespace: ArrayNamespace[NDArray]

    def __init__(self, namespace: Any) -> None:
        object.__setattr__(self, "namespace", get_namespace(namespace))
        _set_options(self.options())

    #-------------------------------------------------------------------------------------------------
    # decompositions

    def decompose(self, matrix: Any, n: Optional[int] = None, strict: bool = True) -> EigenDecomposition[NDArray]:
        """
        Eigenvalues and eigenvectors of a real square matrix, given as array or as sequence
        of rows. If strict is False, rows and columns beyond the order n are ignored.
        """
        return EigenDecomposition(matrix, n, strict, namespace=self.namespace)

    def decompose_flat(
            self,
            flat: Any,
            n: int,
            column_major_order: bool = False,
            strict: bool = True) -> EigenDecomposition[NDArray]:
        """
        Eigenvalues and eigenvectors of a real square matrix of order n stored in a flat array.
        """
        return EigenDecomposition.from_flat(flat, n, column_major_order, strict, namespace=self.namespace)

    def solver(self, descending: bool = False) -> EigenSolver:
        """
        Eigenvalue solver for symmetric matrices following the ``linalg.eigh`` convention.
        """
        return EigenSolver(descending=descending)

    #-------------------------------------------------------------------------------------------------
    # options

    def options(self, max_iterations: Optional[int] = None, symmetry_tolerance: float = 0.0) -> EigenOptions:
        """
        Options for all decompositions of this namespace. Use it as context manager or install it
        with set_options.
        """
        return EigenOptions(namespace=self.namespace,
                            max_iterations=max_iterations,
                            symmetry_tolerance=symmetry_tolerance)

    def get_options(self) -> EigenOptions:
        """Currently active options of this namespace on the current thread."""
        return _get_options(self.namespace)

    def set_options(self, opts: EigenOptions) -> None:
        """Install options for the current thread."""
        _set_options(opts)

    #-------------------------------------------------------------------------------------------------
    # io

    def write(self, group: h5py.Group, obj: EigenDecomposition) -> None:
        """Store a decomposition in a hdf5 group."""
        _write(group, obj)

    def read(self, group: h5py.Group, cls: Type[EigenDecomposition] = EigenDecomposition) -> EigenDecomposition[NDArray]:
        """Load a decomposition from a hdf5 group."""
        return _read(group, cls, self.namespace)
