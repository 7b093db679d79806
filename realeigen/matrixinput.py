# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""
Validation of matrix arguments. Every function returns a private float64 copy of exactly
n by n entries, the input is never referenced afterwards.
"""

from typing import Any, Optional, Sequence
import numpy as np

from .backend import is_array, to_host

def square_matrix(matrix: Any, n: Optional[int] = None, strict: bool = True) -> np.ndarray:
    """
    Check a two dimensional matrix given as array or as a sequence of rows. If n is None the
    order is the number of rows. If strict is False, the matrix may have more rows and
    columns than n, the additional entries are ignored.
    """
    if matrix is None:
        raise ValueError("matrix must not be None")

    if is_array(matrix):
        host = to_host(matrix)
        if host.ndim != 2:
            raise ValueError(f"Expected a two dimensional matrix, got {host.ndim} dimension(s)")
        rows: Sequence[Any] = host
    else:
        rows = matrix

    if len(rows) == 0:
        raise ValueError("matrix has no rows")
    if n is None:
        n = len(rows)
    if n <= 0:
        raise ValueError(f"Order of the matrix must be above zero, got {n}")
    if len(rows) < n:
        raise ValueError(f"matrix is missing rows, expected {n}, got {len(rows)}")
    if strict and len(rows) != n:
        raise ValueError(f"matrix must have exactly {n} rows, got {len(rows)}")

    for i in range(n):
        row = rows[i]
        if row is None:
            raise ValueError(f"matrix is missing row {i}")
        if not hasattr(row, "__len__"):
            raise ValueError(f"Row {i} is not a sequence")
        size = len(row)
        if size < n or (strict and size != n):
            raise ValueError(f"Row {i} has the wrong size {size} for a matrix of order {n}")

    if isinstance(rows, np.ndarray):
        return np.array(rows[:n, :n], dtype=np.float64, copy=True)
    return np.array([[float(row[j]) for j in range(n)] for row in rows[:n]], dtype=np.float64)

def flat_matrix(flat: Any, n: int, column_major_order: bool = False, strict: bool = True) -> np.ndarray:
    """
    Unpack a square matrix of order n stored in a flat array, either row by row or, if
    column_major_order is True, column by column. If strict is False, the array may hold
    more than n*n entries, the additional entries are ignored.
    """
    if flat is None:
        raise ValueError("matrix must not be None")
    if n <= 0:
        raise ValueError(f"Order of the matrix must be above zero, got {n}")

    host = to_host(flat) if is_array(flat) else np.asarray(flat, dtype=np.float64)
    if host.ndim != 1:
        raise ValueError(f"Expected a flat matrix, got {host.ndim} dimension(s)")
    if host.shape[0] < n*n:
        raise ValueError(f"Flat matrix is too short, got {host.shape[0]} entries for a {n}x{n} matrix")
    if strict and host.shape[0] != n*n:
        raise ValueError(f"Flat matrix must have exactly {n*n} entries, got {host.shape[0]}")

    mat = np.reshape(host[:n*n], (n, n))
    if column_major_order:
        mat = mat.T
    return np.array(mat, dtype=np.float64, copy=True)

def is_symmetric(mat: np.ndarray, tolerance: float = 0.0) -> bool:
    """Check A[i,j] == A[j,i] for all pairs, or up to the tolerance if it is positive."""
    if tolerance == 0.0:
        return bool(np.all(mat == mat.T))
    return bool(np.all(np.abs(mat - mat.T) <= tolerance))
