# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from math import ldexp

#: Machine epsilon of IEEE double precision, 2**-52.
EPS = ldexp(1.0, -52)

def cdiv(xr: float, xi: float, yr: float, yi: float) -> tuple[float, float]:
    """Complex division (xr + i xi) / (yr + i yi), scaled to avoid overflow."""
    if abs(yr) > abs(yi):
        r = yi / yr
        d = yr + r * yi
        return (xr + r * xi) / d, (xi - r * xr) / d
    r = yr / yi
    d = yi + r * yr
    return (r * xr + xi) / d, (r * xi - xr) / d

def check_pos(msg: str, value: int | float):
    if value <= 0:
        raise ValueError(f"{msg} must be above zero, got {value}")

def check_non_neg(msg: str, value: int | float):
    if value < 0:
        raise ValueError(f"{msg} must not be negative, got {value}")

def check_index(index: int, order: int) -> None:
    if index < 0 or index >= order:
        raise ValueError(f"Index {index} is out of range [0, {order})")

class NonConvergenceError(RuntimeError):
    """Raised when an iterative eigenvalue algorithm exceeds its iteration limit."""

    #: Index of the eigenvalue that did not converge.
    index: int
    #: Number of iterations performed on it.
    iterations: int

    def __init__(self, index: int, iterations: int) -> None:
        self.index = index
        self.iterations = iterations
        super().__init__(f"Eigenvalue {index} did not converge within {iterations} iterations")
