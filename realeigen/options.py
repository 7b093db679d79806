# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Hashable, Any, Optional, Self
from enum import Enum
import threading

from .backend import ArrayNamespace
from .utils import check_pos, check_non_neg

class OptionType(Enum):
    DECOMPOSITION = 0

class Options:

    key: Hashable

    def __init__(self, namespace: ArrayNamespace, category: OptionType):
        self.key = (namespace, category, threading.get_ident())

    def __enter__(self) -> Self:
        global _opts
        if self.key in _opts:
            self._tmp = _opts[self.key]
        else:
            self._tmp = None
        _opts[self.key] = self
        return self

    def __exit__(self, *_) -> None:
        global _opts
        if self._tmp is not None:
            _opts[self.key] = self._tmp
        else:
            del _opts[self.key]

class EigenOptions(Options):
    """
    Context manager for eigenvalue decomposition options. Inside the context every
    decomposition for the given namespace, started on the same thread, uses these options.
    """

    #: Maximum number of QL/QR iterations spent on a single deflation. If None,
    #: 30*max(n, 10) iterations are allowed for a matrix of order n.
    max_iterations: Optional[int]
    #: Maximal absolute difference of A[i,j] and A[j,i] for which a matrix is treated as
    #: symmetric. Zero selects exact comparison. With a positive tolerance the symmetric part
    #: (A + A^T)/2 is decomposed.
    symmetry_tolerance: float

    def __init__(
            self, *,
            namespace: ArrayNamespace,
            max_iterations: Optional[int] = None,
            symmetry_tolerance: float = 0.0):
        self.max_iterations = max_iterations
        self.symmetry_tolerance = symmetry_tolerance
        super().__init__(namespace, OptionType.DECOMPOSITION)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "max_iterations" and value is not None:
            check_pos(name, value)
        elif name == "symmetry_tolerance":
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def iteration_limit(self, order: int) -> int:
        """Number of iterations allowed per deflation for a matrix of the given order."""
        if self.max_iterations is not None:
            return self.max_iterations
        return 30 * max(order, 10)

    def __repr__(self) -> str:
        return (f"EigenOptions(max_iterations={self.max_iterations}, "
                f"symmetry_tolerance={self.symmetry_tolerance})")

_opts: dict[Any, Options] = {}

def get_options(namespace: ArrayNamespace, otype: OptionType = OptionType.DECOMPOSITION) -> EigenOptions:
    global _opts
    key = (namespace, otype, threading.get_ident())
    if key in _opts:
        return _opts[key] # type: ignore
    else:
        raise KeyError("No options set for the current thread.")

def find_options(namespace: ArrayNamespace, otype: OptionType = OptionType.DECOMPOSITION) -> Optional[EigenOptions]:
    return _opts.get((namespace, otype, threading.get_ident())) # type: ignore

def set_options(opts: EigenOptions) -> None:
    global _opts
    _opts[opts.key] = opts
