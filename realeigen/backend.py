# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any
import numpy as np
import array_api_compat as api
from array_api_compat import to_device

from .array_namespace import ArrayNamespace, ArrayLike


def get_namespace(obj: Any) -> ArrayNamespace:
    if not api.is_array_api_obj(obj):
        try:
            obj = obj.zeros(1)
        except AttributeError:
            raise TypeError("Provided object is not a recognized array or namespace.")
    return api.array_namespace(obj) # type: ignore

def namespace_of_arrays[T: ArrayLike](*arrays: T) -> ArrayNamespace[T]:
    return api.array_namespace(*arrays) # type: ignore

def is_array(obj: Any) -> bool:
    return api.is_array_api_obj(obj)

def to_host(array: ArrayLike) -> np.ndarray:
    """Copy an array of any supported backend into a float64 numpy array."""
    if not api.is_numpy_array(array):
        array = to_device(array, "cpu")
    return np.array(array, dtype=np.float64, copy=True)

def from_host[T: ArrayLike](xp: ArrayNamespace[T], array: np.ndarray) -> T:
    """Hand a copy of a host array to the namespace xp."""
    return xp.asarray(np.array(array, copy=True), dtype=xp.float64)
