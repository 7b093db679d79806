# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Type
import h5py
import numpy as np

from .backend import ArrayNamespace, ArrayLike, get_namespace
from .eigendecomposition import EigenDecomposition, decomposition_from_state, decomposition_state

def write(group: h5py.Group, obj: EigenDecomposition) -> None:
    if not isinstance(obj, EigenDecomposition):
        raise ValueError("Invalid class.")
    symmetric, d, e, v = decomposition_state(obj)
    group.attrs["order"] = obj.order
    group.attrs["symmetric"] = symmetric
    group.create_dataset("d", data=d)
    group.create_dataset("e", data=e)
    group.create_dataset("v", data=v)

def read[T: ArrayLike](group: h5py.Group, cls: Type[EigenDecomposition[T]], xp: Optional[ArrayNamespace[T]] = None) -> EigenDecomposition[T]:
    if cls != EigenDecomposition:
        raise ValueError("Invalid class.")
    if xp is None:
        xp = get_namespace(np)
    order = int(get_attr(group, "order"))
    symmetric = bool(get_attr(group, "symmetric"))
    d, e, v = (get_dataset(group, name) for name in ("d", "e", "v"))
    if d.shape != (order,):
        raise ValueError(f"Stored eigenvalues do not match the order {order}")
    return decomposition_from_state(xp, symmetric, d, e, v)

def get_attr(group: h5py.Group, name: str) -> Any:
    if name not in group.attrs:
        raise ValueError(f"Group {group.name} has no attribute '{name}'")
    return group.attrs[name]

def get_dataset(group: h5py.Group, name: str) -> np.ndarray:
    dataset = group.get(name)
    if not isinstance(dataset, h5py.Dataset):
        raise ValueError(f"Group {group.name} has no dataset '{name}'")
    return np.asarray(dataset, dtype=np.float64)
