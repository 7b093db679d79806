from typing import Any
import numpy as np
import array_api_compat as api

backends = [api.array_namespace(np.zeros(1))]

#import torch as tr
#tr.set_default_dtype(tr.float64)
#backends.append(api.array_namespace(tr.zeros(1)))

def rand_data(xp, *shape: int, seed: int = 0):
    data = np.random.default_rng(seed).uniform(-1.0, 1.0, shape)
    if api.is_numpy_namespace(xp):
        return data
    return xp.asarray(data)

def rand_symmetric(xp, n: int, seed: int = 0):
    data = np.random.default_rng(seed).uniform(-1.0, 1.0, (n, n))
    data = data + data.T
    if api.is_numpy_namespace(xp):
        return data
    return xp.asarray(data)

def to_numpy(array: Any) -> np.ndarray:
    return np.asarray(api.to_device(array, "cpu"))

def reconstruction_error(mat: Any, v: Any, d: Any) -> float:
    mat, v, d = to_numpy(mat), to_numpy(v), to_numpy(d)
    return float(np.max(np.abs(mat @ v - v @ d)))
