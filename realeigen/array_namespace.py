# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Structural types for array-API arrays and namespaces."""

from typing import Any, Protocol, Sequence, runtime_checkable

Device = Any
DType = Any

@runtime_checkable
class ArrayLike(Protocol):

    @property
    def shape(self) -> tuple[int | None, ...]: ...

    @property
    def dtype(self) -> DType: ...

    @property
    def ndim(self) -> int: ...

    @property
    def device(self) -> Device: ...

    def __getitem__(self, key: Any, /) -> Any: ...

class ArrayNamespace[T: ArrayLike](Protocol):

    float64: DType

    def asarray(self, obj: Any, /, *, dtype: DType | None = None, device: Device | None = None, copy: bool | None = None) -> T: ...

    def zeros(self, shape: int | Sequence[int], /, *, dtype: DType | None = None, device: Device | None = None) -> T: ...

    def flip(self, x: T, /, *, axis: int | None = None) -> T: ...
