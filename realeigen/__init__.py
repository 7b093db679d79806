# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .realeigen import RealEigen
from .eigendecomposition import EigenDecomposition
from .utils import NonConvergenceError

__all__ = ["RealEigen", "EigenDecomposition", "NonConvergenceError"]
