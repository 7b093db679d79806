# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""typing has all classes used in the external API of realeigen."""

from .eigendecomposition import EigenDecomposition
from .eigsolver import EigenSolver, MatrixEigenvalueDecomposition
from .schur import SchurStep
from .utils import NonConvergenceError
from .options import Options, EigenOptions, OptionType

from .realeigen import RealEigen
