"""Selection of the pressure solver named in the configuration."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from flowlab.config import CellType, Config, SolverType
from flowlab.solver import Solver
from flowlab.sor import SOR
from flowlab.splu import SparseLU


def create_solver(
    config: Config,
    p: np.ndarray,
    rhs: np.ndarray,
    types: Sequence[Sequence[CellType]],
) -> Solver:
    """Return the solver for ``config.solver``.

    Raises ``ValueError`` when no solver is available for that type.
    """
    if config.solver is SolverType.SOR:
        return SOR(config, p, rhs, types)
    if config.solver is SolverType.SPLU:
        return SparseLU(config, p, rhs, types)
    raise ValueError(f"no solver available for {config.solver.name}")