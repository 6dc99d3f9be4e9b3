"""Common base for the pressure Poisson solvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from flowlab.config import CellType, Config, SolverType


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a pressure solve."""

    iterations: int
    residual: float


def _fluid_mask(types: Sequence[Sequence[CellType]]) -> np.ndarray:
    return np.array([[cell is CellType.FLUID for cell in row] for row in types], dtype=bool)


def _is_wall(cell: CellType) -> bool:
    return cell is not CellType.FLUID and cell is not CellType.OUTLET


class Solver(ABC):
    """A solver for the pressure Poisson equation on a staggered grid.

    Matrices are numpy arrays of shape ``(imax + 2, jmax + 2)`` indexed ``[i, j]``,
    ``types`` is indexable as ``types[i][j]``.
    """

    def __init__(self, config: Config, types: Sequence[Sequence[CellType]]) -> None:
        self.config = config
        self.types = types

    @abstractmethod
    def solve(self) -> SolveResult:
        """Solve for the pressure and report iterations and residual."""

    def comp_residual(self, x: np.ndarray, b: np.ndarray, dx: float, dy: float) -> np.ndarray:
        """Return ``b - laplace(x)`` on interior cells, zero on the ghost layer."""
        dxdx_inv = 1.0 / (dx * dx)
        dydy_inv = 1.0 / (dy * dy)
        res = np.zeros_like(x, dtype=float)
        centre = x[1:-1, 1:-1]
        lap = (x[2:, 1:-1] - 2.0 * centre + x[:-2, 1:-1]) * dxdx_inv + (
            x[1:-1, 2:] - 2.0 * centre + x[1:-1, :-2]
        ) * dydy_inv
        res[1:-1, 1:-1] = b[1:-1, 1:-1] - lap
        return res

    def boundary_p(self, p: np.ndarray, types: Sequence[Sequence[CellType]]) -> None:
        """Apply the Neumann pressure boundary in place."""
        imax = p.shape[0] - 2
        jmax = p.shape[1] - 2

        for i in range(1, imax + 1):
            if _is_wall(types[i][0]) and types[i][1] is CellType.FLUID:
                p[i, 0] = p[i, 1]
            if _is_wall(types[i][jmax + 1]) and types[i][jmax] is CellType.FLUID:
                p[i, jmax + 1] = p[i, jmax]

        for j in range(1, jmax + 1):
            if _is_wall(types[0][j]) and types[1][j] is CellType.FLUID:
                p[0, j] = p[1, j]
            if _is_wall(types[imax + 1][j]) and types[imax][j] is CellType.FLUID:
                p[imax + 1, j] = p[imax, j]

        for j in range(1, jmax + 1):
            for i in range(1, imax + 1):
                if types[i][j] is not CellType.NOSLIP:
                    continue
                neighbours = [
                    p[ni, nj]
                    for ni, nj in ((i + 1, j), (i - 1, j), (i, j + 1), (i, j - 1))
                    if types[ni][nj] is CellType.FLUID
                ]
                p[i, j] = sum(neighbours) / len(neighbours) if neighbours else 0.0

    def compute_l2_norm(self, residual: np.ndarray) -> float:
        """Root mean square of the residual over the interior cell count."""
        rows, cols = residual.shape
        total = float(np.sum(residual * residual))
        return float(np.sqrt(total / ((rows - 2) * (cols - 2))))

    def compute_average(self, residual: np.ndarray) -> float:
        """Mean absolute residual over the interior cell count."""
        rows, cols = residual.shape
        return float(np.sum(np.abs(residual))) / ((rows - 2) * (cols - 2))

    @staticmethod
    def string2type(name: str) -> SolverType:
        """Map a solver name from a parameter file to its type; SOR by default."""
        return {
            "multigrid": SolverType.MULTIGRID,
            "cg": SolverType.CG,
            "spLU": SolverType.SPLU,
        }.get(name, SolverType.SOR)