"""Direct sparse LU solver for the pressure Poisson equation."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.sparse import coo_matrix, csc_matrix
from scipy.sparse.linalg import splu

from flowlab.config import CellType, Config
from flowlab.solver import SolveResult, Solver


def _assemble(
    imax: int,
    jmax: int,
    dx: float,
    dy: float,
    types: Sequence[Sequence[CellType]],
) -> csc_matrix:
    """Build the negative five-point Laplacian over the interior cells.

    Unknowns are numbered column by column: ``node = j * imax + i``.
    Walls act as Neumann boundaries, outlets as a zero Dirichlet value.
    """
    h_xx_inv = 1.0 / (dx * dx)
    h_yy_inv = 1.0 / (dy * dy)
    rows: list[int] = []
    cols: list[int] = []
    data: list[float] = []

    def put(row: int, col: int, value: float) -> None:
        rows.append(row)
        cols.append(col)
        data.append(value)

    for i in range(imax):
        for j in range(jmax):
            nx = 2
            ny = 2
            node = j * imax + i

            if j != 0:
                put(node, node - imax, -h_yy_inv)
            elif types[i + 1][j] is not CellType.OUTLET:
                ny -= 1

            if j != jmax - 1:
                put(node, node + imax, -h_yy_inv)
            elif types[i + 1][j + 2] is not CellType.OUTLET:
                ny -= 1

            if i != 0:
                put(node, node - 1, -h_xx_inv)
            elif types[i][j + 1] is not CellType.OUTLET:
                nx -= 1

            if i != imax - 1:
                put(node, node + 1, -h_xx_inv)
            elif types[i + 2][j + 1] is not CellType.OUTLET:
                nx -= 1

            put(node, node, nx * h_xx_inv + ny * h_yy_inv)

    size = imax * jmax
    return coo_matrix((data, (rows, cols)), shape=(size, size)).tocsc()


class SparseLU(Solver):
    """Factorises the pressure matrix once and solves each step directly.

    ``p`` should be a float numpy array; it is updated in place.
    """

    def __init__(
        self,
        config: Config,
        p: np.ndarray,
        rhs: np.ndarray,
        types: Sequence[Sequence[CellType]],
    ) -> None:
        super().__init__(config, types)
        self.p = np.asarray(p, dtype=float)
        self.rhs = np.asarray(rhs, dtype=float)
        imax = self.p.shape[0] - 2
        jmax = self.p.shape[1] - 2
        self._shape = (imax, jmax)
        self.matrix = _assemble(imax, jmax, config.dx, config.dy, types)
        try:
            self._lu = splu(self.matrix, permc_spec="COLAMD")
        except RuntimeError as exc:
            raise ValueError("the pressure matrix is singular") from exc

    def solve(self) -> SolveResult:
        """Solve the system once; the residual is that of the linear system."""
        imax, jmax = self._shape
        b = self.rhs[1 : imax + 1, 1 : jmax + 1].reshape(-1, order="F")
        x = self._lu.solve(b)
        self.p[1 : imax + 1, 1 : jmax + 1] = -x.reshape((imax, jmax), order="F")
        self.boundary_p(self.p, self.types)
        residual = float(np.linalg.norm(self.matrix @ x - b) / np.sqrt(b.size))
        return SolveResult(1, residual)