"""Successive over-relaxation solver for the pressure equation."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from flowlab.config import CellType, Config
from flowlab.solver import SolveResult, Solver, _fluid_mask


class SOR(Solver):
    """Gauss-Seidel iteration with over-relaxation factor ``config.omg``.

    ``p`` and ``rhs`` should be float numpy arrays; ``p`` is updated in place.
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

    def _fluid_count(self) -> int:
        if self.config.total_n_fluid > 0:
            return self.config.total_n_fluid
        count = int(np.count_nonzero(_fluid_mask(self.types)))
        if count == 0:
            raise ValueError("the domain holds no fluid cells")
        return count

    def solve(self) -> SolveResult:
        """Iterate until the residual drops below ``eps`` or ``itermax`` is reached."""
        n_fluid = self._fluid_count()
        iterations = 0
        while True:
            iterations += 1
            self.sor()
            self.boundary_p(self.p, self.types)
            residual = float(np.sqrt(self.calculate_res() / n_fluid))
            if not (iterations < self.config.itermax and residual > self.config.eps):
                return SolveResult(iterations, residual)

    def sor(self) -> None:
        """Perform one in-place SOR sweep over the fluid cells."""
        cfg = self.config
        p, rs = self.p, self.rhs
        dxdx_inv = 1.0 / (cfg.dx * cfg.dx)
        dydy_inv = 1.0 / (cfg.dy * cfg.dy)
        omg = cfg.omg
        coeff = omg / (2.0 * (dxdx_inv + dydy_inv))
        for i in range(1, cfg.imax + 1):
            row = self.types[i]
            for j in range(1, cfg.jmax + 1):
                if row[j] is CellType.FLUID:
                    p[i, j] = (1.0 - omg) * p[i, j] + coeff * (
                        (p[i + 1, j] + p[i - 1, j]) * dxdx_inv
                        + (p[i, j + 1] + p[i, j - 1]) * dydy_inv
                        - rs[i, j]
                    )

    def calculate_res(self) -> float:
        """Sum of squared residuals over the fluid cells."""
        cfg = self.config
        p, rs = self.p, self.rhs
        imax, jmax = cfg.imax, cfg.jmax
        dxdx_inv = 1.0 / (cfg.dx * cfg.dx)
        dydy_inv = 1.0 / (cfg.dy * cfg.dy)
        centre = p[1 : imax + 1, 1 : jmax + 1]
        lap = (p[2 : imax + 2, 1 : jmax + 1] - 2.0 * centre + p[0:imax, 1 : jmax + 1]) * dxdx_inv + (
            p[1 : imax + 1, 2 : jmax + 2] - 2.0 * centre + p[1 : imax + 1, 0:jmax]
        ) * dydy_inv
        diff = lap - rs[1 : imax + 1, 1 : jmax + 1]
        mask = _fluid_mask(self.types)[1 : imax + 1, 1 : jmax + 1]
        return float(np.sum(diff[mask] ** 2))