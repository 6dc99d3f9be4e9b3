import numpy as np
import pytest

from flowlab.config import CellType, Config, SolverType
from flowlab.factory import create_solver
from flowlab.sor import SOR
from flowlab.splu import SparseLU


def make_types(imax, jmax):
    types = [
        [
            CellType.FLUID if 1 <= i <= imax and 1 <= j <= jmax else CellType.NOSLIP
            for j in range(jmax + 2)
        ]
        for i in range(imax + 2)
    ]
    types[imax + 1] = [CellType.OUTLET] * (jmax + 2)
    return types


def make_config(kind):
    return Config(
        imax=3, jmax=3, dx=1.0, dy=1.0, omg=1.7, eps=1e-8, itermax=5000, solver=kind
    )


def test_sor_is_created_and_converges():
    cfg = make_config(SolverType.SOR)
    p = np.zeros((5, 5))
    rhs = np.random.default_rng(3).normal(size=(5, 5))
    solver = create_solver(cfg, p, rhs, make_types(3, 3))
    assert isinstance(solver, SOR)
    result = solver.solve()
    assert result.residual <= cfg.eps
    assert result.iterations < cfg.itermax


def test_splu_is_created_and_solves_in_place():
    cfg = make_config(SolverType.SPLU)
    p = np.zeros((5, 5))
    rhs = np.random.default_rng(4).normal(size=(5, 5))
    solver = create_solver(cfg, p, rhs, make_types(3, 3))
    assert isinstance(solver, SparseLU)
    solver.solve()
    residual = solver.comp_residual(p, rhs, 1.0, 1.0)
    assert np.allclose(residual[1:-1, 1:-1], 0.0, atol=1e-9)


@pytest.mark.parametrize("kind", [SolverType.NONE, SolverType.MULTIGRID, SolverType.CG])
def test_unavailable_solver_raises(kind):
    cfg = make_config(kind)
    with pytest.raises(ValueError):
        create_solver(cfg, np.zeros((5, 5)), np.zeros((5, 5)), make_types(3, 3))