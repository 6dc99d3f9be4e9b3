import numpy as np
import pytest

from flowlab.config import CellType, Config
from flowlab.splu import SparseLU


def make_types(imax, jmax, right=CellType.NOSLIP):
    types = [
        [
            CellType.FLUID if 1 <= i <= imax and 1 <= j <= jmax else CellType.NOSLIP
            for j in range(jmax + 2)
        ]
        for i in range(imax + 2)
    ]
    types[imax + 1] = [right] * (jmax + 2)
    return types


@pytest.fixture
def setup():
    cfg = Config(imax=4, jmax=3, dx=0.5, dy=0.25)
    rng = np.random.default_rng(7)
    rhs = rng.normal(size=(6, 5))
    types = make_types(4, 3, right=CellType.OUTLET)
    return cfg, rhs, types


def test_solution_satisfies_poisson_equation(setup):
    cfg, rhs, types = setup
    p = np.zeros((6, 5))
    solver = SparseLU(cfg, p, rhs, types)
    result = solver.solve()
    residual = solver.comp_residual(p, rhs, cfg.dx, cfg.dy)
    assert np.allclose(residual[1:-1, 1:-1], 0.0, atol=1e-9)
    assert result.residual < 1e-9


def test_wall_ghosts_copy_neighbours_and_outlet_stays(setup):
    cfg, rhs, types = setup
    p = np.zeros((6, 5))
    SparseLU(cfg, p, rhs, types).solve()
    assert np.array_equal(p[1:5, 0], p[1:5, 1])
    assert np.array_equal(p[1:5, 4], p[1:5, 3])
    assert np.array_equal(p[0, 1:4], p[1, 1:4])
    assert np.all(p[5, 1:4] == 0.0)


def test_result_independent_of_initial_interior(setup):
    cfg, rhs, types = setup
    p1 = np.zeros((6, 5))
    p2 = np.zeros((6, 5))
    p2[1:5, 1:4] = np.random.default_rng(1).normal(size=(4, 3))
    SparseLU(cfg, p1, rhs, types).solve()
    SparseLU(cfg, p2, rhs, types).solve()
    assert np.allclose(p1[1:5, 1:4], p2[1:5, 1:4])


def test_matrix_symmetric_and_row_sums(setup):
    cfg, rhs, types = setup
    solver = SparseLU(cfg, np.zeros((6, 5)), rhs, types)
    a = solver.matrix
    assert abs(a - a.T).max() == 0.0
    sums = np.asarray(a.sum(axis=1)).ravel()
    imax, jmax = 4, 3
    outlet_nodes = {j * imax + imax - 1 for j in range(jmax)}
    for node, value in enumerate(sums):
        expected = 1.0 / cfg.dx**2 if node in outlet_nodes else 0.0
        assert value == pytest.approx(expected, abs=1e-9)