import numpy as np
import pytest

from flowlab.config import CellType, Config
from flowlab.temperature import calculate_t


def make_types(imax, jmax):
    return [
        [
            CellType.FLUID if 1 <= i <= imax and 1 <= j <= jmax else CellType.NOSLIP
            for j in range(jmax + 2)
        ]
        for i in range(imax + 2)
    ]


@pytest.fixture
def cfg():
    return Config(imax=5, jmax=5, dx=0.1, dy=0.1, dt=0.001, re=100, pr=1.0, alpha=0.5)


def test_uniform_temperature_with_uniform_flow_is_steady(cfg):
    t = np.full((7, 7), 3.0)
    u = np.full((7, 7), 0.7)
    v = np.full((7, 7), -0.2)
    t_hat = calculate_t(cfg, t, u, v, make_types(5, 5))
    assert np.allclose(t_hat[1:-1, 1:-1], 3.0)
    assert np.all(t_hat[0, :] == 0.0)
    assert np.all(t_hat[:, -1] == 0.0)


def test_linear_profile_without_flow_is_steady(cfg):
    t = np.array([[float(i) for _ in range(7)] for i in range(7)])
    zero = np.zeros((7, 7))
    t_hat = calculate_t(cfg, t, zero, zero, make_types(5, 5))
    assert np.allclose(t_hat[1:-1, 1:-1], t[1:-1, 1:-1])


def test_diffusion_spreads_peak_and_conserves_heat(cfg):
    t = np.zeros((7, 7))
    t[3, 3] = 1.0
    zero = np.zeros((7, 7))
    t_hat = calculate_t(cfg, t, zero, zero, make_types(5, 5))
    assert t_hat[3, 3] < 1.0
    assert t_hat[2, 3] > 0.0
    assert t_hat[3, 4] > 0.0
    assert np.sum(t_hat[1:-1, 1:-1]) == pytest.approx(np.sum(t[1:-1, 1:-1]))


def test_obstacle_cell_is_zeroed(cfg):
    types = make_types(5, 5)
    types[2][2] = CellType.NOSLIP
    t = np.full((7, 7), 3.0)
    zero = np.zeros((7, 7))
    t_hat = calculate_t(cfg, t, zero, zero, types)
    assert t_hat[2, 2] == 0.0
    assert t_hat[3, 3] == pytest.approx(3.0)