"""Explicit time step of the energy equation."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from flowlab.config import CellType, Config
from flowlab.solver import _fluid_mask


def calculate_t(
    config: Config,
    t: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    types: Sequence[Sequence[CellType]],
) -> np.ndarray:
    """Return the temperature after one time step.

    Fluid cells are advanced with donor-cell convection and central diffusion;
    every other cell, the ghost layer included, is zero in the result.
    """
    t = np.asarray(t, dtype=float)
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    alpha, dx, dy = config.alpha, config.dx, config.dy

    t_ij = t[1:-1, 1:-1]
    t_ip1j = t[2:, 1:-1]
    t_im1j = t[:-2, 1:-1]
    t_ijp1 = t[1:-1, 2:]
    t_ijm1 = t[1:-1, :-2]
    u_ij = u[1:-1, 1:-1]
    u_im1j = u[:-2, 1:-1]
    v_ij = v[1:-1, 1:-1]
    v_ijm1 = v[1:-1, :-2]

    du_t_dx = (
        u_ij * (t_ij + t_ip1j)
        - u_im1j * (t_im1j + t_ij)
        + alpha * (np.abs(u_ij) * (t_ij - t_ip1j) - np.abs(u_im1j) * (t_im1j - t_ij))
    ) * 0.5 / dx
    dv_t_dy = (
        v_ij * (t_ij + t_ijp1)
        - v_ijm1 * (t_ijm1 + t_ij)
        + alpha * (np.abs(v_ij) * (t_ij - t_ijp1) - np.abs(v_ijm1) * (t_ijm1 - t_ij))
    ) * 0.5 / dy
    d2t_dx2 = (t_ip1j - 2 * t_ij + t_im1j) / (dx * dx)
    d2t_dy2 = (t_ijp1 - 2 * t_ij + t_ijm1) / (dy * dy)
    dt_dt = (d2t_dx2 + d2t_dy2) / (config.pr * config.re) - du_t_dx - dv_t_dy

    t_hat = np.zeros_like(t)
    fluid = _fluid_mask(types)[1:-1, 1:-1]
    t_hat[1:-1, 1:-1] = np.where(fluid, t_ij + config.dt * dt_dt, 0.0)
    return t_hat