"""Momentum, right-hand side, time step and velocity update."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from flowlab.config import CellType, Config

_PASSABLE = frozenset({CellType.FLUID, CellType.INLET, CellType.OUTLET})
_WALLS = frozenset({CellType.FREESLIP, CellType.NOSLIP, CellType.LID})
_OPENINGS = frozenset({CellType.INLET, CellType.OUTLET})


def _mask(types: Sequence[Sequence[CellType]], *kinds: CellType) -> np.ndarray:
    wanted = set(kinds)
    return np.array([[cell in wanted for cell in row] for row in types], dtype=bool)


def calculate_fg(
    config: Config,
    f: np.ndarray,
    g: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    t: np.ndarray,
    types: Sequence[Sequence[CellType]],
) -> None:
    """Compute the intermediate velocities F and G in place.

    ``f`` and ``g`` must be float numpy arrays of shape ``(imax + 2, jmax + 2)``.
    """
    imax, jmax = config.imax, config.jmax
    dx, dy, dt, re, alpha = config.dx, config.dy, config.dt, config.re, config.alpha
    fluid = _mask(types, CellType.FLUID)

    ic, ip, im = slice(1, imax + 1), slice(2, imax + 2), slice(0, imax)
    jc, jp, jm = slice(1, jmax + 1), slice(2, jmax + 2), slice(0, jmax)

    u_ij, u_ip1j, u_im1j = u[ic, jc], u[ip, jc], u[im, jc]
    u_ijp1, u_ijm1, u_im1jp1 = u[ic, jp], u[ic, jm], u[im, jp]
    v_ij, v_ip1j, v_im1j = v[ic, jc], v[ip, jc], v[im, jc]
    v_ijp1, v_ijm1, v_ip1jm1 = v[ic, jp], v[ic, jm], v[ip, jm]
    t_ij, t_ip1j, t_ijp1 = t[ic, jc], t[ip, jc], t[ic, jp]

    d2udx2 = (u_ip1j - 2 * u_ij + u_im1j) / (dx * dx)
    d2udy2 = (u_ijp1 - 2 * u_ij + u_ijm1) / (dy * dy)
    du2dx = (
        (u_ij + u_ip1j) ** 2
        - (u_im1j + u_ij) ** 2
        + alpha
        * (np.abs(u_ij + u_ip1j) * (u_ij - u_ip1j) - np.abs(u_im1j + u_ij) * (u_im1j - u_ij))
    ) / (4 * dx)
    duvdy = (
        (v_ij + v_ip1j) * (u_ij + u_ijp1)
        - (v_ijm1 + v_ip1jm1) * (u_ijm1 + u_ij)
        + alpha
        * (
            np.abs(v_ij + v_ip1j) * (u_ij - u_ijp1)
            - np.abs(v_ijm1 + v_ip1jm1) * (u_ijm1 - u_ij)
        )
    ) / (4 * dy)
    f_new = u_ij + dt * ((d2udx2 + d2udy2) / re - du2dx - duvdy)
    if config.calc_temp:
        f_new = f_new - config.beta * 0.5 * dt * (t_ij + t_ip1j) * config.gx
    f[ic, jc] = np.where(fluid[ic, jc] & fluid[ip, jc], f_new, f[ic, jc])

    d2vdx2 = (v_ip1j - 2 * v_ij + v_im1j) / (dx * dx)
    d2vdy2 = (v_ijp1 - 2 * v_ij + v_ijm1) / (dy * dy)
    dv2dy = (
        (v_ij + v_ijp1) ** 2
        - (v_ijm1 + v_ij) ** 2
        + alpha
        * (np.abs(v_ij + v_ijp1) * (v_ij - v_ijp1) - np.abs(v_ijm1 + v_ij) * (v_ijm1 - v_ij))
    ) / (4 * dy)
    duvdx = (
        (u_ij + u_ijp1) * (v_ij + v_ip1j)
        - (u_im1j + u_im1jp1) * (v_im1j + v_ij)
        + alpha
        * (
            np.abs(u_ij + u_ijp1) * (v_ij - v_ip1j)
            - np.abs(u_im1j + u_im1jp1) * (v_im1j - v_ij)
        )
    ) / (4 * dx)
    g_new = v_ij + dt * ((d2vdx2 + d2vdy2) / re - dv2dy - duvdx)
    if config.calc_temp:
        g_new = g_new - config.beta * 0.5 * dt * (t_ij + t_ijp1) * config.gy
    g[ic, jc] = np.where(fluid[ic, jc] & fluid[ic, jp], g_new, g[ic, jc])

    _apply_boundary_fg(imax, jmax, f, g, u, v, types)


def _apply_boundary_fg(imax, jmax, f, g, u, v, types) -> None:
    """Copy velocities into F and G on faces between obstacles and the flow."""

    def neighbour(i: int, j: int) -> CellType | None:
        if 0 <= i <= imax + 1 and 0 <= j <= jmax + 1:
            return types[i][j]
        return None

    for i in range(imax + 2):
        for j in range(jmax + 2):
            kind = types[i][j]
            if kind in _WALLS:
                accepted = _PASSABLE
            elif kind in _OPENINGS:
                accepted = frozenset({CellType.FLUID})
            else:
                continue
            if neighbour(i, j + 1) in accepted:
                g[i, j] = v[i, j]
            if neighbour(i, j - 1) in accepted:
                g[i, j - 1] = v[i, j - 1]
            if neighbour(i - 1, j) in accepted:
                f[i - 1, j] = u[i - 1, j]
            if neighbour(i + 1, j) in accepted:
                f[i, j] = u[i, j]


def calculate_rs(config: Config, f: np.ndarray, g: np.ndarray, rs: np.ndarray) -> None:
    """Fill the interior of ``rs`` with the right-hand side of the pressure equation."""
    imax, jmax = config.imax, config.jmax
    ic, im = slice(1, imax + 1), slice(0, imax)
    jc, jm = slice(1, jmax + 1), slice(0, jmax)
    rs[ic, jc] = (
        (f[ic, jc] - f[im, jc]) / config.dx + (g[ic, jc] - g[ic, jm]) / config.dy
    ) * (1 / config.dt)


def calculate_dt(config: Config, u: np.ndarray, v: np.ndarray) -> float:
    """Set ``config.dt`` from the stability conditions and return it.

    With ``tau <= 0`` the time step is left as it is.
    """
    if config.tau <= 0:
        return config.dt

    u_max = float(np.max(np.abs(u)))
    v_max = float(np.max(np.abs(v)))
    dx2 = config.dx * config.dx
    dy2 = config.dy * config.dy
    dt1 = (config.re // 2) / (1 / dx2 + 1 / dy2)
    dt2 = config.dx / u_max if u_max else math.inf
    dt3 = config.dy / v_max if v_max else math.inf
    dt4 = math.inf
    if config.calc_temp:
        dt4 = ((config.re * config.pr) / 2.0) * ((dx2 * dy2) / (dx2 + dy2))

    config.dt = config.tau * min(dt1, dt2, dt3, dt4)
    return config.dt


def calculate_uv(
    config: Config,
    f: np.ndarray,
    g: np.ndarray,
    p: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    types: Sequence[Sequence[CellType]],
) -> None:
    """Update ``u`` and ``v`` in place from F, G and the new pressure."""
    imax, jmax = config.imax, config.jmax
    ic, ip = slice(1, imax + 1), slice(2, imax + 2)
    jc, jp = slice(1, jmax + 1), slice(2, jmax + 2)
    fluid = _mask(types, CellType.FLUID)
    outlet = _mask(types, CellType.OUTLET)

    u_new = f[ic, jc] - (config.dt / config.dx) * (p[ip, jc] - p[ic, jc])
    u_mask = fluid[ic, jc] & (fluid[ip, jc] | outlet[ip, jc])
    u[ic, jc] = np.where(u_mask, u_new, u[ic, jc])

    v_new = g[ic, jc] - (config.dt / config.dy) * (p[ic, jp] - p[ic, jc])
    v_mask = fluid[ic, jc] & fluid[ic, jp]
    v[ic, jc] = np.where(v_mask, v_new, v[ic, jc])