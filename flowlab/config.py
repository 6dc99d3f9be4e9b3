"""Simulation configuration and the enumerations shared across the solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SolverType(Enum):
    """Pressure solver used for the Poisson equation."""

    NONE = 0
    SOR = 1
    MULTIGRID = 2
    CG = 3
    SPLU = 4


class VelocityType(Enum):
    """Velocity component."""

    U = 0
    V = 1


class BorderPosition(Enum):
    """Position of a domain border."""

    TOP = 0
    BOTTOM = 1
    LEFT = 2
    RIGHT = 3


class NeighbourPosition(Enum):
    """Position of a neighbouring cell or subdomain."""

    TOP = 0
    BOTTOM = 1
    LEFT = 2
    RIGHT = 3


class CellType(Enum):
    """Kind of a grid cell."""

    FLUID = 1
    NOSLIP = 2
    INLET = 3
    OUTLET = 4
    FREESLIP = 5
    LID = 6


class BoundaryType(Enum):
    """Orientation of a boundary cell relative to the fluid."""

    B_N = 0
    B_E = 1
    B_S = 2
    B_W = 3
    B_NE = 4
    B_NW = 5
    B_SE = 6
    B_SW = 7
    UNSET = 8


class MatrixSelection(Enum):
    """Selects a row or a column of a matrix."""

    ROW = 0
    COLUMN = 1


class ReadType(Enum):
    """Type of a value read from a parameter file."""

    INT = 0
    DOUBLE = 1


@dataclass
class Config:
    """All parameters of a simulation run and of the local subdomain."""

    xlength: int = 0
    ylength: int = 0
    re: int = 0
    itermax: int = 0
    imax: int = 0
    jmax: int = 0
    l_imax: int = 0
    l_jmax: int = 0
    calc_temp: int = 0
    iproc: int = 1
    jproc: int = 1
    levels: int = 0
    n_fluid: int = 0
    total_n_fluid: int = 0
    boundary_size: int = 0

    num_proc: int = 1
    rank: int = 0
    rank_l: int = -1
    rank_r: int = -1
    rank_t: int = -1
    rank_b: int = -1

    il: int = 0
    ir: int = 0
    jb: int = 0
    jt: int = 0

    omg_i: int = 0
    omg_j: int = 0

    t_end: float = 0.0
    dt: float = 0.0
    omg: float = 0.0
    eps: float = 0.0
    tau: float = 0.0
    alpha: float = 0.0
    dt_value: float = 0.0
    ui: float = 0.0
    vi: float = 0.0
    gx: float = 0.0
    gy: float = 0.0
    pi: float = 0.0
    pr: float = 0.0
    ti: float = 0.0
    t_h: float = 0.0
    t_c: float = 0.0
    beta: float = 0.0
    dx: float = 0.0
    dy: float = 0.0

    solver: SolverType = SolverType.NONE
    problem: str = ""
    geometry: str = ""