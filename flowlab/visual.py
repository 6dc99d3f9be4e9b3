"""Output of simulation fields as legacy ASCII VTK structured grids."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Sequence, TextIO

import numpy as np

from flowlab.config import Config


def _as_int(value) -> int:
    return int(value.value) if isinstance(value, Enum) else int(value)


def write_vtk_header(stream: TextIO, imax: int, jmax: int, dx: float, dy: float) -> None:
    """Write the file header and the grid dimensions for ``imax`` x ``jmax`` cells."""
    stream.write("# vtk DataFile Version 2.0\n")
    stream.write("generated by flowlab output \n")
    stream.write("ASCII\n")
    stream.write("\n")
    stream.write("DATASET STRUCTURED_GRID\n")
    stream.write(f"DIMENSIONS  {imax + 1} {jmax + 1} 1 \n")
    stream.write(f"POINTS {(imax + 1) * (jmax + 1)} float\n")
    stream.write("\n")


def write_vtk_point_coordinates(
    stream: TextIO, imax: int, jmax: int, il: int, jb: int, dx: float, dy: float
) -> None:
    """Write the grid point coordinates of a subdomain starting at cell ``(il, jb)``."""
    origin_x = (il - 1) * dx
    origin_y = (jb - 1) * dy
    stream.writelines(
        f"{origin_x + i * dx:f} {origin_y + j * dy:f} 0\n"
        for j in range(jmax + 1)
        for i in range(imax + 1)
    )


def write_vtk_file(
    problem: str,
    timestep: int,
    config: Config,
    u: np.ndarray,
    v: np.ndarray,
    p: np.ndarray,
    t: np.ndarray,
    geometry: Sequence[Sequence[int]],
) -> Path:
    """Write velocity, pressure, temperature and domain to ``<problem>.<timestep>.vtk``.

    Temperature is written only when ``config.calc_temp`` is positive.
    Returns the path of the written file.
    """
    imax, jmax = config.imax, config.jmax
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    p = np.asarray(p, dtype=float)
    path = Path(f"{problem}.{timestep}.vtk")

    with path.open("w") as fp:
        write_vtk_header(fp, imax, jmax, config.dx, config.dy)
        write_vtk_point_coordinates(fp, imax, jmax, config.il, config.jb, config.dx, config.dy)

        fp.write(f"POINT_DATA {(imax + 1) * (jmax + 1)} \n")
        fp.write("\n")
        fp.write("VECTORS velocity float\n")
        fp.writelines(
            f"{(u[i, j] + u[i, j + 1]) * 0.5:f} {(v[i, j] + v[i + 1, j]) * 0.5:f} 0\n"
            for j in range(jmax + 1)
            for i in range(imax + 1)
        )

        fp.write("\n")
        fp.write(f"CELL_DATA {imax * jmax} \n")
        fp.write("SCALARS pressure float 1 \n")
        fp.write("LOOKUP_TABLE default \n")
        fp.writelines(
            f"{p[i, j]:f}\n" for j in range(1, jmax + 1) for i in range(1, imax + 1)
        )

        if config.calc_temp > 0:
            temperature = np.asarray(t, dtype=float)
            fp.write("\n")
            fp.write("SCALARS temperature float 1 \n")
            fp.write("LOOKUP_TABLE default \n")
            fp.writelines(
                f"{temperature[i, j]:f}\n"
                for j in range(1, jmax + 1)
                for i in range(1, imax + 1)
            )

        fp.write("\n")
        fp.write("SCALARS domain int 1 \n")
        fp.write("LOOKUP_TABLE default \n")
        fp.writelines(
            f"{_as_int(geometry[i][j])}\n"
            for j in range(1, jmax + 1)
            for i in range(1, imax + 1)
        )

    return path