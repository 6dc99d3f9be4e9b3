"""Merging of per-subdomain VTK output files into one file per time step."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Sequence

import numpy as np

from flowlab.files import FileIterator, get_rank, get_timestamp, get_unique, nomenclature
from flowlab.vtkio import DataArray, StructuredGrid, read_structured_grid, write_structured_grid

logger = logging.getLogger(__name__)

_FOLDER = re.compile(r"\S+/")
_SUFFIX = re.compile(r"[a-zA-Z]+")


@dataclass(frozen=True)
class _Layout:
    origin_x: float
    origin_y: float
    spacing_x: float
    spacing_y: float
    nx: int
    ny: int

    @property
    def cells(self) -> int:
        return (self.nx - 1) * (self.ny - 1)

    @property
    def points(self) -> int:
        return self.nx * self.ny

    def grid_points(self) -> np.ndarray:
        return np.array(
            [
                (self.origin_x + i * self.spacing_x, self.origin_y + j * self.spacing_y, 0.0)
                for j in range(self.ny)
                for i in range(self.nx)
            ]
        )

    def cell_index(self, centres: np.ndarray) -> np.ndarray:
        ci = np.floor((centres[:, 0] - self.origin_x) / self.spacing_x).astype(int)
        cj = np.floor((centres[:, 1] - self.origin_y) / self.spacing_y).astype(int)
        ci = np.clip(ci, 0, self.nx - 2)
        cj = np.clip(cj, 0, self.ny - 2)
        return cj * (self.nx - 1) + ci

    def point_index(self, coords: np.ndarray) -> np.ndarray:
        pi = np.rint((coords[:, 0] - self.origin_x) / self.spacing_x).astype(int)
        pj = np.rint((coords[:, 1] - self.origin_y) / self.spacing_y).astype(int)
        pi = np.clip(pi, 0, self.nx - 1)
        pj = np.clip(pj, 0, self.ny - 1)
        return pj * self.nx + pi


def _load(path: Path) -> StructuredGrid:
    grid = read_structured_grid(path)
    nx, ny, _ = grid.dimensions
    if nx < 2 or ny < 2:
        raise ValueError(f"{path} holds no two-dimensional grid")
    if "pressure" not in grid.cell_data:
        raise ValueError(f"{path} holds no pressure array")
    if "velocity" not in grid.point_data:
        raise ValueError(f"{path} holds no velocity array")
    return grid


def _local_points(grid: StructuredGrid) -> np.ndarray:
    nx, ny, _ = grid.dimensions
    return grid.points.reshape(ny, nx, 3)


def _layout(grids: list[StructuredGrid]) -> _Layout:
    first = _local_points(grids[0])
    spacing_x = float(first[0, 1, 0] - first[0, 0, 0])
    spacing_y = float(first[1, 0, 1] - first[0, 0, 1])
    if spacing_x <= 0 or spacing_y <= 0:
        raise ValueError("the subdomain grids have no positive spacing")
    coords = np.concatenate([grid.points for grid in grids])
    x0, y0 = float(coords[:, 0].min()), float(coords[:, 1].min())
    x1, y1 = float(coords[:, 0].max()), float(coords[:, 1].max())
    nx = int(round((x1 - x0) / spacing_x)) + 1
    ny = int(round((y1 - y0) / spacing_y)) + 1
    return _Layout(x0, y0, spacing_x, spacing_y, nx, ny)


def merge_directory(
    origin: str | PathLike[str],
    destination: str | PathLike[str],
    prefix: str = "cavity_",
    suffix: str = "vtk",
) -> list[Path]:
    """Merge ``<prefix><rank>.<step>.<suffix>`` files into ``<prefix><step>.<suffix>``.

    Pressure and velocity of every rank are placed into one global grid per
    time step, written to ``destination``. Returns the written paths.
    """
    if not _SUFFIX.fullmatch(suffix):
        raise ValueError("The provided suffix contains a non alphabetic value e.g.: .;/;")
    origin = Path(origin)
    destination = Path(destination) if str(destination) else Path(".")

    paths = FileIterator(origin, prefix, True).paths
    if not paths:
        raise ValueError(f"{origin} holds no files with prefix {prefix!r}")
    expected = f"{prefix}0.0.{suffix}"
    if paths[0].name != expected:
        raise ValueError(
            f"The first file in the target directory is {paths[0].name}, expected {expected}"
        )

    timesteps = get_unique(paths, get_timestamp)
    ranks = get_unique(paths, get_rank)

    def files_for(step: int) -> list[Path]:
        return [origin / f"{prefix}{rank}.{step}.{suffix}" for rank in ranks]

    layout = _layout([_load(path) for path in files_for(timesteps[0])])
    global_points = layout.grid_points()
    destination.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for step in timesteps:
        logger.info("Merging TS: %d", step)
        pressure = np.zeros(layout.cells)
        velocity = np.zeros((layout.points, 3))
        for path in files_for(step):
            local = _load(path)
            pts = _local_points(local)
            centres = ((pts[:-1, :-1] + pts[1:, 1:]) / 2.0).reshape(-1, 3)
            pressure[layout.cell_index(centres)] = local.cell_data["pressure"].values[:, 0]
            velocity[layout.point_index(local.points)] = local.point_data["velocity"].values[:, :3]

        merged = StructuredGrid(
            (layout.nx, layout.ny, 1),
            global_points,
            point_data={"velocity": DataArray("velocity", velocity, "float")},
            cell_data={"pressure": DataArray("pressure", pressure, "float")},
            title="merged subdomains",
        )
        output = destination / f"{prefix}{step}.{suffix}"
        write_structured_grid(merged, output)
        written.append(output)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry: merge subdomain VTK files into global ones."""
    parser = argparse.ArgumentParser(
        prog="vtk-merge",
        description="Merging vtk files for different subdomains back into one main vtk files",
        epilog=nomenclature(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-o", "--origin", help="Origin Folder of the vtk files e.g. folder/")
    parser.add_argument(
        "-d", "--destination", default="",
        help="Destination Folder, by default the current folder e.g. dest/",
    )
    parser.add_argument("-p", "--prefix", default="cavity_", help="prefix of the vtk files")
    parser.add_argument("-s", "--suffix", default="vtk", help="suffix of the vtk files")
    args = parser.parse_args(argv)

    if args.origin is None:
        print("Please provide the origin location of the subdomain vtk files")
        print("run vtk-merge --help for more information")
        return 1
    if not _FOLDER.fullmatch(args.origin):
        print(
            "The provided path contains either whitespaces or doesn't have a trailing slash"
        )
        return 1
    if not _SUFFIX.fullmatch(args.suffix):
        print("The provided suffix contains a non alphabetic value e.g.: .;/;")
        return 1

    print(f"Origin {args.origin}")
    print(f"prefix {args.prefix}")
    print(f"suffix {args.suffix}")
    try:
        written = merge_directory(args.origin, args.destination, args.prefix, args.suffix)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    for path in written:
        print(f"Merged {path}")
    return 0