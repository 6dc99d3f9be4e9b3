"""Comparison of two directories of VTK structured grid output files."""

from __future__ import annotations

import argparse
import sys
from os import PathLike
from pathlib import Path
from typing import Sequence

import numpy as np

from flowlab.files import FileIterator
from flowlab.vtkio import DataArray, read_structured_grid

POINT_TOLERANCE = 1e-4
VALUE_TOLERANCE = 1e-6


def _close(a: np.ndarray, b: np.ndarray, tolerance: float) -> bool:
    return bool(np.all(np.abs(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)) < tolerance))


def _compare_arrays(
    kind: str,
    reference_arrays: dict[str, DataArray],
    current_arrays: dict[str, DataArray],
    reference: Path,
    current: Path,
) -> list[str]:
    errors: list[str] = []
    for name, expected in reference_arrays.items():
        actual = current_arrays.get(name)
        if actual is None:
            errors.append(
                f"The current solution {current} doesn't contain the {kind} array "
                f"{name} of the true solution {reference}"
            )
            continue
        if expected.values.size != actual.values.size:
            errors.append(
                f"The current solution {current} has not the same amount of values "
                f"as the true solution for array {name}"
            )
        for index, (row_t, row_c) in enumerate(zip(expected.values, actual.values)):
            if row_t.shape != row_c.shape or not _close(row_t, row_c, VALUE_TOLERANCE):
                errors.append(
                    f"The current solution {current} has not identical values at position "
                    f"{index} for array {name}\n"
                    f"Original Solution: {' '.join(str(x) for x in row_t)}\n"
                    f"Current Solution: {' '.join(str(x) for x in row_c)}"
                )
    return errors


def compare_files(
    reference: str | PathLike[str], current: str | PathLike[str]
) -> list[str]:
    """Compare a VTK file with a reference one; return the differences found.

    Points must agree to within 1e-4, data values to within 1e-6.
    An empty list means the files agree.
    """
    reference = Path(reference)
    current = Path(current)
    grid_t = read_structured_grid(reference)
    grid_c = read_structured_grid(current)
    errors: list[str] = []

    if grid_t.number_of_cells() != grid_c.number_of_cells():
        errors.append(
            f"The current solution {current} has not the same amount of values "
            "for the grid as the true solution."
        )

    for index, (p_t, p_c) in enumerate(zip(grid_t.points, grid_c.points)):
        if not _close(p_t, p_c, POINT_TOLERANCE):
            errors.append(
                f"The current solution {current} has not identical values for the grid "
                f"at position {index}"
            )

    errors.extend(_compare_arrays("cell", grid_t.cell_data, grid_c.cell_data, reference, current))
    errors.extend(_compare_arrays("point", grid_t.point_data, grid_c.point_data, reference, current))
    return errors


def compare_directories(
    origin: str | PathLike[str],
    current: str | PathLike[str],
    first: str,
    second: str,
) -> list[str]:
    """Compare every ``first`` file in ``origin`` with its counterpart in ``current``.

    Files are paired in sorted order; a reference file without a counterpart
    is reported as a difference.
    """
    reference_files = FileIterator(origin, first, False).paths
    current_files = FileIterator(current, second, False).paths
    errors: list[str] = []
    for position, reference in enumerate(reference_files):
        if position >= len(current_files):
            errors.append(f"There is no current solution to compare with {reference}")
            continue
        errors.extend(compare_files(reference, current_files[position]))
    return errors


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry: compare two folders of VTK files."""
    parser = argparse.ArgumentParser(
        prog="vtk-compare", description="Comparing two folders of VTK Files"
    )
    parser.add_argument(
        "-o", "--origin",
        help="Origin folder name of the vtk files e.g. folder/; this is the reference solution",
    )
    parser.add_argument(
        "-c", "--current",
        help="Folder name which contains the vtk files that should be compared e.g. dest/",
    )
    parser.add_argument(
        "-f", "--first",
        help="prefix of the vtk files in the origin (first) given folder e.g. cavity",
    )
    parser.add_argument(
        "-s", "--second",
        help="prefix of the vtk files in the current (second) given folder e.g. cavity",
    )
    args = parser.parse_args(argv)

    missing = [
        (args.origin, "Please provide the origin location of the vtk files"),
        (args.current, "Please provide the current location of the vtk files"),
        (args.first, "Please provide the prefix of the vtk files in the origin folder"),
        (args.second, "Please provide the prefix of the vtk files in the second folder"),
    ]
    for value, message in missing:
        if value is None:
            print(message)
            return 1

    try:
        errors = compare_directories(args.origin, args.current, args.first, args.second)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1

    if not errors:
        print("No errors detected")
        return 0
    for error in errors:
        print(error, file=sys.stderr)
    print("Errors detected", file=sys.stderr)
    return 1