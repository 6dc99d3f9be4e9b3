"""Reading and writing of legacy ASCII VTK structured grid files."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

import numpy as np

_INTEGER_TYPES = frozenset(
    {
        "bit",
        "char",
        "unsigned_char",
        "short",
        "unsigned_short",
        "int",
        "unsigned_int",
        "long",
        "unsigned_long",
        "vtkidtype",
        "vtktypeint64",
        "vtktypeuint64",
    }
)


@dataclass
class DataArray:
    """A named array of tuples; ``values`` has shape ``(tuples, components)``."""

    name: str
    values: np.ndarray
    data_type: str = "float"

    def __post_init__(self) -> None:
        values = np.asarray(self.values)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        if values.ndim != 2:
            raise ValueError(f"array {self.name!r} must be one- or two-dimensional")
        self.values = values


@dataclass
class StructuredGrid:
    """Points on a logically rectangular grid with point and cell attributes."""

    dimensions: tuple[int, int, int]
    points: np.ndarray
    point_data: dict[str, DataArray] = field(default_factory=dict)
    cell_data: dict[str, DataArray] = field(default_factory=dict)
    title: str = ""

    def __post_init__(self) -> None:
        self.dimensions = tuple(int(d) for d in self.dimensions)
        if len(self.dimensions) != 3:
            raise ValueError("a structured grid needs three dimensions")
        self.points = np.asarray(self.points, dtype=float).reshape(-1, 3)

    def number_of_points(self) -> int:
        """Number of grid points given by the dimensions."""
        return math.prod(self.dimensions)

    def number_of_cells(self) -> int:
        """Number of cells given by the dimensions."""
        if any(d <= 0 for d in self.dimensions):
            return 0
        counts = [d - 1 for d in self.dimensions if d > 1]
        if not counts:
            return 1
        return math.prod(counts)


class _Tokens:
    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    def peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def next(self) -> str:
        if self._pos >= len(self._tokens):
            raise ValueError("unexpected end of VTK file")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def integer(self) -> int:
        token = self.next()
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, found {token!r}") from None

    def numbers(self, count: int, data_type: str) -> np.ndarray:
        end = self._pos + count
        if end > len(self._tokens):
            raise ValueError("unexpected end of VTK file")
        chunk = self._tokens[self._pos : end]
        self._pos = end
        values = np.array([float(token) for token in chunk], dtype=float)
        if data_type.lower() in _INTEGER_TYPES:
            return values.astype(np.int64)
        return values


def _strip_metadata(lines: list[str]) -> list[str]:
    kept: list[str] = []
    skipping = False
    for line in lines:
        stripped = line.strip()
        if skipping:
            if not stripped:
                skipping = False
            continue
        if stripped.upper() == "METADATA":
            skipping = True
            continue
        kept.append(line)
    return kept


def _read_array(tokens: _Tokens, name: str, data_type: str, tuples: int, components: int) -> DataArray:
    values = tokens.numbers(tuples * components, data_type)
    return DataArray(name, values.reshape(tuples, components), data_type)


def read_structured_grid(path: str | PathLike[str]) -> StructuredGrid:
    """Read a legacy ASCII VTK file holding a structured grid.

    Raises ``ValueError`` when the file is not such a file or is malformed.
    """
    lines = Path(path).read_text().splitlines()
    if len(lines) < 3 or not lines[0].startswith("# vtk DataFile"):
        raise ValueError(f"{path} is not a legacy VTK file")
    title = lines[1].strip()
    if lines[2].strip().upper() != "ASCII":
        raise ValueError(f"{path} is not in ASCII format")

    tokens = _Tokens([tok for line in _strip_metadata(lines[3:]) for tok in line.split()])
    dataset_seen = False
    dimensions: tuple[int, int, int] | None = None
    points: np.ndarray | None = None
    point_data: dict[str, DataArray] = {}
    cell_data: dict[str, DataArray] = {}
    current: dict[str, DataArray] | None = None
    count = 0

    while tokens.peek() is not None:
        key = tokens.next().upper()
        if key == "DATASET":
            kind = tokens.next()
            if kind.upper() != "STRUCTURED_GRID":
                raise ValueError(f"unsupported dataset {kind}")
            dataset_seen = True
        elif key == "DIMENSIONS":
            dimensions = (tokens.integer(), tokens.integer(), tokens.integer())
        elif key == "POINTS":
            n = tokens.integer()
            data_type = tokens.next()
            points = tokens.numbers(3 * n, data_type).astype(float).reshape(n, 3)
        elif key in ("POINT_DATA", "CELL_DATA"):
            current = point_data if key == "POINT_DATA" else cell_data
            count = tokens.integer()
        elif key in ("SCALARS", "VECTORS", "NORMALS"):
            if current is None:
                raise ValueError(f"{key} outside of a data section")
            name = tokens.next()
            data_type = tokens.next()
            components = 3
            if key == "SCALARS":
                components = 1
                following = tokens.peek()
                if following is not None and following.isdigit():
                    components = tokens.integer()
                following = tokens.peek()
                if following is not None and following.upper() == "LOOKUP_TABLE":
                    tokens.next()
                    tokens.next()
            current[name] = _read_array(tokens, name, data_type, count, components)
        elif key == "FIELD":
            tokens.next()
            for _ in range(tokens.integer()):
                name = tokens.next()
                components = tokens.integer()
                tuples = tokens.integer()
                data_type = tokens.next()
                array = _read_array(tokens, name, data_type, tuples, components)
                if current is not None:
                    current[name] = array
        else:
            raise ValueError(f"unsupported section {key}")

    if not dataset_seen or dimensions is None or points is None:
        raise ValueError(f"{path} holds no complete structured grid")
    grid = StructuredGrid(dimensions, points, point_data, cell_data, title)
    if len(grid.points) != grid.number_of_points():
        raise ValueError("number of points does not match the dimensions")
    for array in point_data.values():
        if array.values.shape[0] != grid.number_of_points():
            raise ValueError(f"point array {array.name!r} has the wrong length")
    for array in cell_data.values():
        if array.values.shape[0] != grid.number_of_cells():
            raise ValueError(f"cell array {array.name!r} has the wrong length")
    return grid


def _format(value, integer: bool) -> str:
    return str(int(value)) if integer else repr(float(value))


def _array_lines(array: DataArray, expected: int) -> list[str]:
    tuples, components = array.values.shape
    if tuples != expected:
        raise ValueError(f"array {array.name!r} has {tuples} tuples, expected {expected}")
    integer = array.data_type.lower() in _INTEGER_TYPES
    if components == 3:
        lines = [f"VECTORS {array.name} {array.data_type}"]
    else:
        lines = [f"SCALARS {array.name} {array.data_type} {components}", "LOOKUP_TABLE default"]
    lines.extend(" ".join(_format(x, integer) for x in row) for row in array.values)
    return lines


def write_structured_grid(grid: StructuredGrid, path: str | PathLike[str]) -> None:
    """Write ``grid`` as a legacy ASCII VTK file."""
    if len(grid.points) != grid.number_of_points():
        raise ValueError("number of points does not match the dimensions")
    nx, ny, nz = grid.dimensions
    title = " ".join((grid.title or "vtk output").split())
    lines = [
        "# vtk DataFile Version 3.0",
        title,
        "ASCII",
        "DATASET STRUCTURED_GRID",
        f"DIMENSIONS {nx} {ny} {nz}",
        f"POINTS {len(grid.points)} float",
    ]
    lines.extend(" ".join(_format(x, False) for x in row) for row in grid.points)
    if grid.cell_data:
        cells = grid.number_of_cells()
        lines.append(f"CELL_DATA {cells}")
        for array in grid.cell_data.values():
            lines.extend(_array_lines(array, cells))
    if grid.point_data:
        n_points = grid.number_of_points()
        lines.append(f"POINT_DATA {n_points}")
        for array in grid.point_data.values():
            lines.extend(_array_lines(array, n_points))
    Path(path).write_text("\n".join(lines) + "\n")