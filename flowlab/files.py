"""Listing of VTK output files and extraction of ranks and time steps from their names."""

from __future__ import annotations

import logging
import re
from os import PathLike
from pathlib import Path
from typing import Callable, Iterable, Iterator

logger = logging.getLogger(__name__)

_MERGED_NAME = re.compile(r"[a-zA-Z]+_[0-9].[0-9]+.vtk")
_SINGLE_NAME = re.compile(r"[a-zA-Z]+\.[0-9]+\.vtk")
_TIMESTAMP = re.compile(r"\b[0-9]+")
_RANK = re.compile(r"\B[0-9]+\.")

_NOMENCLATURE = (
    "   Nomenclature \n \n"
    "   Rank <---+ +--> Timestep \n"
    "            | |            \n"
    "            | |            \n"
    "     cavity_1.10.vtk       \n"
    "     -------               \n"
    "        |                  \n"
    "        |                  \n"
    "        |                  \n"
    "     prefix  \n"
)


class FileIterator:
    """The sorted entries of a directory whose names contain ``prefix``.

    With ``merge`` the names are expected as ``<prefix>_<rank>.<step>.vtk``,
    otherwise as ``<prefix>.<step>.vtk``; names that differ are logged and
    collected in ``mismatched``.
    """

    def __init__(self, directory: str | PathLike[str], prefix: str, merge: bool) -> None:
        pattern = _MERGED_NAME if merge else _SINGLE_NAME
        self.paths: list[Path] = sorted(
            entry for entry in Path(directory).iterdir() if prefix in entry.name
        )
        self.mismatched: list[Path] = [
            entry for entry in self.paths if not pattern.fullmatch(entry.name)
        ]
        for entry in self.mismatched:
            logger.warning("%s did not match file type", entry.name)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def compare(self, other: Iterable[str | PathLike[str]]) -> bool:
        """Whether ``other`` lists the same file names in the same order."""
        other_paths = [Path(entry) for entry in other]
        if len(other_paths) < len(self.paths):
            return False
        return all(a.name == b.name for a, b in zip(self.paths, other_paths))


def get_timestamp(path: str | PathLike[str]) -> int:
    """Time step encoded in a file name such as ``cavity_1.10.vtk``."""
    name = Path(path).name
    match = _TIMESTAMP.search(name)
    if match is None:
        raise ValueError(f"no time step in {name!r}")
    return int(match.group(0))


def get_rank(path: str | PathLike[str]) -> int:
    """Rank encoded in a file name such as ``cavity_1.10.vtk``."""
    name = Path(path).name
    match = _RANK.search(name)
    if match is None:
        raise ValueError(f"no rank in {name!r}")
    return int(match.group(0)[:-1])


def get_unique(
    paths: Iterable[str | PathLike[str]], func: Callable[[str | PathLike[str]], int]
) -> list[int]:
    """Sorted distinct values of ``func`` over ``paths``."""
    return sorted({func(entry) for entry in paths})


def subset(values: list[int], n: int) -> list[int]:
    """The first ``n`` values; raises ``IndexError`` when there are fewer."""
    if n > len(values):
        raise IndexError(f"requested {n} values from a list of {len(values)}")
    return list(values[:n])


def nomenclature() -> str:
    """Explanation of how ranks and time steps appear in file names."""
    return _NOMENCLATURE