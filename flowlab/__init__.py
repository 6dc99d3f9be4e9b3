"""Finite-difference flow solver steps, pressure solvers and VTK result tools."""

__version__ = "0.1.0"

__all__ = [
    "compare",
    "config",
    "factory",
    "files",
    "merge",
    "solver",
    "sor",
    "splu",
    "temperature",
    "uvp",
    "visual",
    "vtkio",
]