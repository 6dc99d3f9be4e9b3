import numpy as np
import pytest

from flowlab.compare import compare_directories, compare_files, main
from flowlab.vtkio import DataArray, StructuredGrid, write_structured_grid


def _grid(pressure_shift=0.0, velocity_shift=0.0, with_pressure=True):
    nx, ny = 3, 2
    points = [(i * 0.5, j * 0.5, 0.0) for j in range(ny + 1) for i in range(nx + 1)]
    pressure = np.arange(nx * ny, dtype=float) + pressure_shift
    velocity = np.array([[x + velocity_shift, y, 0.0] for x, y, _ in points])
    cell_data = {"pressure": DataArray("pressure", pressure)} if with_pressure else {}
    return StructuredGrid(
        (nx + 1, ny + 1, 1),
        points,
        point_data={"velocity": DataArray("velocity", velocity)},
        cell_data=cell_data,
    )


def _write(path, grid):
    write_structured_grid(grid, path)
    return path


def test_identical_files_have_no_differences(tmp_path):
    a = _write(tmp_path / "a.vtk", _grid())
    b = _write(tmp_path / "b.vtk", _grid())
    assert compare_files(a, b) == []


def test_small_difference_is_within_tolerance(tmp_path):
    a = _write(tmp_path / "a.vtk", _grid())
    b = _write(tmp_path / "b.vtk", _grid(pressure_shift=1e-9))
    assert compare_files(a, b) == []


def test_pressure_difference_is_reported(tmp_path):
    a = _write(tmp_path / "a.vtk", _grid())
    b = _write(tmp_path / "b.vtk", _grid(pressure_shift=1e-3))
    errors = compare_files(a, b)
    assert len(errors) == 6
    assert all("pressure" in error for error in errors)


def test_velocity_difference_is_reported(tmp_path):
    a = _write(tmp_path / "a.vtk", _grid())
    b = _write(tmp_path / "b.vtk", _grid(velocity_shift=0.1))
    errors = compare_files(a, b)
    assert errors
    assert all("velocity" in error for error in errors)


def test_missing_array_is_reported(tmp_path):
    a = _write(tmp_path / "a.vtk", _grid())
    b = _write(tmp_path / "b.vtk", _grid(with_pressure=False))
    errors = compare_files(a, b)
    assert len(errors) == 1
    assert "pressure" in errors[0]


def _folders(tmp_path, shift=0.0, steps=2):
    origin = tmp_path / "origin"
    current = tmp_path / "current"
    origin.mkdir()
    current.mkdir()
    for step in range(steps):
        _write(origin / f"cavity.{step}.vtk", _grid())
        _write(current / f"cavity.{step}.vtk", _grid(pressure_shift=shift))
    return origin, current


def test_compare_directories_equal(tmp_path):
    origin, current = _folders(tmp_path)
    assert compare_directories(origin, current, "cavity", "cavity") == []


def test_compare_directories_missing_counterpart(tmp_path):
    origin, current = _folders(tmp_path)
    _write(origin / "cavity.2.vtk", _grid())
    errors = compare_directories(origin, current, "cavity", "cavity")
    assert len(errors) == 1
    assert "cavity.2.vtk" in errors[0]


def test_main_reports_success(tmp_path, capsys):
    origin, current = _folders(tmp_path)
    code = main(["-o", str(origin), "-c", str(current), "-f", "cavity", "-s", "cavity"])
    assert code == 0
    assert "No errors detected" in capsys.readouterr().out


def test_main_reports_failure(tmp_path):
    origin, current = _folders(tmp_path, shift=1.0)
    code = main(["-o", str(origin), "-c", str(current), "-f", "cavity", "-s", "cavity"])
    assert code == 1


@pytest.mark.parametrize(
    "argv",
    [
        ["-c", "x", "-f", "a", "-s", "b"],
        ["-o", "x", "-f", "a", "-s", "b"],
        ["-o", "x", "-c", "y", "-s", "b"],
        ["-o", "x", "-c", "y", "-f", "a"],
    ],
)
def test_main_requires_all_options(argv, capsys):
    assert main(argv) == 1
    assert "Please provide" in capsys.readouterr().out