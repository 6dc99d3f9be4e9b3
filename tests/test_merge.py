import numpy as np
import pytest

from flowlab.merge import main, merge_directory
from flowlab.vtkio import DataArray, StructuredGrid, read_structured_grid, write_structured_grid

DX = 0.5
GLOBAL_NX = 4
NY = 2


def _pressure(gi, gj, step):
    return gi + 10.0 * gj + 100.0 * step


def _velocity(x, y, step):
    return (x + step, y, 0.0)


def _subdomain(offset, nx, step):
    points = [((offset + i) * DX, j * DX, 0.0) for j in range(NY + 1) for i in range(nx + 1)]
    pressure = [_pressure(offset + i, j, step) for j in range(NY) for i in range(nx)]
    velocity = [_velocity(x, y, step) for x, y, _ in points]
    return StructuredGrid(
        (nx + 1, NY + 1, 1),
        points,
        point_data={"velocity": DataArray("velocity", np.array(velocity))},
        cell_data={"pressure": DataArray("pressure", np.array(pressure))},
    )


@pytest.fixture
def origin(tmp_path):
    folder = tmp_path / "sub"
    folder.mkdir()
    for step in (0, 1):
        write_structured_grid(_subdomain(0, 2, step), folder / f"cavity_0.{step}.vtk")
        write_structured_grid(_subdomain(2, 2, step), folder / f"cavity_1.{step}.vtk")
    return folder


def test_merge_writes_one_file_per_step(origin, tmp_path):
    dest = tmp_path / "merged"
    written = merge_directory(origin, dest, "cavity_", "vtk")
    assert [p.name for p in written] == ["cavity_0.vtk", "cavity_1.vtk"]
    assert all(p.exists() for p in written)


@pytest.mark.parametrize("step", [0, 1])
def test_merged_fields_match_global_layout(origin, tmp_path, step):
    dest = tmp_path / "merged"
    merge_directory(origin, dest, "cavity_", "vtk")
    grid = read_structured_grid(dest / f"cavity_{step}.vtk")
    assert grid.dimensions == (GLOBAL_NX + 1, NY + 1, 1)

    expected_pressure = [_pressure(i, j, step) for j in range(NY) for i in range(GLOBAL_NX)]
    np.testing.assert_allclose(grid.cell_data["pressure"].values[:, 0], expected_pressure)

    expected_points = [(i * DX, j * DX, 0.0) for j in range(NY + 1) for i in range(GLOBAL_NX + 1)]
    np.testing.assert_allclose(grid.points, expected_points)
    expected_velocity = [_velocity(x, y, step) for x, y, _ in expected_points]
    np.testing.assert_allclose(grid.point_data["velocity"].values, expected_velocity)


def test_bad_suffix_is_rejected(origin, tmp_path):
    with pytest.raises(ValueError):
        merge_directory(origin, tmp_path / "out", "cavity_", "v.tk")


def test_missing_first_file_is_rejected(origin, tmp_path):
    (origin / "cavity_0.0.vtk").unlink()
    with pytest.raises(ValueError):
        merge_directory(origin, tmp_path / "out", "cavity_", "vtk")


def test_empty_directory_is_rejected(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    with pytest.raises(ValueError):
        merge_directory(empty, tmp_path / "out", "cavity_", "vtk")


def test_main_merges(origin, tmp_path):
    dest = tmp_path / "cli"
    code = main(["-o", f"{origin}/", "-d", str(dest)])
    assert code == 0
    assert sorted(p.name for p in dest.iterdir()) == ["cavity_0.vtk", "cavity_1.vtk"]


def test_main_requires_trailing_slash(origin, capsys):
    assert main(["-o", str(origin)]) == 1
    assert "trailing slash" in capsys.readouterr().out


def test_main_requires_origin(capsys):
    assert main([]) == 1
    assert "Please provide the origin" in capsys.readouterr().out


def test_main_rejects_bad_suffix(origin):
    assert main(["-o", f"{origin}/", "-s", "v/k"]) == 1