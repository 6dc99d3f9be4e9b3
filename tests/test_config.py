import pytest

from flowlab.config import BoundaryType, CellType, Config, SolverType


def test_cell_type_starts_at_fluid_one():
    assert CellType(1) is CellType.FLUID
    assert CellType(2) is CellType.NOSLIP
    assert CellType(6) is CellType.LID
    assert [CellType(v).name for v in range(1, 7)] == [
        "FLUID",
        "NOSLIP",
        "INLET",
        "OUTLET",
        "FREESLIP",
        "LID",
    ]


def test_boundary_type_unset_is_last():
    members = list(BoundaryType)
    assert len(members) == 9
    assert BoundaryType(members[-1].value) is BoundaryType.UNSET
    assert BoundaryType(members[0].value) is BoundaryType.B_N


def test_solver_type_members():
    names = {SolverType(s.value).name for s in SolverType}
    assert names == {"NONE", "SOR", "MULTIGRID", "CG", "SPLU"}


def test_config_defaults_follow_source():
    cfg = Config()
    assert cfg.calc_temp == 0
    assert cfg.iproc == 1
    assert cfg.jproc == 1
    assert cfg.solver is SolverType.NONE


def test_config_fields_are_independent():
    first = Config(imax=10, dx=0.5, problem="cavity")
    second = Config()
    assert first.imax == 10 and first.dx == 0.5 and first.problem == "cavity"
    assert second.imax == 0 and second.problem == ""


def test_lookup_by_value():
    assert CellType(4) is CellType.OUTLET
    with pytest.raises(ValueError):
        CellType(0)