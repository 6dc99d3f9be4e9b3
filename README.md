# flowlab

Building blocks for solving the 2D incompressible Navier–Stokes equations on a
staggered grid, with optional heat transport. The package also has two
command-line tools for VTK output: one compares folders of results and one
merges per-subdomain files.

## What is inside

- `flowlab.config`: the `Config` dataclass that holds every simulation
  parameter. It also defines the enumerations `CellType`, `SolverType`,
  `BoundaryType`, `VelocityType`, `BorderPosition`, `NeighbourPosition`,
  `MatrixSelection` and `ReadType`.
- `flowlab.uvp`: the momentum step.
  - `calculate_fg` fills F and G in place. It uses donor-cell convection and
    adds a buoyancy term when `calc_temp` is set.
  - `calculate_rs` builds the right-hand side of the pressure Poisson equation.
  - `calculate_dt` sets `config.dt` from the stability limits and returns it.
    When `tau <= 0` the time step is left as it is.
  - `calculate_uv` applies the pressure correction to `u` and `v`.
- `flowlab.temperature`: `calculate_t` performs one explicit step of the energy
  equation and returns the new temperature field.
- `flowlab.solver`: the abstract `Solver` base. It provides the shared pieces:
  - `boundary_p`, the Neumann pressure boundary;
  - `comp_residual`, `compute_l2_norm` and `compute_average`;
  - `string2type`, which maps `"multigrid"`, `"cg"` and `"spLU"` to a
    `SolverType`; every other name gives SOR.

  `solve()` returns a `SolveResult` that holds `iterations` and `residual`.
- `flowlab.sor`: `SOR`, successive over-relaxation. It iterates until the
  residual falls below `eps` or the iteration count reaches `itermax`.
- `flowlab.splu`: `SparseLU`. It assembles the five-point Laplacian once,
  factorises it with scipy's sparse LU and solves directly at every step.
- `flowlab.factory`: `create_solver(config, p, rhs, types)` returns the solver
  for `config.solver`.
- `flowlab.visual`: `write_vtk_file` writes velocity, pressure, temperature
  (when `calc_temp > 0`) and the domain to `<problem>.<timestep>.vtk` as a
  legacy ASCII VTK structured grid.
- `flowlab.vtkio`: `read_structured_grid` and `write_structured_grid` read and
  write legacy ASCII VTK structured grids as `StructuredGrid` / `DataArray`
  objects.
- `flowlab.files`:
  - `FileIterator` gives the sorted files in a folder that match a prefix.
  - `get_rank` and `get_timestamp` parse names such as `cavity_1.10.vtk`.
  - `get_unique`, `subset` and `nomenclature` complete the module.
- `flowlab.compare`: `compare_files` and `compare_directories` return a list of
  the differences they find. An empty list means no differences were found.
- `flowlab.merge`: `merge_directory` merges subdomain files into one file per
  time step.

Grids are numpy arrays of shape `(imax + 2, jmax + 2)` indexed `[i, j]`. The
outer layer is ghost cells. Cell types are indexable as `types[i][j]`.

## Installing

```
pip install .
pip install .[test]   # adds pytest
```

## A pressure solve

```python
import numpy as np
from flowlab.config import Config, CellType, SolverType
from flowlab.factory import create_solver

config = Config(imax=8, jmax=8, dx=0.1, dy=0.1, omg=1.7, eps=1e-6,
                itermax=500, solver=SolverType.SOR, total_n_fluid=64)
types = [[CellType.FLUID] * 10 for _ in range(10)]
p = np.zeros((10, 10))
rhs = np.zeros((10, 10))
result = create_solver(config, p, rhs, types).solve()
print(result.iterations, result.residual)
```

The solvers update their pressure array in place. Pass a float numpy array so
that the caller's `p` is the array that gets updated.

## Command-line tools

`vtk-compare` compares two folders of VTK output. It pairs the files in sorted
order. Point coordinates must agree to within 1e-4 and data values to within
1e-6:

```
vtk-compare --origin reference/ --current output/ --first cavity --second cavity
```

The tool prints `No errors detected` and exits with status 0 when the folders
agree. Otherwise it reports each difference on standard error and exits with
status 1.

`vtk-merge` merges per-rank files named `<prefix><rank>.<timestep>.<suffix>`
into one file named `<prefix><timestep>.<suffix>` for each time step:

```
vtk-merge --origin parts/ --destination merged/ --prefix cavity_ --suffix vtk
```

- The origin folder must end with a slash and contain no whitespace.
- The first file in it must be `<prefix>0.0.<suffix>`.
- Only the `pressure` cell array and the `velocity` point array are carried
  into the merged files.

Pass `--help` to either tool to see its options.

## What the package does not do

flowlab supplies the steps of a simulation, not a complete run. It has no
simulation driver and no command that runs a case. It does not read parameter
files or geometry images, and it does not communicate between parallel
subdomains.

Only the SOR and sparse LU pressure solvers exist.
`create_solver` raises `ValueError` for `SolverType.MULTIGRID`,
`SolverType.CG` and `SolverType.NONE`.

## Running the tests

```
pytest
```