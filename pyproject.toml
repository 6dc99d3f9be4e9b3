[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowlab"
version = "0.1.0"
description = "Finite-difference building blocks for 2D incompressible flow with heat transfer, plus VTK comparison and merge tools"
requires-python = ">=3.10"
keywords = ["cfd", "navier-stokes", "finite-difference", "sor", "sparse-lu", "vtk"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vtk-compare = "flowlab.compare:main"
vtk-merge = "flowlab.merge:main"

[tool.hatch.build.targets.wheel]
packages = ["flowlab"]

[tool.pytest.ini_options]
addopts = "-ra"
