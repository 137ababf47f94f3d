[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "heatsolve"
version = "0.1.0"
description = "Iterative Jacobi and Gauss-Seidel solver for steady-state heat distribution on a square plate"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["heat equation", "jacobi", "gauss-seidel", "relaxation", "laplace", "ppm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
heatsolve = "heatsolve.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["heatsolve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
