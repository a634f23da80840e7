[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netsimplex"
version = "0.1.0"
description = "Minimum-cost flow solver using the network simplex method with a candidate-list pivot rule"
requires-python = ">=3.10"
dependencies = []
keywords = ["network simplex", "minimum cost flow", "optimization", "graph", "linear programming"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netsimplex = "netsimplex.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["netsimplex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
