[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bdmodel"
version = "1.0.0"
description = "Block diagram data model: object types, model objects, layered layout options and an R-tree spatial index"
requires-python = ">=3.10"
dependencies = []
keywords = ["block diagram", "schematic", "data model", "r-tree", "spatial index", "eda"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bdmodel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
