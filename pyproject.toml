[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rngkit"
version = "0.1.0"
description = "Deterministic random number generators and sequence sampling utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["random", "rng", "xoshiro", "shuffle", "sampling", "reservoir"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rngkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
