[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sopot"
version = "0.1.0"
description = "Support library for the RF2 Community Patch: core config file, network protocol structures, HTTP helpers, watch-dog timer and utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "red-faction",
    "rf2",
    "game-patch",
    "configuration",
    "network-protocol",
    "watchdog",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sopot"]

[tool.hatch.build.targets.sdist]
include = ["sopot", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 110
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
