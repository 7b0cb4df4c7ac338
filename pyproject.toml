[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hivegame"
version = "0.1.0"
description = "Pieces, hands, hex positions, self-play frame buffers, metrics and numpy networks for the Hive board game"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["hive", "board game", "hexagonal grid", "reinforcement learning", "self-play"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hivegame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
