[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cavecrawl"
version = "0.1.0"
description = "A top-down cave crawler with procedurally generated levels, keys, exits, fireballs and roaming enemies."
requires-python = ">=3.10"
keywords = ["game", "arcade", "procedural-generation", "cellular-automata", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cavecrawl = "cavecrawl.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cavecrawl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
