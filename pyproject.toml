[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neondriver"
version = "0.1.0"
description = "Track geometry, random track generation and save-game handling for a top-down neon driving game"
requires-python = ">=3.10"
keywords = ["game", "racing", "track", "procedural-generation", "save-game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["neondriver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
