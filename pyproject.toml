[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nnuenet"
version = "0.1.0"
description = "Neural network layers and move-ordering history tables for chess engines"
requires-python = ">=3.10"
keywords = ["chess", "nnue", "neural network", "history heuristic", "move ordering"]
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
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nnuenet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
