[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diffbot"
version = "0.1.0"
description = "Real-time simulation of a differential-drive robot under feedback linearization and reference-model control"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "simulation", "control", "feedback linearization", "reference model"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
diffbot = "diffbot.app:main"

[tool.hatch.build.targets.wheel]
packages = ["diffbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
