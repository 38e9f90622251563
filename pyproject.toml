[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stepterm"
version = "0.1.0"
description = "Terminal user interface toolkit: styled output, named values, tables, spinners and live step groups"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "cli", "ui", "spinner", "progress", "steps", "table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stepterm"]

[tool.pytest.ini_options]
addopts = "-ra"
