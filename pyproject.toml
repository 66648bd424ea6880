[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "satsave"
version = "0.1.0"
description = "Reader for Satisfactory save files: header, compressed body, levels, objects and properties"
requires-python = ">=3.10"
dependencies = []
keywords = ["satisfactory", "save file", "parser", "binary format", "zlib"]
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
    "Topic :: File Formats",
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
satsave = "satsave.parser:main"

[tool.hatch.build.targets.wheel]
packages = ["satsave"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
