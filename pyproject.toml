[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinysqldb"
version = "0.1.0"
description = "A tiny file-backed SQL database with an interactive shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "database", "repl", "shell"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinysqldb = "tinysqldb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tinysqldb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
