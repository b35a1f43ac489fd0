[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minisql"
version = "2022.7.0"
description = "Storage pages, B+ tree nodes, transaction types and predicate expressions for a small relational database engine"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "storage", "b+tree", "slotted-page", "bitmap", "sql"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[tool.hatch.build.targets.wheel]
packages = ["minisql"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
