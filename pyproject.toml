[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seqmap"
version = "0.1.0"
description = "An insertion-ordered hash map with index-based access, ordered removal, slices, iterators and entry views"
requires-python = ">=3.10"
dependencies = []
keywords = ["map", "ordered", "dictionary", "index", "hash table", "collections"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["seqmap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
