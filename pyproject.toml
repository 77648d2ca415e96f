[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "macforks"
version = "0.1.0"
description = "Read and write classic Macintosh files with forks: MacBinary II, BinHex 4.0, Mac OS Roman text and their checksums"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "macintosh",
    "macbinary",
    "binhex",
    "hqx",
    "resource fork",
    "mac roman",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["macforks"]

[tool.hatch.build.targets.sdist]
include = ["macforks", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
