[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procinfo"
version = "0.1.0"
description = "Parsers for the text records and page table entries found under the Linux /proc filesystem"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "procfs",
    "proc",
    "linux",
    "process",
    "monitoring",
    "mountinfo",
    "smaps",
    "pagemap",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["procinfo"]

[tool.hatch.build.targets.sdist]
include = ["procinfo", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
