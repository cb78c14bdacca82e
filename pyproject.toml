[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mxw"
version = "0.1.2"
description = "Command-line tool for configuring Glorious wireless mice."
requires-python = ">=3.10"
keywords = ["mouse", "hid", "hidraw", "glorious", "dpi", "rgb", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
]
dependencies = [
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mxw = "mxw.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mxw"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
