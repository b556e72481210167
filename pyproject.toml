[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yambs"
version = "0.1.0"
description = "Manifest parsing, toolchain file reading and build progress tracking for C and C++ projects"
requires-python = ">=3.11"
keywords = ["build", "c++", "c", "makefile", "toolchain", "manifest"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Programming Language :: C",
    "Programming Language :: C++",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "termcolor",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["yambs"]

[tool.pytest.ini_options]
addopts = "-ra"
