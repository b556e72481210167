"""Manifest parsing, toolchain file reading and build progress tracking for C and C++ projects."""

__version__ = "0.1.0"