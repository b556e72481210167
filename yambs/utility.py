"""File-system helpers for locating project directories and files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO


class FsError(OSError):
    """A file-system operation failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return self.args[0]


def get_include_directory_from_path(path: str | os.PathLike) -> Path:
    """Find an ``include`` directory in ``path`` or its parent."""
    path = Path(path)
    candidate = path / "include"
    if candidate.is_dir():
        return candidate
    parent = path.parent
    candidate = parent / "include"
    if candidate.is_dir():
        return candidate
    raise FsError(f"No include directory found in {parent}", parent)


def get_mmk_library_file_from_path(path: str | os.PathLike) -> Path:
    """Return the ``lib.mmk`` file in ``path``."""
    path = Path(path)
    library_file = path / "lib.mmk"
    if library_file.is_file():
        return library_file
    raise FsError(f"No library file found in {path}", path)


def is_source_directory(path: str | os.PathLike) -> bool:
    path = Path(path)
    return path.name in ("source", "src") and path.is_dir()


def is_test_directory(path: str | os.PathLike) -> bool:
    return Path(path).name == "test"


def get_head_directory(path: str | os.PathLike) -> Path:
    """Return the last component of ``path``."""
    path = Path(path)
    return path.relative_to(path.parent)


def get_project_top_directory(path: str | os.PathLike) -> Path:
    """Return the project directory for a file, skipping a source or test directory."""
    parent = Path(path).parent
    if is_source_directory(parent) or is_test_directory(parent):
        return parent.parent
    return parent


def directory_exists(path: str | os.PathLike) -> bool:
    return Path(path).exists()


def create_dir(directory: str | os.PathLike) -> None:
    """Create ``directory`` and its parents unless it already exists."""
    directory = Path(directory)
    if directory.is_dir():
        return
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FsError(f"Failed to create directory {directory}", directory) from err


def create_symlink(destination: str | os.PathLike, source: str | os.PathLike) -> None:
    """Create a link at ``source`` pointing to ``destination``."""
    try:
        os.symlink(destination, source)
    except OSError as err:
        raise FsError(
            f"Failed to create symlink {source} -> {destination}", Path(source)
        ) from err


def create_file(file: str | os.PathLike) -> TextIO:
    """Create (or truncate) ``file`` and return it opened for writing."""
    try:
        return open(file, "w", encoding="utf-8")
    except OSError as err:
        raise FsError(f"Failed to create file {file}", Path(file)) from err


def print_full_path(directory: str, filename: str, no_newline: bool) -> str:
    """Format ``directory/filename``, followed by a Make line continuation unless suppressed."""
    text = f"{directory}/{filename}"
    if not no_newline:
        text += " \\\n"
    return text


def read_file(file_path: str | os.PathLike) -> str:
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise FsError(f"Failed to read from file {file_path}", Path(file_path)) from err