"""Running external programs and capturing their standard output."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable


class ShellError(OSError):
    """An external program could not be run or its output not decoded."""


def _spawn_and_run(
    exe: str | os.PathLike, args: Iterable[str | os.PathLike]
) -> subprocess.CompletedProcess:
    command = [os.fspath(exe), *(os.fspath(arg) for arg in args)]
    try:
        return subprocess.run(command, stdout=subprocess.PIPE, check=False)
    except OSError as err:
        raise ShellError(f"Failed to run {exe}") from err


def execute_get_stdout(exe: str | os.PathLike, args: Iterable[str | os.PathLike]) -> str:
    """Run ``exe`` with ``args`` and return its standard output as text."""
    completed = _spawn_and_run(exe, args)
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ShellError("Failed to create string from UTF-8 output") from err


def execute(exe: str | os.PathLike, args: Iterable[str | os.PathLike]) -> None:
    """Run ``exe`` with ``args`` and wait for it to finish."""
    _spawn_and_run(exe, args)