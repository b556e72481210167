"""Toolchain description: compilers, linker, archiver and pkg-config locations."""

from __future__ import annotations

import enum
import logging
import os
import shutil
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_log = logging.getLogger(__name__)

TOOLCHAIN_FILE_NAME = "toolchain.toml"


class ArchiverError(Exception):
    """No usable archiver was found."""


class ToolchainErrorKind(enum.Enum):
    ARCHIVER = "archiver"
    NOT_A_FILE = "not_a_file"
    INCORRECT_FILENAME = "incorrect_filename"
    FAILED_TO_READ = "failed_to_read"
    FAILED_TO_PARSE = "failed_to_parse"
    FAILED_TO_CONVERT_UTF8 = "failed_to_convert_utf8"
    NOT_FOUND = "not_found"


class ToolchainError(Exception):
    """The toolchain could not be located or understood."""

    def __init__(self, kind: ToolchainErrorKind, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path


@dataclass(frozen=True)
class Archiver:
    path: Path

    @classmethod
    def find(cls) -> Archiver:
        """Use ``$AR`` if set, otherwise look for ``ar`` on ``$PATH``."""
        from_env = os.environ.get("AR")
        if from_env is not None:
            _log.debug("Found archiver in $AR. Using this.")
            return cls(Path(from_env))
        _log.debug("Did not find archiver in $AR. Will try to find 'ar' in PATH.")
        found = shutil.which("ar")
        if found is None:
            raise ArchiverError("No archiver found")
        return cls(Path(found))

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> Archiver:
        return cls(Path(path))


def _table(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected table {context!r}")
    return value


def _optional_path(data: Mapping[str, Any], key: str) -> Path | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected a path string for {key!r}")
    return Path(value)


@dataclass(frozen=True)
class ToolchainCompilerData:
    compiler: Path
    linker: Any = None
    stdlib: Any = None

    @classmethod
    def _from_dict(cls, data: Any, context: str) -> ToolchainCompilerData:
        data = _table(data, context)
        compiler = _optional_path(data, "compiler")
        if compiler is None:
            raise ValueError(f"Missing field 'compiler' in {context}")
        return cls(compiler=compiler, linker=data.get("linker"), stdlib=data.get("stdlib"))


@dataclass(frozen=True)
class CommonToolchainData:
    archiver: Path | None = None
    pkg_config: Path | None = None

    @classmethod
    def _from_dict(cls, data: Any) -> CommonToolchainData:
        data = _table(data, "common")
        return cls(
            archiver=_optional_path(data, "archiver"),
            pkg_config=_optional_path(data, "pkg-config"),
        )


@dataclass(frozen=True)
class Toolchain:
    cxx: ToolchainCompilerData
    cc: ToolchainCompilerData
    common: CommonToolchainData

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> Toolchain:
        """Read the toolchain file at ``path``."""
        path = Path(path)
        if not path.exists():
            raise ToolchainError(
                ToolchainErrorKind.NOT_FOUND, f"Toolchain not found at {path}", path
            )
        _log.debug("Parsing toolchain at %s", path)
        if not path.is_file():
            raise ToolchainError(
                ToolchainErrorKind.NOT_A_FILE, "Path to toolchain file is not a file", path
            )
        if path.name != TOOLCHAIN_FILE_NAME:
            raise ToolchainError(
                ToolchainErrorKind.INCORRECT_FILENAME,
                "File name for toolchain file is incorrect. "
                f"Toolchain file shall be named {TOOLCHAIN_FILE_NAME}",
                path,
            )
        try:
            raw = path.read_bytes()
        except OSError as err:
            raise ToolchainError(
                ToolchainErrorKind.FAILED_TO_READ,
                f"Failed to parse TOML toolchain file {path}",
                path,
            ) from err
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise ToolchainError(
                ToolchainErrorKind.FAILED_TO_CONVERT_UTF8,
                "Failed to convert UTF-8 bytes to string",
                path,
            ) from err
        try:
            data = tomllib.loads(text)
            if "CXX" not in data or "CC" not in data or "common" not in data:
                raise ValueError("Toolchain file requires CXX, CC and common tables")
            return cls(
                cxx=ToolchainCompilerData._from_dict(data["CXX"], "CXX"),
                cc=ToolchainCompilerData._from_dict(data["CC"], "CC"),
                common=CommonToolchainData._from_dict(data["common"]),
            )
        except ValueError as err:
            raise ToolchainError(
                ToolchainErrorKind.FAILED_TO_PARSE,
                f"Failed to parse toolchain file {path}",
                path,
            ) from err

    def archiver(self) -> Archiver:
        """The archiver named in the file, or one found in the environment."""
        try:
            if self.common.archiver is not None:
                _log.debug("Using archiver found from toolchain file")
                return Archiver.from_path(self.common.archiver)
            return Archiver.find()
        except ArchiverError as err:
            raise ToolchainError(
                ToolchainErrorKind.ARCHIVER, "Error occured with locating archiver"
            ) from err