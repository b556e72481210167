"""Build targets and their dependencies as described by a manifest."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from yambs.types import (
    Define,
    DependencyData,
    HeaderOnlyData,
    LibraryType,
    PkgConfigData,
    SourceData,
)

_log = logging.getLogger(__name__)


def canonicalize_source(manifest_dir: str | os.PathLike, source: str | os.PathLike) -> Path:
    """Resolve ``source`` relative to ``manifest_dir``; it must exist."""
    return (Path(manifest_dir) / source).resolve(strict=True)


class DependencyError(Exception):
    """A dependency path could not be resolved."""

    def __init__(self, path: Path) -> None:
        super().__init__(f'Failed to canonicalize path "{path}"')
        self.path = path


def _canonicalize(manifest_dir: str | os.PathLike, path: Path) -> Path:
    try:
        return canonicalize_source(manifest_dir, path)
    except OSError as err:
        raise DependencyError(path) from err


@dataclass(frozen=True)
class Dependency:
    name: str
    data: DependencyData

    @classmethod
    def from_data(
        cls, name: str, data: DependencyData, manifest_dir: str | os.PathLike
    ) -> Dependency:
        """Build a dependency with its paths resolved against the manifest directory."""
        if isinstance(data, SourceData):
            _log.debug(
                "Found dependency %s in path %s with origin %s", name, data.path, data.origin
            )
            resolved: DependencyData = SourceData(
                _canonicalize(manifest_dir, data.path), data.origin
            )
        elif isinstance(data, HeaderOnlyData):
            _log.debug(
                'Found header only dependency %s with include directory "%s"',
                name,
                data.include_directory,
            )
            resolved = HeaderOnlyData(_canonicalize(manifest_dir, data.include_directory))
        elif isinstance(data, PkgConfigData):
            _log.debug("Found pkgconfig dependency %s", name)
            resolved = PkgConfigData(_canonicalize(manifest_dir, data.search_dir))
        else:
            raise TypeError(f"Unknown dependency data {data!r}")
        return cls(name=name, data=resolved)


@dataclass
class Executable:
    name: str
    sources: list[Path]
    dependencies: list[Dependency] = field(default_factory=list)
    compiler_flags: dict[str, Any] = field(default_factory=dict)
    defines: list[Define] = field(default_factory=list)

    def library(self) -> Library | None:
        """An executable is never a library."""
        return None

    def executable(self) -> Executable | None:
        """This target, since it is an executable."""
        return self


@dataclass
class Library:
    name: str
    sources: list[Path]
    dependencies: list[Dependency] = field(default_factory=list)
    compiler_flags: dict[str, Any] = field(default_factory=dict)
    lib_type: LibraryType = LibraryType.STATIC
    defines: list[Define] = field(default_factory=list)

    def library(self) -> Library | None:
        """This target, since it is a library."""
        return self

    def executable(self) -> Executable | None:
        """A library is never an executable."""
        return None


Target = Union[Executable, Library]