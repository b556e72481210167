"""Manifest location and conversion of raw manifest data into build targets."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from yambs.targets import Dependency, DependencyError, Executable, Library, Target, canonicalize_source
from yambs.types import (
    ParseStandardError,
    ProjectConfig,
    RawCommonData,
    RawManifestData,
    verify_standard_language,
)

YAMBS_MANIFEST_NAME = "yambs.toml"


class ParseManifestError(Exception):
    """Manifest data could not be turned into build targets."""


@dataclass(frozen=True)
class Manifest:
    directory: Path
    modification_time: float

    @classmethod
    def from_directory(cls, directory: str | os.PathLike) -> Manifest:
        """Describe the manifest in ``directory``, which must exist."""
        directory = Path(directory)
        stat = (directory / YAMBS_MANIFEST_NAME).stat()
        return cls(directory=directory, modification_time=stat.st_mtime)


def _parse_dependencies(raw: RawCommonData, manifest_dir: Path) -> list[Dependency]:
    try:
        return [
            Dependency.from_data(name, data, manifest_dir)
            for name, data in raw.dependencies.items()
        ]
    except DependencyError as err:
        raise ParseManifestError("Failed to parse dependency") from err


def _canonicalize_sources(raw: RawCommonData, manifest_dir: Path) -> list[Path]:
    sources = []
    for source in raw.sources:
        try:
            sources.append(canonicalize_source(manifest_dir, source))
        except OSError as err:
            raise ParseManifestError(f'Failed to canonicalize "{source}"') from err
    return sources


@dataclass
class ManifestData:
    project_config: ProjectConfig | None = None
    targets: list[Target] = field(default_factory=list)

    @classmethod
    def from_raw(
        cls, contents: RawManifestData, manifest_dir: str | os.PathLike
    ) -> ManifestData:
        """Resolve sources and dependencies; executables come before libraries."""
        manifest_dir = Path(manifest_dir)
        targets: list[Target] = []
        for name, raw in (contents.executables or {}).items():
            targets.append(
                Executable(
                    name=name,
                    sources=_canonicalize_sources(raw, manifest_dir),
                    dependencies=_parse_dependencies(raw, manifest_dir),
                    compiler_flags=raw.compiler_flags,
                    defines=raw.defines,
                )
            )
        for name, raw_lib in (contents.libraries or {}).items():
            raw = raw_lib.common_raw
            targets.append(
                Library(
                    name=name,
                    sources=_canonicalize_sources(raw, manifest_dir),
                    dependencies=_parse_dependencies(raw, manifest_dir),
                    compiler_flags=raw.compiler_flags,
                    lib_type=raw_lib.lib_type,
                    defines=raw.defines,
                )
            )

        config = contents.project_config
        if config is not None and config.std is not None and config.language is not None:
            try:
                verify_standard_language(config.std, config.language)
            except ParseStandardError as err:
                raise ParseManifestError("Failed to parse standard in manifest") from err

        return cls(project_config=config, targets=targets)


@dataclass
class ParsedManifest:
    manifest: Manifest
    data: ManifestData