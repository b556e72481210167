"""Manifest data types: languages, standards, defines and raw target data."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union


class ParseStandardError(ValueError):
    """A language standard was not recognised or not allowed."""

    def __init__(self, message: str, standard: str) -> None:
        super().__init__(message)
        self.standard = standard

    @classmethod
    def _invalid_c(cls, standard: str) -> ParseStandardError:
        return cls(f'C standard "{standard}" used is not allowed.', standard)

    @classmethod
    def _invalid_cxx(cls, standard: str) -> ParseStandardError:
        return cls(f'C++ standard "{standard}" used is not allowed.', standard)

    @classmethod
    def _unrecognized(cls, standard: str) -> ParseStandardError:
        return cls(f'Could not recognize the given standard: "{standard}"', standard)


class ParseLanguageError(ValueError):
    """The language name is neither C nor C++."""

    def __init__(self, language: str) -> None:
        super().__init__(
            f"Language input is not valid: {language}.\n    Either pick C or C++"
        )
        self.language = language


class ParseDefineError(ValueError):
    """A define given on the command line is not of the form key=value."""

    def __init__(self) -> None:
        super().__init__("Incorrect syntax. Must be <key>=<value>")


class Language(enum.Enum):
    CXX = "C++"
    C = "C"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, s: str) -> Language:
        """Return the language named exactly ``s``."""
        try:
            return cls(s)
        except ValueError:
            raise ParseLanguageError(s) from None


class CStandard(enum.Enum):
    C89 = "c89"
    C90 = "c90"
    C11 = "c11"
    C17 = "c17"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, standard: str) -> CStandard:
        """Parse a C standard name, ignoring case."""
        try:
            return cls(standard.lower())
        except ValueError:
            raise ParseStandardError._invalid_c(standard) from None


class CXXStandard(enum.Enum):
    CXX98 = "c++98"
    CXX03 = "c++03"
    CXX11 = "c++11"
    CXX14 = "c++14"
    CXX17 = "c++17"
    CXX20 = "c++20"
    CXX23 = "c++23"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, standard: str) -> CXXStandard:
        """Parse a C++ standard name, ignoring case."""
        try:
            return cls(standard.lower())
        except ValueError:
            raise ParseStandardError._invalid_cxx(standard) from None


Standard = Union[CXXStandard, CStandard]


def parse_standard(standard: str) -> Standard:
    """Parse a standard of either language, trying C++ first."""
    try:
        return CXXStandard.parse(standard)
    except ParseStandardError:
        pass
    try:
        return CStandard.parse(standard)
    except ParseStandardError:
        pass
    raise ParseStandardError._unrecognized(standard)


def standard_for_language(standard: str, language: Language) -> Standard:
    """Parse a standard that must belong to the given language."""
    if language is Language.CXX:
        return CXXStandard.parse(standard)
    return CStandard.parse(standard)


def verify_standard_language(standard: Standard, language: Language) -> None:
    """Raise ParseStandardError if the standard does not belong to the language."""
    allowed = Language.C if isinstance(standard, CStandard) else Language.CXX
    if language is allowed:
        return
    if language is Language.CXX:
        raise ParseStandardError._invalid_cxx(str(standard))
    raise ParseStandardError._invalid_c(str(standard))


def _standard_from_value(value: Any) -> Standard:
    if not isinstance(value, str):
        raise ValueError(f"Standard must be a string, got {value!r}")
    for enum_type in (CXXStandard, CStandard):
        if value in enum_type.__members__:
            return enum_type[value]
    return parse_standard(value)


def _check_keys(data: Mapping[str, Any], allowed: set[str], context: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"Unknown field(s) in {context}: {', '.join(unknown)}")


def _mapping(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected a table for {context}, got {value!r}")
    return value


def _path(value: Any, context: str) -> Path:
    if not isinstance(value, str):
        raise ValueError(f"Expected a path string for {context}, got {value!r}")
    return Path(value)


@dataclass(frozen=True)
class ProjectConfig:
    std: Standard | None = None
    language: Language | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectConfig:
        data = _mapping(data, "project_config")
        _check_keys(data, {"std", "language"}, "project_config")
        std = data.get("std")
        language = data.get("language")
        return cls(
            std=None if std is None else _standard_from_value(std),
            language=None if language is None else Language.parse(language),
        )


class LibraryType(enum.Enum):
    STATIC = "static"
    DYNAMIC = "shared"


class IncludeSearchType(enum.Enum):
    SYSTEM = "System"
    INCLUDE = "Include"


@dataclass(frozen=True)
class Define:
    macro: str
    value: str | None = None

    @classmethod
    def from_cli(cls, s: str) -> Define:
        """Parse ``key=value``, splitting at the first equals sign."""
        macro, sep, value = s.partition("=")
        if not sep:
            raise ParseDefineError()
        return cls(macro=macro, value=value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Define:
        data = _mapping(data, "define")
        macro = data.get("macro")
        if not isinstance(macro, str):
            raise ValueError("Define requires a string 'macro' field")
        value = data.get("value")
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Define value must be a string, got {value!r}")
        return cls(macro=macro, value=value)


@dataclass(frozen=True)
class SourceData:
    path: Path
    origin: IncludeSearchType = IncludeSearchType.INCLUDE


@dataclass(frozen=True)
class HeaderOnlyData:
    include_directory: Path


@dataclass(frozen=True)
class PkgConfigData:
    search_dir: Path


DependencyData = Union[SourceData, HeaderOnlyData, PkgConfigData]


def dependency_data_from_dict(data: Mapping[str, Any]) -> DependencyData:
    """Build dependency data from the first shape the table matches."""
    data = _mapping(data, "dependency")
    if isinstance(data.get("path"), str):
        origin = data.get("origin", IncludeSearchType.INCLUDE.value)
        try:
            return SourceData(Path(data["path"]), IncludeSearchType(origin))
        except ValueError:
            pass
    if isinstance(data.get("include_directory"), str):
        return HeaderOnlyData(Path(data["include_directory"]))
    if isinstance(data.get("pkg_config_search_dir"), str):
        return PkgConfigData(Path(data["pkg_config_search_dir"]))
    raise ValueError("Data did not match any variant of dependency data")


_COMMON_KEYS = {"sources", "dependencies", "defines"}


@dataclass
class RawCommonData:
    sources: list[Path]
    dependencies: dict[str, DependencyData] = field(default_factory=dict)
    compiler_flags: dict[str, Any] = field(default_factory=dict)
    defines: list[Define] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawCommonData:
        data = _mapping(data, "target")
        if "sources" not in data:
            raise ValueError("Missing field 'sources'")
        raw_sources = data["sources"]
        if not isinstance(raw_sources, list):
            raise ValueError("Field 'sources' must be a list")
        sources = [_path(source, "sources") for source in raw_sources]
        raw_deps = _mapping(data.get("dependencies", {}), "dependencies")
        dependencies = {
            name: dependency_data_from_dict(raw_deps[name]) for name in sorted(raw_deps)
        }
        raw_defines = data.get("defines", [])
        if not isinstance(raw_defines, list):
            raise ValueError("Field 'defines' must be a list")
        defines = [Define.from_dict(define) for define in raw_defines]
        compiler_flags = {k: v for k, v in data.items() if k not in _COMMON_KEYS}
        return cls(
            sources=sources,
            dependencies=dependencies,
            compiler_flags=compiler_flags,
            defines=defines,
        )


@dataclass
class RawLibraryData:
    common_raw: RawCommonData
    lib_type: LibraryType = LibraryType.STATIC

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawLibraryData:
        rest = dict(_mapping(data, "library"))
        raw_type = rest.pop("type", None)
        try:
            lib_type = LibraryType.STATIC if raw_type is None else LibraryType(raw_type)
        except ValueError:
            raise ValueError(f"Unknown library type {raw_type!r}") from None
        return cls(common_raw=RawCommonData.from_dict(rest), lib_type=lib_type)


@dataclass
class RawManifestData:
    project_config: ProjectConfig | None = None
    executables: dict[str, RawCommonData] | None = None
    libraries: dict[str, RawLibraryData] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawManifestData:
        data = _mapping(data, "manifest")
        _check_keys(data, {"project_config", "executable", "library"}, "manifest")
        project_config = data.get("project_config")
        executables = data.get("executable")
        libraries = data.get("library")
        if executables is not None:
            executables = _mapping(executables, "executable")
            executables = {
                name: RawCommonData.from_dict(executables[name])
                for name in sorted(executables)
            }
        if libraries is not None:
            libraries = _mapping(libraries, "library")
            libraries = {
                name: RawLibraryData.from_dict(libraries[name])
                for name in sorted(libraries)
            }
        return cls(
            project_config=(
                None if project_config is None else ProjectConfig.from_dict(project_config)
            ),
            executables=executables,
            libraries=libraries,
        )