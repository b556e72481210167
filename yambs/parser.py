"""Reading a manifest file: variable substitution, TOML parsing and target creation."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from yambs.manifest import Manifest, ManifestData, ParsedManifest, ParseManifestError
from yambs.preprocessor import Preprocessor, PreprocessorError, Variable
from yambs.types import RawManifestData


class ParseTomlError(Exception):
    """The manifest could not be read, preprocessed or parsed."""


def parse(
    manifest_path: str | os.PathLike,
    build_directory: str | os.PathLike,
    manifest_directory: str | os.PathLike,
    build_type: object,
) -> ParsedManifest:
    """Read, preprocess and parse the manifest at ``manifest_path``."""
    manifest_path = Path(manifest_path)
    try:
        raw_bytes = manifest_path.read_bytes()
    except OSError as err:
        raise ParseTomlError("Failed to read TOML manifest file.") from err
    try:
        toml_content = raw_bytes.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ParseTomlError("Failed to convert UTF-8 bytes to string") from err

    preprocessor = (
        Preprocessor()
        .with_var(Variable(key="YAMBS_BUILD_DIR", value=str(Path(build_directory))))
        .with_var(Variable(key="YAMBS_MANIFEST_DIR", value=str(Path(manifest_directory))))
        .with_var(Variable(key="YAMBS_BUILD_TYPE", value=str(build_type)))
    )
    try:
        preprocessed = preprocessor.parse(toml_content)
    except PreprocessorError as err:
        raise ParseTomlError("Preprocessor failed") from err

    directory = manifest_path.parent
    modification_time = manifest_path.stat().st_mtime
    return ParsedManifest(
        manifest=Manifest(directory=directory, modification_time=modification_time),
        data=parse_toml(preprocessed, directory),
    )


def parse_toml(toml_text: str, manifest_dir: str | os.PathLike) -> ManifestData:
    """Parse manifest TOML text and resolve its targets against ``manifest_dir``."""
    try:
        raw = RawManifestData.from_dict(tomllib.loads(toml_text))
    except ValueError as err:
        raise ParseTomlError("Failed to parse TOML manifest file.") from err
    try:
        return ManifestData.from_raw(raw, manifest_dir)
    except ParseManifestError as err:
        raise ParseTomlError("Failed to create manifest data") from err