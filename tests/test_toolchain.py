from pathlib import Path

import pytest

from yambs.toolchain import (
    TOOLCHAIN_FILE_NAME,
    Archiver,
    ArchiverError,
    Toolchain,
    ToolchainError,
    ToolchainErrorKind,
)

FULL_TOOLCHAIN = """
[CXX]
compiler = "/opt/tc/bin/g++"

[CC]
compiler = "/opt/tc/bin/gcc"

[common]
archiver = "/opt/tc/bin/ar"
pkg-config = "/opt/tc/bin/pkg-config"
"""


def _write(directory: Path, text: str, name: str = TOOLCHAIN_FILE_NAME) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


def test_from_file_reads_all_sections(tmp_path):
    toolchain = Toolchain.from_file(_write(tmp_path, FULL_TOOLCHAIN))
    assert toolchain.cxx.compiler == Path("/opt/tc/bin/g++")
    assert toolchain.cc.compiler == Path("/opt/tc/bin/gcc")
    assert toolchain.common.archiver == Path("/opt/tc/bin/ar")
    assert toolchain.common.pkg_config == Path("/opt/tc/bin/pkg-config")
    assert toolchain.cxx.linker is None


def test_archiver_from_file_is_used(tmp_path, monkeypatch):
    monkeypatch.delenv("AR", raising=False)
    toolchain = Toolchain.from_file(_write(tmp_path, FULL_TOOLCHAIN))
    assert toolchain.archiver() == Archiver(Path("/opt/tc/bin/ar"))


def test_archiver_falls_back_to_environment(tmp_path, monkeypatch):
    text = '[CXX]\ncompiler = "g++"\n[CC]\ncompiler = "gcc"\n[common]\n'
    toolchain = Toolchain.from_file(_write(tmp_path, text))
    assert toolchain.common.archiver is None
    monkeypatch.setenv("AR", "/custom/ar")
    assert toolchain.archiver().path == Path("/custom/ar")


def test_archiver_missing_everywhere_raises(tmp_path, monkeypatch):
    text = '[CXX]\ncompiler = "g++"\n[CC]\ncompiler = "gcc"\n[common]\n'
    toolchain = Toolchain.from_file(_write(tmp_path, text))
    monkeypatch.delenv("AR", raising=False)
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    with pytest.raises(ToolchainError) as info:
        toolchain.archiver()
    assert info.value.kind is ToolchainErrorKind.ARCHIVER


def test_archiver_find_searches_path(tmp_path, monkeypatch):
    monkeypatch.delenv("AR", raising=False)
    fake_ar = tmp_path / "ar"
    fake_ar.write_text("#!/bin/sh\n", encoding="utf-8")
    fake_ar.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    assert Archiver.find().path == fake_ar


def test_archiver_find_raises_without_ar(tmp_path, monkeypatch):
    monkeypatch.delenv("AR", raising=False)
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(ArchiverError):
        Archiver.find()


def test_archiver_from_path_keeps_path():
    assert Archiver.from_path("/usr/bin/ar").path == Path("/usr/bin/ar")


def test_missing_file_is_not_found(tmp_path):
    missing = tmp_path / TOOLCHAIN_FILE_NAME
    with pytest.raises(ToolchainError) as info:
        Toolchain.from_file(missing)
    assert info.value.kind is ToolchainErrorKind.NOT_FOUND
    assert info.value.path == missing


def test_directory_is_not_a_file(tmp_path):
    directory = tmp_path / TOOLCHAIN_FILE_NAME
    directory.mkdir()
    with pytest.raises(ToolchainError) as info:
        Toolchain.from_file(directory)
    assert info.value.kind is ToolchainErrorKind.NOT_A_FILE


def test_wrong_file_name_is_rejected(tmp_path):
    path = _write(tmp_path, FULL_TOOLCHAIN, name="other.toml")
    with pytest.raises(ToolchainError) as info:
        Toolchain.from_file(path)
    assert info.value.kind is ToolchainErrorKind.INCORRECT_FILENAME


def test_invalid_utf8_is_rejected(tmp_path):
    path = tmp_path / TOOLCHAIN_FILE_NAME
    path.write_bytes(b"\xff\xfe")
    with pytest.raises(ToolchainError) as info:
        Toolchain.from_file(path)
    assert info.value.kind is ToolchainErrorKind.FAILED_TO_CONVERT_UTF8


@pytest.mark.parametrize(
    "text",
    [
        "[CXX\ncompiler = ",
        '[CXX]\ncompiler = "g++"\n[common]\n',
        '[CXX]\n[CC]\ncompiler = "gcc"\n[common]\n',
        '[CXX]\ncompiler = "g++"\n[CC]\ncompiler = "gcc"\n[common]\narchiver = 3\n',
    ],
)
def test_malformed_toolchain_fails_to_parse(tmp_path, text):
    with pytest.raises(ToolchainError) as info:
        Toolchain.from_file(_write(tmp_path, text))
    assert info.value.kind is ToolchainErrorKind.FAILED_TO_PARSE