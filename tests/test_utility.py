from pathlib import Path

import pytest

from yambs.utility import (
    FsError,
    create_dir,
    create_file,
    create_symlink,
    directory_exists,
    get_head_directory,
    get_include_directory_from_path,
    get_mmk_library_file_from_path,
    get_project_top_directory,
    is_source_directory,
    is_test_directory,
    print_full_path,
    read_file,
)


def test_get_include_directory_from_path(tmp_path):
    include_dir = tmp_path / "include"
    create_dir(include_dir)
    assert get_include_directory_from_path(tmp_path) == include_dir


def test_get_include_directory_from_path_search_one_directory_up(tmp_path):
    include_dir = tmp_path / "include"
    create_dir(include_dir)
    assert get_include_directory_from_path(tmp_path / "src") == include_dir


def test_get_include_directory_from_path_fails(tmp_path):
    with pytest.raises(FsError):
        get_include_directory_from_path(tmp_path)


def test_is_source_directory_src(tmp_path):
    source_dir = tmp_path / "src"
    create_dir(source_dir)
    assert is_source_directory(source_dir)


def test_is_source_directory_source(tmp_path):
    source_dir = tmp_path / "source"
    create_dir(source_dir)
    assert is_source_directory(source_dir)


def test_is_source_directory_false():
    assert not is_source_directory(Path("/some/path/without/source/directory"))


def test_is_test_directory_true(tmp_path):
    test_dir = tmp_path / "test"
    create_dir(test_dir)
    assert is_test_directory(test_dir)


def test_is_test_directory_false():
    assert not is_test_directory(Path("/some/path/without/test/directory"))


def test_get_head_directory_gets_head():
    assert get_head_directory(Path("some/path/to/strip/head")) == Path("head")


def test_print_full_path_no_newline():
    assert (
        print_full_path("/this/is/some/str/path", "filename.rs", True)
        == "/this/is/some/str/path/filename.rs"
    )


def test_print_full_path_with_newline():
    assert (
        print_full_path("/this/is/some/str/path", "filename.rs", False)
        == "/this/is/some/str/path/filename.rs \\\n"
    )


def test_get_project_top_directory(tmp_path):
    src = tmp_path / "project" / "src"
    create_dir(src)
    assert get_project_top_directory(src / "main.cpp") == tmp_path / "project"
    assert get_project_top_directory(tmp_path / "lib" / "a.cpp") == tmp_path / "lib"


def test_mmk_library_file(tmp_path):
    with pytest.raises(FsError):
        get_mmk_library_file_from_path(tmp_path)
    (tmp_path / "lib.mmk").write_text("")
    assert get_mmk_library_file_from_path(tmp_path) == tmp_path / "lib.mmk"


def test_create_dir_is_idempotent(tmp_path):
    target = tmp_path / "a" / "b"
    create_dir(target)
    create_dir(target)
    assert directory_exists(target)


def test_create_file_and_read_back(tmp_path):
    path = tmp_path / "out.txt"
    with create_file(path) as fh:
        fh.write("content")
    assert read_file(path) == "content"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FsError):
        read_file(tmp_path / "missing.txt")


def test_create_symlink(tmp_path):
    target = tmp_path / "target.txt"
    target.write_text("data")
    link = tmp_path / "link.txt"
    create_symlink(target, link)
    assert link.is_symlink()
    assert link.read_text() == "data"
    with pytest.raises(FsError):
        create_symlink(target, link)