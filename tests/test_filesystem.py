import os
from pathlib import PurePosixPath

import pytest

from student_index.services.filesystem import LocalFileSystem, MemoryFileSystem, display_name


def test_memory_listing_separates_dirs_and_files():
    fs = MemoryFileSystem()
    fs.add_file("root/a/one.json")
    fs.add_file("root/a/sub/two.json")
    fs.add_dir("root/a/empty")

    assert fs.list_files(PurePosixPath("root/a")) == ["one.json"]
    assert sorted(fs.list_dirs(PurePosixPath("root/a"))) == ["empty", "sub"]
    assert fs.list_dirs(PurePosixPath("root/missing")) == []


def test_memory_make_dirs_through_file_fails():
    fs = MemoryFileSystem()
    fs.add_file("root/a")
    with pytest.raises(NotADirectoryError):
        fs.make_dirs(PurePosixPath("root/a/b"))


def test_memory_write_requires_parent():
    fs = MemoryFileSystem()
    with pytest.raises(FileNotFoundError):
        fs.write_text(PurePosixPath("nowhere/index.json"), "{}")


def test_local_listing_skips_symlinked_dirs(tmp_path):
    (tmp_path / "real").mkdir()
    (tmp_path / "file.json").write_text("{}", encoding="utf-8")
    (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

    fs = LocalFileSystem()
    assert fs.list_dirs(tmp_path) == ["real"]
    assert fs.list_files(tmp_path) == ["file.json"]
    assert fs.list_dirs(tmp_path / "missing") == []


def test_local_roundtrip(tmp_path):
    fs = LocalFileSystem()
    target = tmp_path / "x" / "y" / "index.json"
    fs.make_dirs(target.parent)
    fs.write_text(target, "한글\n")
    assert fs.read_text(target) == "한글\n"


def test_local_failed_encode_keeps_previous_content(tmp_path):
    target = tmp_path / "index.json"
    target.write_text("previous\n", encoding="utf-8")

    with pytest.raises(UnicodeEncodeError):
        LocalFileSystem().write_text(target, "\udcff")

    assert target.read_text(encoding="utf-8") == "previous\n"


def test_display_name_replaces_undecodable_bytes():
    assert display_name("260114.json") == "260114.json"
    assert display_name("학생") == "학생"
    assert display_name(os.fsdecode(b"\xff.json")) == "\ufffd.json"
