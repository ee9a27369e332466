"""
Unit tests for the filesystem instruction store.
"""

import logging
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "app"))

from page_context.models import ReadStatus
from page_context.store import FileSystemDocumentStore, join_path


class TestJoinPath:

    def test_skips_empty_parts(self):
        assert join_path("", "seo", "", "_base.md") == "seo/_base.md"

    def test_all_empty(self):
        assert join_path("", "") == ""


class TestRead:
    """Test the three-valued read result."""

    def test_found_text_is_trimmed(self, make_instructions):
        root = make_instructions({"_base.md": "\n\n  Hello  \n"})
        store = FileSystemDocumentStore(root)

        result = store.read("_base.md")

        assert result.status == ReadStatus.FOUND
        assert result.text == "Hello"
        assert result.path == "_base.md"

    def test_missing_file_is_not_found(self, instructions_dir):
        store = FileSystemDocumentStore(instructions_dir)

        result = store.read("nope.md")

        assert result.status == ReadStatus.NOT_FOUND
        assert store.load("nope.md") is None

    def test_directory_is_not_a_document(self, make_instructions):
        root = make_instructions({"seo.md/_base.md": "inside"})
        store = FileSystemDocumentStore(root)

        assert store.read("seo.md").status == ReadStatus.NOT_FOUND

    def test_undecodable_file_is_read_error(self, instructions_dir, caplog):
        (instructions_dir / "bad.md").write_bytes(b"\xff\xfe\xfa\x00broken")
        store = FileSystemDocumentStore(instructions_dir)

        with caplog.at_level(logging.WARNING, logger="page_context.store"):
            result = store.read("bad.md")

        assert result.status == ReadStatus.READ_ERROR
        assert result.error
        assert store.read_errors == 1
        assert "bad.md" in caplog.text

    def test_read_error_loads_as_absent(self, instructions_dir):
        (instructions_dir / "bad.md").write_bytes(b"\xff\xfe\xfa")
        store = FileSystemDocumentStore(instructions_dir)

        assert store.load("bad.md") is None


class TestFolders:

    def test_has_folder(self, make_instructions):
        root = make_instructions({"seo/_base.md": "x", "file.md": "y"})
        store = FileSystemDocumentStore(root)

        assert store.has_folder("seo")
        assert not store.has_folder("file.md")
        assert not store.has_folder("missing")

    def test_list_folders_sorted(self, make_instructions):
        root = make_instructions({
            "zeta/_config.json": "{}",
            "alpha/_config.json": "{}",
            "readme.md": "not a folder",
        })
        store = FileSystemDocumentStore(root)

        assert store.list_folders() == ["alpha", "zeta"]

    def test_list_folders_of_missing_root(self, tmp_path):
        store = FileSystemDocumentStore(tmp_path / "missing")

        assert store.list_folders() == []


class TestStoreBoundary:
    """Test that lookups never reach outside the store root."""

    def test_parent_paths_are_refused(self, tmp_path, make_instructions):
        root = make_instructions({"app/_base.md": "inside"})
        (tmp_path / "_base.md").write_text("outside")
        (tmp_path / "sibling").mkdir()
        store = FileSystemDocumentStore(root)

        assert store.read("../_base.md").status == ReadStatus.NOT_FOUND
        assert store.read("app/../../_base.md").status == ReadStatus.NOT_FOUND
        assert not store.has_folder("..")
        assert not store.has_folder("../sibling")
        assert store.list_folders("..") == []

    def test_absolute_paths_are_refused(self, tmp_path, make_instructions):
        root = make_instructions({"app/_base.md": "inside"})
        outside = tmp_path / "outside.md"
        outside.write_text("outside")
        store = FileSystemDocumentStore(root)

        assert store.load(str(outside)) is None

    def test_paths_that_stay_inside_are_allowed(self, make_instructions):
        root = make_instructions({"app/_base.md": "inside"})
        store = FileSystemDocumentStore(root)

        assert store.load("app/../app/_base.md") == "inside"
        assert store.has_folder("app/.")

    def test_relative_root(self, make_instructions, monkeypatch):
        root = make_instructions({"_base.md": "root doc"})
        monkeypatch.chdir(root.parent)
        store = FileSystemDocumentStore(root.name)

        assert store.load("_base.md") == "root doc"
        assert store.load("../instructions/_base.md") == "root doc"
