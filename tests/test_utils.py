"""Tests for shared utilities (skel.utils)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from skel.errors import ConfigError
from skel.utils import (
    Found,
    NotFound,
    ensure_dir,
    is_only_whitespace,
    print_debug,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    read_json_document,
    set_debug,
    walk_tree,
)


# ---------------------------------------------------------------------------
# read_json_document
# ---------------------------------------------------------------------------


class TestReadJsonDocument:
    @pytest.mark.unit
    def test_found(self, tmp_path: Path):
        path = tmp_path / "doc.json"
        path.write_text('{"name": "demo"}', encoding="utf-8")
        result = read_json_document(path)
        assert isinstance(result, Found)
        assert result.data == {"name": "demo"}
        assert result.path == path

    @pytest.mark.unit
    def test_missing_file_is_not_found(self, tmp_path: Path):
        result = read_json_document(tmp_path / "missing.json")
        assert isinstance(result, NotFound)
        assert result.path == tmp_path / "missing.json"

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            read_json_document(path)
        assert exc_info.value.path == path
        assert "Invalid JSON" in str(exc_info.value)

    @pytest.mark.unit
    def test_non_object_root(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            read_json_document(path)

    @pytest.mark.unit
    def test_directory_is_unreadable(self, tmp_path: Path):
        path = tmp_path / "dir.json"
        path.mkdir()
        with pytest.raises(ConfigError, match="Cannot read file"):
            read_json_document(path)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_nested(self, tmp_path: Path):
        result = ensure_dir(tmp_path / "a" / "b")
        assert result.is_dir()
        assert result == (tmp_path / "a" / "b").resolve()

    @pytest.mark.unit
    def test_existing_dir_no_error(self, tmp_path: Path):
        ensure_dir(tmp_path)
        assert tmp_path.is_dir()


class TestIsOnlyWhitespace:
    @pytest.mark.unit
    @pytest.mark.parametrize("content", [b"", b"\n", b"  \t\r\n\n"])
    def test_whitespace(self, content: bytes):
        assert is_only_whitespace(content)

    @pytest.mark.unit
    @pytest.mark.parametrize("content", [b"x", b"\n\n  a\n", b"\x00"])
    def test_not_whitespace(self, content: bytes):
        assert not is_only_whitespace(content)


class TestWalkTree:
    @pytest.mark.unit
    def test_preorder_lexical(self, tmp_path: Path):
        root = tmp_path / "root"
        (root / "b").mkdir(parents=True)
        (root / "a.txt").write_text("a")
        (root / "b" / "z.txt").write_text("z")
        (root / "b" / "c.txt").write_text("c")
        (root / "c.txt").write_text("c")

        order = [p.relative_to(root).as_posix() for p in walk_tree(root)]
        assert order == [".", "a.txt", "b", "b/c.txt", "b/z.txt", "c.txt"]

    @pytest.mark.unit
    def test_single_file(self, tmp_path: Path):
        path = tmp_path / "only.txt"
        path.write_text("x")
        assert list(walk_tree(path)) == [path]


# ---------------------------------------------------------------------------
# Console helpers
# ---------------------------------------------------------------------------


class TestConsoleHelpers:
    @pytest.mark.unit
    def test_print_helpers_do_not_raise(self):
        print_success("All files created")
        print_error("Something [failed]")
        print_warning("Check your template")
        print_summary_table({"Name": "demo"}, title="Template")

    @pytest.mark.unit
    def test_debug_suppressed_by_default(self):
        with patch("skel.utils.console") as console:
            print_debug("hidden")
        console.print.assert_not_called()

    @pytest.mark.unit
    def test_debug_printed_when_enabled(self):
        set_debug(True)
        with patch("skel.utils.console") as console:
            print_debug("visible [x]")
        console.print.assert_called_once()
        assert "visible" in console.print.call_args.args[0]
