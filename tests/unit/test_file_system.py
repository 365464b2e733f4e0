"""
Tests for file-system helpers.
"""

from pathlib import Path

import pytest

from rectospec.exceptions import FilesystemError
from rectospec.utils.file_system import (
    file_exists,
    read_json_file,
    read_text_file,
    resolve_output_path,
    resolve_within,
    write_text_file,
)


class TestReadWrite:
    """Test reading and writing files."""

    def test_write_creates_parents(self, tmp_path):
        """Test missing directories are created."""
        path = tmp_path / "a" / "b" / "c.feature"
        write_text_file(path, "Feature: 日本語")

        assert read_text_file(path) == "Feature: 日本語"

    def test_read_missing(self, tmp_path):
        """Test a missing file names the path."""
        path = tmp_path / "nope.txt"
        with pytest.raises(FilesystemError) as exc_info:
            read_text_file(path)

        assert str(exc_info.value) == f"File not found: {path}"
        assert exc_info.value.path == str(path)
        assert exc_info.value.code == "FILESYSTEM_ERROR"

    def test_read_json(self, tmp_path):
        """Test JSON decoding."""
        path = tmp_path / "data.json"
        path.write_text('{"title": "x"}', encoding="utf-8")

        assert read_json_file(path) == {"title": "x"}

    def test_read_invalid_json(self, tmp_path):
        """Test invalid JSON is a FilesystemError."""
        path = tmp_path / "data.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(FilesystemError) as exc_info:
            read_json_file(path)
        assert "Failed to parse JSON" in str(exc_info.value)

    def test_read_directory(self, tmp_path):
        """Test reading a directory fails cleanly."""
        with pytest.raises(FilesystemError):
            read_text_file(tmp_path)

    def test_file_exists(self, tmp_path):
        path = tmp_path / "x"
        assert file_exists(path) is False
        path.write_text("", encoding="utf-8")
        assert file_exists(path) is True


class TestResolveOutputPath:
    """Test output path resolution."""

    def test_default_beside_input(self, tmp_path):
        """Test the suffix is replaced next to the input."""
        assert resolve_output_path(tmp_path / "login.json", None, ".feature") == tmp_path / "login.feature"

    def test_explicit_output(self, project_dir):
        """Test an explicit output is resolved to an absolute path."""
        result = resolve_output_path("login.json", "out/custom.feature", ".feature")

        assert result == project_dir.resolve() / "out" / "custom.feature"
        assert result.is_absolute()

    def test_accepts_strings(self):
        """Test string input paths."""
        assert resolve_output_path("rec/flow.json", None, ".feature") == Path("rec/flow.feature")


class TestResolveWithin:
    """Test confining generated paths to a directory."""

    def test_nested_name(self, tmp_path):
        """Test a relative name lands under the directory."""
        assert resolve_within(tmp_path, "pages/LoginPage.ts") == tmp_path.resolve() / "pages" / "LoginPage.ts"

    def test_inner_parent_segments(self, tmp_path):
        """Test '..' that stays inside the directory is allowed."""
        assert resolve_within(tmp_path, "pages/../specs/a.spec.ts") == tmp_path.resolve() / "specs" / "a.spec.ts"

    @pytest.mark.parametrize("name", ["../../evil.ts", "pages/../../evil.ts", "/etc/evil.ts", ".", ""])
    def test_rejects_escape(self, tmp_path, name):
        """Test names outside the directory are refused."""
        with pytest.raises(FilesystemError) as exc_info:
            resolve_within(tmp_path / "tests", name)

        assert exc_info.value.code == "FILESYSTEM_ERROR"
        assert exc_info.value.path == name
