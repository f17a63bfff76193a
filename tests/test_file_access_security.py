"""
Tests for path resolution and name validation.
"""

import os
import pytest

from librarium.FileAccessGate import InvalidPath, validate_name
from librarium.FileAccessGate.security import (
    check_extension_allowed,
    normalize_path,
    resolve_path,
    to_relative,
)


class TestResolvePath:
    """Tests for resolve_path."""

    @pytest.mark.parametrize("relative", ["", ".", "/", "readme.txt", "a/b/c.txt", "./a/./b"])
    def test_result_stays_under_base(self, temp_dir, relative):
        """Valid relative paths resolve beneath the base."""
        base = normalize_path(str(temp_dir))

        resolved = resolve_path(base, relative)

        assert resolved.startswith(base)

    def test_empty_path_is_base(self, temp_dir):
        """An empty path resolves to the base itself."""
        assert resolve_path(str(temp_dir), "") == normalize_path(str(temp_dir))

    @pytest.mark.parametrize("relative", [
        "..",
        "../etc/passwd",
        "a/../../b",
        "a/../b",
        "a\\..\\b",
        "a//..//b",
    ])
    def test_parent_traversal_rejected(self, temp_dir, relative):
        """Any '..' segment is rejected, even one that cancels out."""
        with pytest.raises(InvalidPath):
            resolve_path(str(temp_dir), relative)

    def test_leading_slash_treated_as_relative(self, temp_dir):
        """Absolute-looking paths are joined under the base."""
        resolved = resolve_path(str(temp_dir), "/etc/passwd")

        assert resolved == os.path.join(normalize_path(str(temp_dir)), "etc", "passwd")

    def test_null_byte_rejected(self, temp_dir):
        """NUL bytes never reach the filesystem."""
        with pytest.raises(InvalidPath):
            resolve_path(str(temp_dir), "file\x00.txt")

    def test_dotted_names_allowed(self, temp_dir):
        """Names that merely contain dots are not traversal."""
        resolved = resolve_path(str(temp_dir), "..hidden/file..txt")

        assert resolved.endswith(os.path.join("..hidden", "file..txt"))

    def test_to_relative_uses_forward_slashes(self, temp_dir):
        """Relative paths are expressed with '/' separators."""
        absolute = os.path.join(str(temp_dir), "a", "b.txt")

        assert to_relative(str(temp_dir), absolute) == "a/b.txt"
        assert to_relative(str(temp_dir), str(temp_dir)) == ""


class TestValidateName:
    """Tests for single-segment name validation."""

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b"])
    def test_invalid_names(self, name):
        """Empty, dot, and separator-containing names are rejected."""
        with pytest.raises(InvalidPath):
            validate_name(name)

    def test_valid_name_returned(self):
        """Plain names pass through unchanged."""
        assert validate_name("greeting.yml") == "greeting.yml"


class TestExtensionCheck:
    """Tests for check_extension_allowed."""

    def test_case_insensitive(self):
        """Extension matching ignores case."""
        assert check_extension_allowed("README.MD", [".md"]) is True

    def test_not_listed(self):
        """Unlisted extensions are refused."""
        assert check_extension_allowed("photo.png", [".md", ".txt"]) is False

    def test_no_extension(self):
        """Files without an extension are refused."""
        assert check_extension_allowed("Makefile", [".md"]) is False
