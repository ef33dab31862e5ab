"""Tests for the configuration module."""

from pathlib import Path

import pytest

from prereq import DuplicatePolicy, ExportFormat
from prereq._cli.config import (
    ConfigError,
    PrereqConfig,
    find_pyproject_toml,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        result = find_pyproject_toml(tmp_path)

        assert result == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "data" / "fall"
        subdir.mkdir(parents=True)

        result = find_pyproject_toml(subdir)

        assert result == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        result = find_pyproject_toml(tmp_path)

        assert result is None


class TestLoadConfig:
    """Tests for loading [tool.prereq]."""

    def test_no_section(self, tmp_path: Path) -> None:
        """Should return an empty config rooted at the project."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == PrereqConfig(project_root=tmp_path)
        assert config.duplicates is DuplicatePolicy.REJECT

    def test_full_section(self, tmp_path: Path) -> None:
        """Should resolve paths against the project root and parse choices."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.prereq]
input = "data/courses.csv"
output = "out/order.toml"
format = "JSON"
duplicates = "overwrite"
""",
        )

        config = load_config(pyproject)

        assert config.input == tmp_path / "data/courses.csv"
        assert config.output == tmp_path / "out/order.toml"
        assert config.format is ExportFormat.JSON
        assert config.duplicates is DuplicatePolicy.OVERWRITE
        assert config.project_root == tmp_path

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        """Should not rebase absolute paths."""
        absolute = tmp_path / "elsewhere" / "courses.csv"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.prereq]\ninput = '{absolute.as_posix()}'\n")

        config = load_config(pyproject)

        assert config.input == absolute

    def test_non_string_path_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError when a path is not a string."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.prereq]\ninput = 3\n")

        with pytest.raises(ConfigError, match=r"\[tool.prereq\].input: expected string path"):
            load_config(pyproject)

    def test_unknown_duplicate_policy_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for an unsupported duplicates value."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.prereq]\nduplicates = 'merge'\n")

        with pytest.raises(ConfigError, match="'reject', 'overwrite'"):
            load_config(pyproject)

    def test_non_string_format_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError when format is not a string."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.prereq]\nformat = ['json']\n")

        with pytest.raises(ConfigError, match="format"):
            load_config(pyproject)

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for malformed TOML."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.prereq\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)
