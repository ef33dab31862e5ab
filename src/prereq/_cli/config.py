"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from prereq._errors import PrereqError
from prereq._io import ExportFormat
from prereq._models import DuplicatePolicy


class ConfigError(PrereqError):
    """Error in prereq configuration."""


@dataclass(slots=True, frozen=True)
class PrereqConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    output: Path | None = None
    format: ExportFormat | None = None
    duplicates: DuplicatePolicy = DuplicatePolicy.REJECT
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.prereq].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


E = TypeVar("E", ExportFormat, DuplicatePolicy)


def _parse_choice(
    section: dict[str, object],
    key: str,
    enum_type: type[E],
) -> E | None:
    if key not in section:
        return None
    value = section[key]
    choices = ", ".join(f"'{member.value}'" for member in enum_type)
    if not isinstance(value, str):
        msg = f"Invalid [tool.prereq].{key}: expected one of {choices}"
        raise ConfigError(msg)
    try:
        return enum_type(value.lower())
    except ValueError:
        msg = f"Invalid [tool.prereq].{key} '{value}': expected one of {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> PrereqConfig:
    """Load and validate [tool.prereq] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed PrereqConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    # Extract [tool.prereq] section
    tool_section = data.get("tool", {})
    prereq_section = tool_section.get("prereq", {})

    if not prereq_section:
        # No [tool.prereq] section - return empty config
        return PrereqConfig(project_root=project_root)

    duplicates = _parse_choice(prereq_section, "duplicates", DuplicatePolicy)

    return PrereqConfig(
        input=_parse_path(prereq_section, "input", project_root),
        output=_parse_path(prereq_section, "output", project_root),
        format=_parse_choice(prereq_section, "format", ExportFormat),
        duplicates=duplicates if duplicates is not None else DuplicatePolicy.REJECT,
        project_root=project_root,
    )


def get_config() -> PrereqConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        PrereqConfig (may be empty if no pyproject.toml or no [tool.prereq] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return PrereqConfig()
    return load_config(pyproject_path)
