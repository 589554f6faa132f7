"""Configuration loading from pyproject.toml and the environment."""

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import cast

TOOL_SECTION = "arithmetic-circuit"
LOG_LEVEL_ENV_VAR = "ARITHMETIC_CIRCUIT_LOG"

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
DEFAULT_LOG_LEVEL = logging.WARNING


class ConfigError(Exception):
    """Error in arithmetic-circuit configuration."""


@dataclass(slots=True, frozen=True)
class ScriptSource:
    """Script path with optional variable name."""

    script: Path
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ModuleSource:
    """Module path with variable name (e.g., 'examples.polynomial:circuit')."""

    module_path: str


CircuitSource = ScriptSource | ModuleSource


@dataclass(slots=True, frozen=True)
class CircuitConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    circuit: CircuitSource | None = None
    log_level: int | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    current = (start_dir or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def parse_log_level(value: object, origin: str) -> int:
    """Turn a level name such as ``"debug"`` into a logging level.

    Raises:
        ConfigError: If the name is not a known level.

    """
    if not isinstance(value, str) or value.strip().lower() not in LOG_LEVELS:
        msg = f"Invalid {origin}: {value!r}. Expected one of: {', '.join(LOG_LEVELS)}"
        raise ConfigError(msg)
    return LOG_LEVELS[value.strip().lower()]


def _parse_circuit_source(value: object, project_root: Path) -> CircuitSource:
    """Parse the circuit field from config.

    Args:
        value: The raw value from TOML (string or dict)
        project_root: Project root directory for resolving relative paths

    Returns:
        Parsed CircuitSource

    Raises:
        ConfigError: If the value format is invalid

    """
    if isinstance(value, str):
        if ":" not in value:
            msg = f"Invalid module path '{value}'. Expected format: 'module.path:variable_name'"
            raise ConfigError(msg)
        return ModuleSource(module_path=value)

    if isinstance(value, dict):
        value_dict = cast("dict[str, object]", value)
        script_value = value_dict.get("script")
        if not isinstance(script_value, str):
            msg = f"Invalid [tool.{TOOL_SECTION}].circuit: expected a 'script' string path"
            raise ConfigError(msg)
        script_path = Path(script_value)
        if not script_path.is_absolute():
            script_path = project_root / script_path

        name = value_dict.get("name")
        if name is not None and not isinstance(name, str):
            msg = f"Invalid [tool.{TOOL_SECTION}].circuit.name: expected string"
            raise ConfigError(msg)

        return ScriptSource(script=script_path, name=name)

    msg = f"Invalid [tool.{TOOL_SECTION}].circuit configuration. Expected string or table with 'script' key."
    raise ConfigError(msg)


def load_config(pyproject_path: Path) -> CircuitConfig:
    """Load and validate [tool.arithmetic-circuit] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed CircuitConfig

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

    section = data.get("tool", {}).get(TOOL_SECTION, {})
    if not section:
        return CircuitConfig(project_root=project_root)

    circuit_source: CircuitSource | None = None
    if "circuit" in section:
        circuit_source = _parse_circuit_source(section["circuit"], project_root)

    log_level: int | None = None
    if "log_level" in section:
        log_level = parse_log_level(section["log_level"], f"[tool.{TOOL_SECTION}].log_level")

    return CircuitConfig(circuit=circuit_source, log_level=log_level, project_root=project_root)


def get_config() -> CircuitConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        CircuitConfig (may be empty if no pyproject.toml or no [tool.arithmetic-circuit] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return CircuitConfig()
    return load_config(pyproject_path)


def resolve_log_level(
    *,
    verbose: bool,
    config: CircuitConfig,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick the logging level: --verbose, then the environment, then pyproject.toml.

    Raises:
        ConfigError: If the environment variable holds an unknown level.

    """
    if verbose:
        return logging.DEBUG

    environ = os.environ if environ is None else environ
    env_value = environ.get(LOG_LEVEL_ENV_VAR)
    if env_value:
        return parse_log_level(env_value, f"${LOG_LEVEL_ENV_VAR}")

    if config.log_level is not None:
        return config.log_level
    return DEFAULT_LOG_LEVEL
