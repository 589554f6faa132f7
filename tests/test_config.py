"""Tests for the configuration module."""

import logging
from pathlib import Path

import pytest

from arithmetic_circuit._cli.config import (
    LOG_LEVEL_ENV_VAR,
    CircuitConfig,
    ConfigError,
    ModuleSource,
    ScriptSource,
    find_pyproject_toml,
    get_config,
    load_config,
    parse_log_level,
    resolve_log_level,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_get_config_uses_current_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should load the pyproject.toml found from the working directory."""
        (tmp_path / "pyproject.toml").write_text('[tool.arithmetic-circuit]\ncircuit = "pkg:circuit"\n')
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.circuit == ModuleSource(module_path="pkg:circuit")


class TestLoadConfigCircuit:
    """Tests for loading the circuit source."""

    def test_module_path_string(self, tmp_path: Path) -> None:
        """Should parse module path string format."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.arithmetic-circuit]
circuit = "examples.polynomial:circuit"
""",
        )

        config = load_config(pyproject)

        assert config.circuit == ModuleSource(module_path="examples.polynomial:circuit")
        assert config.project_root == tmp_path

    def test_module_path_without_colon_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid module path."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.arithmetic-circuit]
circuit = "examples.polynomial"
""",
        )

        with pytest.raises(ConfigError, match="Invalid module path"):
            load_config(pyproject)

    def test_script_path_with_name(self, tmp_path: Path) -> None:
        """Should parse script path with explicit variable name."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.arithmetic-circuit]
circuit = { script = "examples/polynomial.py", name = "circuit" }
""",
        )

        config = load_config(pyproject)

        assert isinstance(config.circuit, ScriptSource)
        assert config.circuit.script == tmp_path / "examples/polynomial.py"
        assert config.circuit.name == "circuit"

    def test_script_path_missing_script_key_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError when script key is missing."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.arithmetic-circuit]
circuit = { name = "circuit" }
""",
        )

        with pytest.raises(ConfigError, match="'script' string path"):
            load_config(pyproject)

    def test_invalid_name_type_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.arithmetic-circuit]
circuit = { script = "c.py", name = 1 }
""",
        )

        with pytest.raises(ConfigError, match="expected string"):
            load_config(pyproject)

    def test_invalid_circuit_type_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid circuit type."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.arithmetic-circuit]
circuit = 123
""",
        )

        with pytest.raises(ConfigError, match=r"Invalid.*circuit configuration"):
            load_config(pyproject)


class TestLoadConfigLogLevel:
    """Tests for the log_level setting."""

    def test_log_level(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.arithmetic-circuit]\nlog_level = "INFO"\n')

        assert load_config(pyproject).log_level == logging.INFO

    def test_unknown_log_level_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.arithmetic-circuit]\nlog_level = "loud"\n')

        with pytest.raises(ConfigError, match="log_level"):
            load_config(pyproject)


class TestLoadConfigEmptySection:
    """Tests for empty or missing configuration."""

    def test_no_tool_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "test"\n')

        config = load_config(pyproject)

        assert config == CircuitConfig(project_root=tmp_path)

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("invalid toml [[[")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_frozen(self) -> None:
        config = CircuitConfig()

        with pytest.raises(AttributeError):
            config.circuit = ModuleSource("pkg:circuit")  # type: ignore[misc]


class TestResolveLogLevel:
    """Tests for choosing the logging level."""

    def test_verbose_wins(self) -> None:
        config = CircuitConfig(log_level=logging.ERROR)
        level = resolve_log_level(verbose=True, config=config, environ={LOG_LEVEL_ENV_VAR: "error"})
        assert level == logging.DEBUG

    def test_environment_before_config(self) -> None:
        config = CircuitConfig(log_level=logging.ERROR)
        level = resolve_log_level(verbose=False, config=config, environ={LOG_LEVEL_ENV_VAR: "info"})
        assert level == logging.INFO

    def test_config_used_without_environment(self) -> None:
        config = CircuitConfig(log_level=logging.ERROR)
        assert resolve_log_level(verbose=False, config=config, environ={}) == logging.ERROR

    def test_default(self) -> None:
        assert resolve_log_level(verbose=False, config=CircuitConfig(), environ={}) == logging.WARNING

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")
        assert resolve_log_level(verbose=False, config=CircuitConfig()) == logging.DEBUG

    def test_invalid_environment_value(self) -> None:
        with pytest.raises(ConfigError, match=LOG_LEVEL_ENV_VAR):
            resolve_log_level(verbose=False, config=CircuitConfig(), environ={LOG_LEVEL_ENV_VAR: "chatty"})

    @pytest.mark.parametrize(("name", "level"), [("debug", logging.DEBUG), (" Warning ", logging.WARNING)])
    def test_parse_log_level(self, name: str, level: int) -> None:
        assert parse_log_level(name, "test") == level
