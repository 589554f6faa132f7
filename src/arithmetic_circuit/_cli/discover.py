"""Utilities to discover circuits defined in Python scripts and modules.

This module was adapted from `fastapi_cli.discover` of package `fastapi-cli` version 0.0.8 (77e6d1f).
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from arithmetic_circuit._circuit import Circuit

if TYPE_CHECKING:
    from types import ModuleType

    from .config import CircuitSource

logger = logging.getLogger(__name__)


@dataclass
class ModuleData:
    """Module data for a Python module."""

    module_import_str: str
    extra_sys_path: Path
    module_paths: list[Path]


def get_module_data_from_path(path: Path) -> ModuleData:
    """Get module data from a file path.

    Args:
        path: Path to a Python file or package

    Returns:
        ModuleData containing module import information

    """
    use_path = path.resolve()
    module_path = use_path
    if use_path.is_file() and use_path.stem == "__init__":
        module_path = use_path.parent
    module_paths = [module_path]
    extra_sys_path = module_path.parent
    for parent in module_path.parents:
        init_path = parent / "__init__.py"
        if init_path.is_file():
            module_paths.insert(0, parent)
            extra_sys_path = parent.parent
        else:
            break

    module_str = ".".join(p.stem for p in module_paths)
    return ModuleData(
        module_import_str=module_str,
        extra_sys_path=extra_sys_path.resolve(),
        module_paths=module_paths,
    )


def _get_circuit(module: ModuleType, name: str, origin: str) -> Circuit:
    if not hasattr(module, name):
        msg = f"Could not find circuit '{name}' in {origin}"
        raise ValueError(msg)
    circuit = getattr(module, name)
    if not isinstance(circuit, Circuit):
        msg = f"'{name}' in {origin} is not a Circuit instance"
        raise TypeError(msg)
    return circuit


def load_circuit_from_script(script_path: Path, circuit_name: str | None = None) -> Circuit:
    """Load a circuit from a Python script path.

    Args:
        script_path: Path to the Python script defining the circuit
        circuit_name: Name of the circuit variable. If None, the first Circuit found is used

    Returns:
        The loaded Circuit instance

    Raises:
        ImportError: If the module cannot be imported
        ValueError: If no circuit is found or the named variable does not exist
        TypeError: If the named variable is not a Circuit instance

    """
    module_data = get_module_data_from_path(script_path)
    sys.path.insert(0, str(module_data.extra_sys_path))

    try:
        module = importlib.import_module(module_data.module_import_str)
    except (ImportError, ValueError):
        logger.exception("Import error")
        logger.warning("Ensure all the package directories have an __init__.py file")
        raise

    if circuit_name:
        return _get_circuit(module, circuit_name, module_data.module_import_str)

    for name in dir(module):
        obj = getattr(module, name)
        if isinstance(obj, Circuit):
            logger.debug("Found circuit: %s", name)
            return obj

    msg = "Could not find a Circuit in module, try using --circuit"
    raise ValueError(msg)


def load_circuit_from_module_path(module_path: str) -> Circuit:
    """Load a circuit from a module path (e.g., 'examples.polynomial:circuit').

    Raises:
        ValueError: If module path format is invalid
        TypeError: If the specified variable is not a Circuit instance

    """
    if ":" not in module_path:
        msg = "Module path must be in format 'module.path:variable_name'"
        raise ValueError(msg)

    module_name, circuit_name = module_path.split(":", 1)
    module = importlib.import_module(module_name)
    return _get_circuit(module, circuit_name, f"module '{module_name}'")


def load_circuit(path: str, circuit_name: str | None = None) -> Circuit:
    """Load a circuit from a script path or a 'module.path:variable' string."""
    if ":" in path and not Path(path).exists():
        return load_circuit_from_module_path(path)
    return load_circuit_from_script(Path(path), circuit_name)


def load_circuit_from_source(source: CircuitSource) -> Circuit:
    """Load a circuit from a configured CircuitSource (script or module)."""
    from .config import ModuleSource, ScriptSource  # noqa: PLC0415

    match source:
        case ScriptSource(script=script, name=name):
            return load_circuit_from_script(script, name)
        case ModuleSource(module_path=module_path):
            return load_circuit_from_module_path(module_path)
