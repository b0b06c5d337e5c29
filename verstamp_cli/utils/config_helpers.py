"""
Configuration helper utilities for the verstamp CLI

Functions to find the config file, load it with CLI overrides and parse the
dependency version map.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from verstamp_orchestrator.config import PropagationConfig, get_workspace_root, load_propagation_config
from verstamp_orchestrator.exceptions import DependencyVersionsError

DEFAULT_CONFIG_NAMES = (
    Path("config/verstamp.yaml"),
    Path("verstamp.yaml"),
)


def find_default_config(root: Optional[Path] = None) -> Optional[Path]:
    """Find a verstamp config under ``root`` (default: cwd); None means built-in defaults."""
    base = Path(root) if root else Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_cli_config(
    config: Optional[str] = None,
    root: Optional[str] = None,
    verbose: bool = False,
) -> PropagationConfig:
    """Load the config named on the command line, or the default one.

    ``--root`` takes precedence over the ``root`` key of the config file.
    """
    config_path = Path(config) if config else find_default_config(Path(root) if root else None)
    cfg = load_propagation_config(config_path)
    if root:
        cfg.root = get_workspace_root(root)
    if verbose:
        cfg.logging.level = "DEBUG"
    return cfg


def parse_dependency_versions(raw: Optional[str]) -> Optional[Dict[str, str]]:
    """
    Parse the ``--dependency-versions`` JSON argument.

    Args:
        raw: JSON object text, e.g. '{"some-lib": "2.0.0"}'

    Returns:
        Mapping of package name to version, or None when nothing was given

    Raises:
        DependencyVersionsError: If the text is not a JSON object of strings
    """
    if raw is None or not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DependencyVersionsError(
            f"Dependency versions are not valid JSON: {e.msg}", raw=raw, original_exception=e
        ) from e
    if data is None:
        return None
    if not isinstance(data, dict):
        raise DependencyVersionsError("Dependency versions must be a JSON object", raw=raw)
    bad = [name for name, value in data.items() if not isinstance(value, str)]
    if bad:
        raise DependencyVersionsError(
            f"Dependency versions must be strings: {', '.join(sorted(bad))}", raw=raw
        )
    return data
