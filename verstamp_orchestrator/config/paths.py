"""Path utilities for configuration management."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


def get_workspace_root(root: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the workspace whose artifacts get rewritten.

    Relative paths are taken from the current working directory, which is
    also the default.

    Returns:
        Path: Absolute workspace path
    """
    return Path(root or Path.cwd()).expanduser().resolve()
