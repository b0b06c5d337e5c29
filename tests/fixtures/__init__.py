"""
Shared Test Fixtures for verstamp

- workspace.py: A sample workspace with templates and artifacts, plus
  configs and loggers pointed at it
"""

from .workspace import (
    SOURCE_TEMPLATES,
    quiet_logger,
    sample_workspace,
    workspace_config,
    write_workspace,
)

__all__ = [
    "SOURCE_TEMPLATES",
    "quiet_logger",
    "sample_workspace",
    "workspace_config",
    "write_workspace",
]
