"""
verstamp CLI Package

A Rich-based command line wrapper around verstamp_orchestrator.
"""

from .main import app
from _version import __version__, get_full_version

__all__ = ["app", "__version__", "get_full_version"]
