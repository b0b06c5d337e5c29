"""
verstamp version information.

Semantic Versioning: MAJOR for incompatible CLI or config-file changes,
MINOR for new artifact formats or commands, PATCH for fixes.

Version History:
- 1.1.0: Configurable build-type policy, template placeholder tracking
- 1.0.0: Initial release (set-version, parse, targets commands)
"""

__version__ = "1.1.0"
__release_date__ = "2026-10-18"


def get_full_version() -> str:
    """Version string shown by ``verstamp --version``."""
    return f"{__version__} ({__release_date__})"
