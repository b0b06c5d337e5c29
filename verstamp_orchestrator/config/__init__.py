"""Configuration module for verstamp.

Submodules:
    - paths: Workspace root resolution
    - policy: Build types and per-build-type version policy
    - targets: Artifact formats, targets and the default layout
    - loader: PropagationConfig and config loading
"""

from .paths import get_workspace_root
from .policy import (
    NIGHTLY_PRERELEASE_PATTERN,
    NIGHTLY_QUALIFIER_PATTERN,
    RELEASE_CANDIDATE_PATTERN,
    BuildType,
    BuildTypePolicy,
    default_policies,
)
from .targets import (
    SOURCE_CONSTANT_FORMATS,
    ArtifactFormat,
    ArtifactTarget,
    default_targets,
)
from .loader import (
    LoggingSettings,
    PropagationConfig,
    load_propagation_config,
)

__all__ = [
    "get_workspace_root",
    "NIGHTLY_PRERELEASE_PATTERN",
    "NIGHTLY_QUALIFIER_PATTERN",
    "RELEASE_CANDIDATE_PATTERN",
    "BuildType",
    "BuildTypePolicy",
    "default_policies",
    "SOURCE_CONSTANT_FORMATS",
    "ArtifactFormat",
    "ArtifactTarget",
    "default_targets",
    "LoggingSettings",
    "PropagationConfig",
    "load_propagation_config",
]
