"""
verstamp orchestrator core package.

Parses a release version, renders it into every configured artifact and
verifies the result against pre-write snapshots.
"""

from _version import __version__, get_full_version

from .config import (
    ArtifactFormat,
    ArtifactTarget,
    BuildType,
    BuildTypePolicy,
    PropagationConfig,
    load_propagation_config,
)
from .exceptions import (
    ArtifactError,
    ArtifactFileError,
    BuildTypeMismatchError,
    ConfigurationError,
    DependencyVersionsError,
    ExecutionContext,
    InputError,
    InvalidBuildTypeError,
    ManifestError,
    PropertiesUpdateError,
    ResolutionHint,
    TemplateRenderError,
    VersionFormatError,
    VerstampError,
)
from .logger import JSONFormatter, ProductionLogger, get_logger
from .manifests import apply_package_versions, update_template_package
from .propagator import VersionPropagator, propagate
from .renderers import get_renderer
from .run_summary import PropagationResult, VerificationReport, WriteResult
from .snapshots import count_matching_changed_lines, save_files
from .version import VersionRecord, parse_version, validate_build_type

__all__ = [
    # Version
    "__version__",
    "get_full_version",
    # Config
    "ArtifactFormat",
    "ArtifactTarget",
    "BuildType",
    "BuildTypePolicy",
    "PropagationConfig",
    "load_propagation_config",
    # Errors
    "VerstampError",
    "InputError",
    "InvalidBuildTypeError",
    "VersionFormatError",
    "BuildTypeMismatchError",
    "DependencyVersionsError",
    "ArtifactError",
    "ArtifactFileError",
    "TemplateRenderError",
    "PropertiesUpdateError",
    "ManifestError",
    "ConfigurationError",
    "ExecutionContext",
    "ResolutionHint",
    # Logging
    "JSONFormatter",
    "ProductionLogger",
    "get_logger",
    # Core
    "VersionRecord",
    "parse_version",
    "validate_build_type",
    "get_renderer",
    "apply_package_versions",
    "update_template_package",
    "save_files",
    "count_matching_changed_lines",
    "VersionPropagator",
    "propagate",
    "PropagationResult",
    "VerificationReport",
    "WriteResult",
]
