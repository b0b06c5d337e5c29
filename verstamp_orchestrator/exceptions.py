"""
Structured exception hierarchy with execution context for verstamp.

All exceptions include:
- correlation_id: Trace an error back to the propagation run that raised it
- execution_context: Version, build type, artifact target, snapshot location
- resolution_hints: Actionable suggestions for common issues
- severity: CRITICAL, ERROR, WARNING
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid


class ErrorSeverity(str, Enum):
    """Error severity levels for triage"""
    CRITICAL = "critical"      # Artifacts left partially updated
    ERROR = "error"            # Invocation aborted before or during writes
    WARNING = "warning"        # Non-blocking issue, release may still be fine


class ErrorCategory(str, Enum):
    """Error categories for diagnostics and resolution routing"""
    INPUT = "input"                    # Bad version string, build type, dependency map
    ARTIFACT = "artifact"              # Template, manifest or properties file drifted
    CONFIGURATION = "configuration"    # Invalid verstamp config file
    FILESYSTEM = "filesystem"          # Missing files, permissions


@dataclass
class ExecutionContext:
    """Execution context attached to every verstamp error"""

    # Input context
    raw_version: Optional[str] = None
    build_type: Optional[str] = None

    # Artifact context
    target_name: Optional[str] = None
    artifact_path: Optional[str] = None
    snapshot_dir: Optional[str] = None

    # Orchestration context
    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    run_id: Optional[str] = None

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    # Additional metadata
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context for logging"""
        return {
            k: v for k, v in self.__dict__.items()
            if v is not None and not k.startswith('_') and v != {}
        }

    def format_summary(self) -> str:
        """Human-readable one-line summary"""
        parts = []
        if self.raw_version:
            parts.append(f"version={self.raw_version}")
        if self.build_type:
            parts.append(f"build_type={self.build_type}")
        if self.target_name:
            parts.append(f"target={self.target_name}")
        if self.correlation_id:
            parts.append(f"correlation_id={self.correlation_id}")
        return " | ".join(parts)


@dataclass
class ResolutionHint:
    """Actionable resolution guidance for common error patterns"""

    title: str
    description: str
    steps: List[str]
    documentation_url: Optional[str] = None


class VerstampError(Exception):
    """
    Base exception for verstamp with structured context.

    Every error raised by the parser, the renderers or the orchestrator
    inherits from this class so the CLI can print one diagnostic format
    and exit non-zero.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ExecutionContext] = None,
        category: ErrorCategory = ErrorCategory.INPUT,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        resolution_hints: Optional[List[ResolutionHint]] = None,
        original_exception: Optional[Exception] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ExecutionContext()
        if metadata:
            self.context.metadata.update(metadata)
        self.category = category
        self.severity = severity
        self.resolution_hints = resolution_hints or []
        self.original_exception = original_exception
        self.additional_data = kwargs

    def format_diagnostic_message(self) -> str:
        """
        Format diagnostic message for logs and user display.

        Returns multi-line formatted error with:
        - Error message and severity
        - Execution context
        - Resolution hints
        - Original exception (if available)
        """
        lines = [
            f"{'='*80}",
            f"ERROR: {self.message}",
            f"Severity: {self.severity.value.upper()} | Category: {self.category.value}",
            f"{'='*80}",
            "",
            "EXECUTION CONTEXT:",
        ]

        context_dict = self.context.to_dict()
        for key, value in context_dict.items():
            if key == 'metadata' and isinstance(value, dict):
                for meta_key, meta_value in value.items():
                    lines.append(f"  {meta_key}: {meta_value}")
            else:
                lines.append(f"  {key}: {value}")

        if self.resolution_hints:
            lines.append("")
            lines.append("RESOLUTION HINTS:")
            for i, hint in enumerate(self.resolution_hints, 1):
                lines.append(f"\n{i}. {hint.title}")
                lines.append(f"   {hint.description}")
                if hint.steps:
                    lines.append("   Steps:")
                    for step in hint.steps:
                        lines.append(f"     - {step}")
                if hint.documentation_url:
                    lines.append(f"   Docs: {hint.documentation_url}")

        if self.original_exception:
            lines.append("")
            lines.append("ORIGINAL EXCEPTION:")
            lines.append(f"  {type(self.original_exception).__name__}: {str(self.original_exception)}")

        lines.append("")
        lines.append(f"{'='*80}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for structured logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context.to_dict(),
            "resolution_hints": [
                {
                    "title": hint.title,
                    "description": hint.description,
                    "steps": hint.steps,
                    "documentation_url": hint.documentation_url,
                }
                for hint in self.resolution_hints
            ],
            "original_exception": str(self.original_exception) if self.original_exception else None,
            **self.additional_data
        }


# Input Errors
class InputError(VerstampError):
    """Invalid command input; raised before any artifact is touched"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.INPUT, **kwargs)


class InvalidBuildTypeError(InputError):
    """Build type is not one of dry-run, nightly, release"""
    def __init__(self, build_type: Any, valid: Optional[List[str]] = None, **kwargs):
        valid = valid or []
        message = f"Unsupported build type: {build_type!r}"
        if valid:
            message = f"{message} (expected one of: {', '.join(valid)})"
        kwargs.setdefault("metadata", {})["build_type"] = build_type
        super().__init__(message, **kwargs)
        self.build_type = build_type


class VersionFormatError(InputError):
    """Raw version string does not match MAJOR.MINOR.PATCH[-PRERELEASE]"""
    def __init__(self, raw_version: Any, **kwargs):
        message = f"Invalid version format: {raw_version!r} (expected MAJOR.MINOR.PATCH[-PRERELEASE])"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Use a three-part version",
                    description="Each of MAJOR, MINOR and PATCH must be digits",
                    steps=[
                        "Examples: 0.75.0, 0.75.0-rc.1, v1.2.3",
                        "Drop a fourth component (1.2.3.4 is not accepted)",
                    ],
                )
            ]
        super().__init__(message, **kwargs)
        self.raw_version = raw_version


class BuildTypeMismatchError(InputError):
    """Parsed version shape violates the build type's policy"""
    def __init__(self, version: str, build_type: str, rule: str, **kwargs):
        message = f"Version {version} is not valid for build type {build_type}: {rule}"
        kwargs.setdefault("metadata", {})["rule"] = rule
        super().__init__(message, **kwargs)
        self.version = version
        self.build_type = build_type
        self.rule = rule


class DependencyVersionsError(InputError):
    """Dependency version map is not a JSON object of name -> version strings"""
    def __init__(self, message: str, raw: Optional[str] = None, **kwargs):
        if raw is not None:
            kwargs.setdefault("metadata", {})["dependency_versions"] = raw[:200]
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Pass a JSON object",
                    description="Dependency versions map package names to version strings",
                    steps=['Example: -d \'{"some-lib": "2.0.0"}\''],
                )
            ]
        super().__init__(message, **kwargs)


# Artifact Errors
class ArtifactError(VerstampError):
    """An artifact could not be rendered or written"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.ARTIFACT, **kwargs)


class TemplateRenderError(ArtifactError):
    """Template placeholders missing, duplicated or unknown"""
    def __init__(
        self,
        message: str,
        template: Optional[str] = None,
        placeholders: Optional[List[str]] = None,
        **kwargs
    ):
        if template:
            message = f"{message} (template: {template})"
        if placeholders:
            kwargs.setdefault("metadata", {})["placeholders"] = placeholders
        super().__init__(message, severity=ErrorSeverity.ERROR, **kwargs)


class PropertiesUpdateError(ArtifactError):
    """VERSION_NAME= line not found in the build-tool properties file"""
    def __init__(self, message: str = "Couldn't update version for Gradle", path: Optional[str] = None, **kwargs):
        if path:
            message = f"{message} (file: {path})"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Restore the VERSION_NAME line",
                    description="Other artifacts may already carry the new version",
                    steps=[
                        "Add a line starting with VERSION_NAME= to the properties file",
                        "Diff the workspace against the snapshot directory printed at start",
                        "Re-run set-version",
                    ],
                )
            ]
        super().__init__(message, severity=ErrorSeverity.CRITICAL, **kwargs)


class ManifestError(ArtifactError):
    """Package manifest is unreadable or not a JSON object"""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message, severity=ErrorSeverity.ERROR, **kwargs)


class ArtifactFileError(VerstampError):
    """Artifact or template file could not be read or written"""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        if path:
            message = f"{message} (file: {path})"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Check the artifact layout",
                    description="Target and template paths are relative to the workspace root",
                    steps=[
                        "List configured targets: verstamp targets",
                        "Run from the workspace root or pass --root",
                    ],
                )
            ]
        super().__init__(message, category=ErrorCategory.FILESYSTEM, **kwargs)


# Configuration Errors
class ConfigurationError(VerstampError):
    """Invalid verstamp configuration"""
    def __init__(self, message: str, config_path: Optional[str] = None, **kwargs):
        if config_path:
            message = f"{message} (config_path: {config_path})"
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
