"""
Error catalog with resolution patterns for common set-version failures.

Used by the CLI to attach resolution hints to errors that did not come from
verstamp itself (permission problems, malformed config files, ...).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern
import re

from .exceptions import ErrorCategory, ResolutionHint


@dataclass
class ErrorPattern:
    """Pattern for identifying and resolving known errors"""

    pattern: Pattern[str]
    category: ErrorCategory
    title: str
    description: str
    resolution_hints: List[ResolutionHint]
    frequency: int = 0

    def matches(self, error_message: str) -> bool:
        return self.pattern.search(error_message) is not None


class ErrorCatalog:
    """
    Known error patterns and their resolutions.

    Usage:
        catalog = ErrorCatalog()
        hints = catalog.find_resolution_hints("Permission denied: 'package.json'")
    """

    def __init__(self):
        self.patterns: List[ErrorPattern] = []
        self._initialize_patterns()

    def _initialize_patterns(self) -> None:
        """Initialize catalog with known error patterns"""

        self.patterns.append(ErrorPattern(
            pattern=re.compile(r"(permission denied|read-only file system|operation not permitted)", re.IGNORECASE),
            category=ErrorCategory.FILESYSTEM,
            title="Artifact Not Writable",
            description="verstamp cannot write one of the artifact files",
            resolution_hints=[
                ResolutionHint(
                    title="Fix File Permissions",
                    description="Every artifact target must be writable by the current user",
                    steps=[
                        "Check ownership of the workspace: ls -l",
                        "Make sure no build tool holds the files locked",
                        "Re-run set-version",
                    ],
                )
            ]
        ))

        self.patterns.append(ErrorPattern(
            pattern=re.compile(r"(no such file or directory|not found|cannot access)", re.IGNORECASE),
            category=ErrorCategory.FILESYSTEM,
            title="Missing Artifact or Template",
            description="A configured target or template path does not exist",
            resolution_hints=[
                ResolutionHint(
                    title="Check Target Layout",
                    description="Paths are resolved against the workspace root",
                    steps=[
                        "List configured targets: verstamp targets",
                        "Pass the workspace explicitly: verstamp set-version --root <dir>",
                        "Point targets at the right files in config/verstamp.yaml",
                    ],
                )
            ]
        ))

        self.patterns.append(ErrorPattern(
            pattern=re.compile(r"(yaml|scanner error|mapping values are not allowed)", re.IGNORECASE),
            category=ErrorCategory.CONFIGURATION,
            title="Malformed Config File",
            description="The verstamp YAML config could not be parsed",
            resolution_hints=[
                ResolutionHint(
                    title="Validate YAML",
                    description="Fix indentation or quoting in the config file",
                    steps=[
                        "Show the effective targets: verstamp targets --config <file>",
                        "Quote regex patterns in the policy section",
                    ],
                )
            ]
        ))

        self.patterns.append(ErrorPattern(
            pattern=re.compile(r"(not valid json|expecting value|expecting property name|json)", re.IGNORECASE),
            category=ErrorCategory.ARTIFACT,
            title="Malformed Manifest",
            description="A package manifest is not valid JSON",
            resolution_hints=[
                ResolutionHint(
                    title="Repair the Manifest",
                    description="Manifests are rewritten from their parsed JSON",
                    steps=[
                        "Check for trailing commas or comments in package.json",
                        "Restore the file from the snapshot directory if it was partially written",
                    ],
                )
            ]
        ))

    def find_resolution_hints(self, error_message: str) -> List[ResolutionHint]:
        """
        Find resolution hints for given error message.

        Updates the frequency counter of every matched pattern.
        """
        hints = []
        for pattern in self.patterns:
            if pattern.matches(error_message):
                pattern.frequency += 1
                hints.extend(pattern.resolution_hints)
        return hints

    def get_pattern_statistics(self) -> Dict[str, int]:
        """Get error pattern frequency statistics"""
        return {
            pattern.title: pattern.frequency
            for pattern in sorted(self.patterns, key=lambda p: p.frequency, reverse=True)
        }


# Global error catalog instance
_global_catalog: Optional[ErrorCatalog] = None


def get_error_catalog() -> ErrorCatalog:
    """Get global error catalog instance (singleton)"""
    global _global_catalog
    if _global_catalog is None:
        _global_catalog = ErrorCatalog()
    return _global_catalog
