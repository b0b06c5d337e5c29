"""
Result containers for a propagation run.

Every artifact write returns a ``WriteResult``; the verification step
produces a ``VerificationReport``; ``PropagationResult`` bundles both with
the parsed version for the CLI and the JSON log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .config.policy import BuildType
from .version import VersionRecord


@dataclass
class WriteResult:
    """Outcome of writing one artifact"""

    target: str
    path: Path
    changed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "path": str(self.path),
            "changed": self.changed,
        }


@dataclass
class VerificationReport:
    """Changed-line count check over the verification subset"""

    expected: int
    matched: int
    files: List[str]
    per_file: Dict[str, int] = field(default_factory=dict)
    snapshot_dir: Path | None = None

    @property
    def is_verified(self) -> bool:
        return self.matched == self.expected

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expected": self.expected,
            "matched": self.matched,
            "verified": self.is_verified,
            "files": self.files,
            "per_file": self.per_file,
            "snapshot_dir": str(self.snapshot_dir) if self.snapshot_dir else None,
        }


@dataclass
class PropagationResult:
    """Everything one set-version invocation did"""

    version: VersionRecord
    build_type: BuildType
    writes: List[WriteResult]
    verification: VerificationReport
    snapshot_dir: Path

    @property
    def changed_targets(self) -> List[str]:
        return [w.target for w in self.writes if w.changed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version.version,
            "build_type": self.build_type.value,
            "writes": [w.to_dict() for w in self.writes],
            "verification": self.verification.to_dict(),
            "snapshot_dir": str(self.snapshot_dir),
        }
