"""Build types and the per-build-type version acceptance policy."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


NIGHTLY_PRERELEASE_PATTERN = r"^\d{8}-\d{4}(-[0-9a-f]{7,40})?$"
NIGHTLY_QUALIFIER_PATTERN = r"^nightly-"
RELEASE_CANDIDATE_PATTERN = r"^rc\.\d+$"


class BuildType(str, Enum):
    """Build classifier controlling which version shapes are acceptable."""
    DRY_RUN = "dry-run"
    NIGHTLY = "nightly"
    RELEASE = "release"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class BuildTypePolicy(BaseModel):
    """Acceptance rules for the prerelease part of a version.

    Rejected patterns are checked before allowed ones. An empty
    ``allowed_prerelease`` list accepts any suffix not rejected.
    """
    require_prerelease: bool = Field(default=False, description="Reject versions without a -PRERELEASE suffix")
    allowed_prerelease: List[str] = Field(default_factory=list, description="Regexes a prerelease must match (any)")
    rejected_prerelease: List[str] = Field(default_factory=list, description="Regexes a prerelease must not match")
    description: str = ""

    @field_validator("allowed_prerelease", "rejected_prerelease")
    @classmethod
    def _patterns_compile(cls, patterns: List[str]) -> List[str]:
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid prerelease pattern {pattern!r}: {e}") from e
        return patterns


def default_policies() -> Dict[BuildType, BuildTypePolicy]:
    """Default policy table.

    - dry-run: any well-formed version
    - nightly: prerelease required, either ``nightly-...`` or a timestamp/commit suffix
      (``20261018-0930`` or ``20261018-0930-0bc4547fc``)
    - release: no prerelease, or a release candidate ``rc.N``; nightly-style
      suffixes are rejected
    """
    return {
        BuildType.DRY_RUN: BuildTypePolicy(
            description="Any MAJOR.MINOR.PATCH[-PRERELEASE]",
        ),
        BuildType.NIGHTLY: BuildTypePolicy(
            require_prerelease=True,
            allowed_prerelease=[NIGHTLY_QUALIFIER_PATTERN, NIGHTLY_PRERELEASE_PATTERN],
            description="Prerelease must be nightly-... or YYYYMMDD-HHMM[-commit]",
        ),
        BuildType.RELEASE: BuildTypePolicy(
            allowed_prerelease=[RELEASE_CANDIDATE_PATTERN],
            rejected_prerelease=[NIGHTLY_QUALIFIER_PATTERN, NIGHTLY_PRERELEASE_PATTERN],
            description="Stable or rc.N; nightly suffixes rejected",
        ),
    }
