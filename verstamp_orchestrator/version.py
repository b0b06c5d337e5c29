"""
Version parsing and build-type validation.

``parse_version`` turns user input such as ``0.75.0`` or ``v0.75.0-rc.1``
into a ``VersionRecord`` and checks it against the policy of the requested
build type. Nothing here touches the filesystem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .config.policy import BuildType, BuildTypePolicy, default_policies
from .exceptions import (
    BuildTypeMismatchError,
    ExecutionContext,
    InvalidBuildTypeError,
    VersionFormatError,
)

# MAJOR.MINOR.PATCH[-PRERELEASE], ASCII digits, no leading zeros; an optional
# leading "v" is not kept
VERSION_PATTERN = re.compile(
    r"v?(?P<version>(?P<major>0|[1-9][0-9]*)\.(?P<minor>0|[1-9][0-9]*)\.(?P<patch>0|[1-9][0-9]*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z][0-9A-Za-z.-]*))?)"
)


@dataclass(frozen=True)
class VersionRecord:
    """Structured version; ``version`` is the canonical string written everywhere."""

    major: int
    minor: int
    patch: int
    prerelease: Optional[str]
    version: str

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return self.version


def validate_build_type(build_type: Any) -> BuildType:
    """Return the BuildType for ``build_type`` or raise InvalidBuildTypeError."""
    if isinstance(build_type, BuildType):
        return build_type
    try:
        return BuildType(build_type)
    except (ValueError, TypeError) as e:
        raise InvalidBuildTypeError(
            build_type,
            valid=BuildType.values(),
            context=ExecutionContext(build_type=str(build_type)),
        ) from e


def check_build_type_policy(
    record: VersionRecord, build_type: BuildType, policy: BuildTypePolicy
) -> None:
    """Raise BuildTypeMismatchError if ``record`` violates ``policy``."""
    context = ExecutionContext(raw_version=record.version, build_type=build_type.value)

    if record.prerelease is None:
        if policy.require_prerelease:
            raise BuildTypeMismatchError(
                record.version, build_type.value,
                "a prerelease suffix is required",
                context=context,
            )
        return

    for pattern in policy.rejected_prerelease:
        if re.search(pattern, record.prerelease):
            raise BuildTypeMismatchError(
                record.version, build_type.value,
                f"prerelease '{record.prerelease}' matches rejected pattern {pattern}",
                context=context,
            )

    if policy.allowed_prerelease and not any(
        re.search(pattern, record.prerelease) for pattern in policy.allowed_prerelease
    ):
        raise BuildTypeMismatchError(
            record.version, build_type.value,
            f"prerelease '{record.prerelease}' must match one of {', '.join(policy.allowed_prerelease)}",
            context=context,
        )


def parse_version(
    raw_version: Any,
    build_type: Any,
    policies: Optional[Mapping[BuildType, BuildTypePolicy]] = None,
) -> VersionRecord:
    """
    Parse ``raw_version`` and validate it for ``build_type``.

    Args:
        raw_version: Version string, e.g. ``0.75.0`` or ``v0.75.0-rc.1``
        build_type: ``dry-run``, ``nightly`` or ``release``
        policies: Policy per build type; defaults to ``default_policies()``

    Returns:
        VersionRecord with the leading ``v`` (if any) dropped from ``version``

    Raises:
        InvalidBuildTypeError: Unknown build type
        VersionFormatError: Input does not match the grammar
        BuildTypeMismatchError: Input is not allowed for the build type
    """
    build_type = validate_build_type(build_type)

    if not isinstance(raw_version, str):
        raise VersionFormatError(raw_version, context=ExecutionContext(build_type=build_type.value))

    match = VERSION_PATTERN.fullmatch(raw_version.strip())
    if match is None:
        raise VersionFormatError(
            raw_version,
            context=ExecutionContext(raw_version=raw_version, build_type=build_type.value),
        )

    record = VersionRecord(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=match.group("prerelease"),
        version=match.group("version"),
    )

    policy = (policies or default_policies())[build_type]
    check_build_type_policy(record, build_type, policy)
    return record
