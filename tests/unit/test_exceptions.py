"""
Unit tests for the verstamp exception hierarchy.

Tests context propagation, diagnostic formatting and serialization.
"""

from __future__ import annotations

import pytest

from verstamp_orchestrator.exceptions import (
    ArtifactError,
    ArtifactFileError,
    BuildTypeMismatchError,
    ConfigurationError,
    DependencyVersionsError,
    ErrorCategory,
    ErrorSeverity,
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


class TestExecutionContext:
    """Test ExecutionContext dataclass"""

    def test_correlation_id_generated(self):
        first, second = ExecutionContext(), ExecutionContext()

        assert len(first.correlation_id) == 8
        assert first.correlation_id != second.correlation_id

    def test_to_dict_drops_empty_fields(self):
        ctx = ExecutionContext(raw_version="0.75.0", build_type="release")

        data = ctx.to_dict()

        assert data["raw_version"] == "0.75.0"
        assert data["build_type"] == "release"
        assert "target_name" not in data
        assert "metadata" not in data

    def test_format_summary(self):
        ctx = ExecutionContext(raw_version="0.75.0", build_type="nightly", target_name="gradle_properties")

        summary = ctx.format_summary()

        assert "version=0.75.0" in summary
        assert "build_type=nightly" in summary
        assert "target=gradle_properties" in summary
        assert f"correlation_id={ctx.correlation_id}" in summary


class TestVerstampError:
    """Test base exception behaviour"""

    def test_defaults(self):
        error = VerstampError("boom")

        assert str(error) == "boom"
        assert error.category == ErrorCategory.INPUT
        assert error.severity == ErrorSeverity.ERROR
        assert error.resolution_hints == []

    def test_metadata_merged_into_context(self):
        ctx = ExecutionContext(metadata={"a": 1})

        error = VerstampError("boom", context=ctx, metadata={"b": 2})

        assert error.context.metadata == {"a": 1, "b": 2}

    def test_diagnostic_message(self):
        original = ValueError("bad")
        error = VerstampError(
            "boom",
            context=ExecutionContext(raw_version="1.2.3", metadata={"rule": "x"}),
            resolution_hints=[
                ResolutionHint(title="Fix it", description="Do this", steps=["step one"], documentation_url="https://example.invalid")
            ],
            original_exception=original,
        )

        message = error.format_diagnostic_message()

        assert "ERROR: boom" in message
        assert "Severity: ERROR | Category: input" in message
        assert "raw_version: 1.2.3" in message
        assert "rule: x" in message
        assert "1. Fix it" in message
        assert "- step one" in message
        assert "ValueError: bad" in message

    def test_to_dict(self):
        error = VerstampError("boom", extra_field="kept")

        data = error.to_dict()

        assert data["error_type"] == "VerstampError"
        assert data["message"] == "boom"
        assert data["category"] == "input"
        assert data["extra_field"] == "kept"
        assert data["original_exception"] is None


class TestErrorSubclasses:
    """Test category, severity and message shape of each subclass"""

    @pytest.mark.parametrize(
        "error, base, category",
        [
            (InvalidBuildTypeError("prod"), InputError, ErrorCategory.INPUT),
            (VersionFormatError("1.2"), InputError, ErrorCategory.INPUT),
            (BuildTypeMismatchError("1.0.0", "nightly", "rule"), InputError, ErrorCategory.INPUT),
            (DependencyVersionsError("bad"), InputError, ErrorCategory.INPUT),
            (TemplateRenderError("bad"), ArtifactError, ErrorCategory.ARTIFACT),
            (PropertiesUpdateError(), ArtifactError, ErrorCategory.ARTIFACT),
            (ManifestError("bad"), ArtifactError, ErrorCategory.ARTIFACT),
            (ArtifactFileError("bad"), VerstampError, ErrorCategory.FILESYSTEM),
            (ConfigurationError("bad"), VerstampError, ErrorCategory.CONFIGURATION),
        ],
    )
    def test_hierarchy(self, error, base, category):
        assert isinstance(error, base)
        assert error.category == category

    def test_invalid_build_type_message(self):
        error = InvalidBuildTypeError("prod", valid=["dry-run", "nightly", "release"])

        assert error.message == "Unsupported build type: 'prod' (expected one of: dry-run, nightly, release)"
        assert error.context.metadata["build_type"] == "prod"

    def test_build_type_mismatch_message(self):
        error = BuildTypeMismatchError("0.75.0", "nightly", "a prerelease suffix is required")

        assert error.message == "Version 0.75.0 is not valid for build type nightly: a prerelease suffix is required"
        assert error.context.metadata["rule"] == "a prerelease suffix is required"

    def test_properties_update_error_is_critical(self):
        error = PropertiesUpdateError(path="android/gradle.properties")

        assert error.message == "Couldn't update version for Gradle (file: android/gradle.properties)"
        assert error.severity == ErrorSeverity.CRITICAL
        assert error.resolution_hints

    def test_dependency_versions_raw_truncated(self):
        error = DependencyVersionsError("bad", raw="x" * 500)

        assert len(error.context.metadata["dependency_versions"]) == 200

    def test_template_placeholders_in_metadata(self):
        error = TemplateRenderError("bad", template="ReleaseVersion.java.template", placeholders=["${major}"])

        assert error.message == "bad (template: ReleaseVersion.java.template)"
        assert error.context.metadata["placeholders"] == ["${major}"]

    def test_configuration_error_path(self):
        error = ConfigurationError("bad", config_path="verstamp.yaml")

        assert error.message == "bad (config_path: verstamp.yaml)"

    def test_custom_hints_override_defaults(self):
        hint = ResolutionHint(title="Custom", description="d", steps=[])

        error = VersionFormatError("x", resolution_hints=[hint])

        assert error.resolution_hints == [hint]
