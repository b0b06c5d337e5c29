"""Artifact target models and the conventional target layout."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ArtifactFormat(str, Enum):
    """File format of an artifact; each format has exactly one renderer."""
    JAVA = "java"
    OBJC = "objc"
    CPP_HEADER = "cpp_header"
    JAVASCRIPT = "javascript"
    PROPERTIES = "properties"
    LIBRARY_MANIFEST = "library_manifest"
    TEMPLATE_MANIFEST = "template_manifest"

    @property
    def is_source_constant(self) -> bool:
        return self in SOURCE_CONSTANT_FORMATS


SOURCE_CONSTANT_FORMATS = frozenset({
    ArtifactFormat.JAVA,
    ArtifactFormat.OBJC,
    ArtifactFormat.CPP_HEADER,
    ArtifactFormat.JAVASCRIPT,
})


class ArtifactTarget(BaseModel):
    """One file whose content must reflect the current version."""
    name: str = Field(..., min_length=1)
    path: Path = Field(..., description="Path relative to the workspace root")
    format: ArtifactFormat
    template: Optional[Path] = Field(default=None, description="Template path, source-constant formats only")
    verify: bool = Field(default=False, description="Snapshot and check this file after writing")

    @field_validator("path", "template")
    @classmethod
    def _relative_path(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return value
        if value.is_absolute():
            raise ValueError(f"Artifact paths must be relative to the workspace root: {value}")
        if ".." in value.parts:
            raise ValueError(f"Artifact paths must stay inside the workspace root: {value}")
        return value

    @model_validator(mode="after")
    def _template_matches_format(self) -> "ArtifactTarget":
        if self.format.is_source_constant and self.template is None:
            raise ValueError(f"Target '{self.name}' ({self.format.value}) requires a template")
        if not self.format.is_source_constant and self.template is not None:
            raise ValueError(f"Target '{self.name}' ({self.format.value}) does not take a template")
        return self


TEMPLATE_DIR = Path("scripts/versiontemplates")


def default_targets() -> List[ArtifactTarget]:
    """Conventional artifact layout; the last three form the verification subset."""
    return [
        ArtifactTarget(
            name="java_source",
            path=Path("android/src/main/java/com/example/ReleaseVersion.java"),
            format=ArtifactFormat.JAVA,
            template=TEMPLATE_DIR / "ReleaseVersion.java.template",
        ),
        ArtifactTarget(
            name="objc_source",
            path=Path("ios/Base/ReleaseVersion.m"),
            format=ArtifactFormat.OBJC,
            template=TEMPLATE_DIR / "ReleaseVersion.m.template",
        ),
        ArtifactTarget(
            name="cpp_header",
            path=Path("common/ReleaseVersion.h"),
            format=ArtifactFormat.CPP_HEADER,
            template=TEMPLATE_DIR / "ReleaseVersion.h.template",
        ),
        ArtifactTarget(
            name="js_source",
            path=Path("lib/ReleaseVersion.js"),
            format=ArtifactFormat.JAVASCRIPT,
            template=TEMPLATE_DIR / "ReleaseVersion.js.template",
        ),
        ArtifactTarget(
            name="library_manifest",
            path=Path("package.json"),
            format=ArtifactFormat.LIBRARY_MANIFEST,
            verify=True,
        ),
        ArtifactTarget(
            name="gradle_properties",
            path=Path("android/gradle.properties"),
            format=ArtifactFormat.PROPERTIES,
            verify=True,
        ),
        ArtifactTarget(
            name="template_manifest",
            path=Path("template/package.json"),
            format=ArtifactFormat.TEMPLATE_MANIFEST,
            verify=True,
        ),
    ]
