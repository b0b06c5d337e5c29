"""
Artifact renderers.

One renderer per artifact format. Renderers are pure: they take the current
template or file content plus a ``VersionRecord`` and return the new content.
Reading and writing files is the orchestrator's job.

Source-constant templates use ``${major}``, ``${minor}``, ``${patch}`` and
``${prerelease}``; each must appear exactly once.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, Mapping, Optional

from .config.targets import ArtifactFormat
from .exceptions import PropertiesUpdateError, TemplateRenderError
from .manifests import apply_package_versions, dumps_manifest, loads_manifest
from .version import VersionRecord

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]*)\}")
VERSION_FIELDS = ("major", "minor", "patch", "prerelease")


class VersionRenderer(ABC):
    """Base class for all artifact renderers."""

    format: ArtifactFormat

    @abstractmethod
    def render(self, template: str, version: VersionRecord) -> str:
        """Return ``template`` with ``version`` substituted in."""


class SourceConstantRenderer(VersionRenderer):
    """Fills a source-code template with language-specific literals."""

    def number_literal(self, value: int) -> str:
        return str(value)

    @abstractmethod
    def prerelease_literal(self, prerelease: Optional[str]) -> str:
        """Literal for the prerelease, or the language's "absent" value."""

    def values(self, version: VersionRecord) -> Dict[str, str]:
        return {
            "major": self.number_literal(version.major),
            "minor": self.number_literal(version.minor),
            "patch": self.number_literal(version.patch),
            "prerelease": self.prerelease_literal(version.prerelease),
        }

    def check_placeholders(self, template: str) -> None:
        """Raise TemplateRenderError unless every field appears exactly once."""
        found = Counter(m.group(1) for m in PLACEHOLDER_PATTERN.finditer(template))

        unknown = sorted(name for name in found if name not in VERSION_FIELDS)
        if unknown:
            raise TemplateRenderError(
                f"Unknown placeholders in {self.format.value} template",
                placeholders=[f"${{{name}}}" for name in unknown],
            )

        missing = [name for name in VERSION_FIELDS if found[name] == 0]
        if missing:
            raise TemplateRenderError(
                f"Missing placeholders in {self.format.value} template",
                placeholders=[f"${{{name}}}" for name in missing],
            )

        repeated = [name for name in VERSION_FIELDS if found[name] > 1]
        if repeated:
            raise TemplateRenderError(
                f"Placeholders repeated in {self.format.value} template",
                placeholders=[f"${{{name}}}" for name in repeated],
            )

    def render(self, template: str, version: VersionRecord) -> str:
        self.check_placeholders(template)
        values = self.values(version)
        # single pass, substituted text is never rescanned
        return PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(1)], template)


class JavaVersionRenderer(SourceConstantRenderer):
    format = ArtifactFormat.JAVA

    def prerelease_literal(self, prerelease: Optional[str]) -> str:
        return f'"{prerelease}"' if prerelease is not None else "null"


class ObjCVersionRenderer(SourceConstantRenderer):
    format = ArtifactFormat.OBJC

    def number_literal(self, value: int) -> str:
        return f"@({value})"

    def prerelease_literal(self, prerelease: Optional[str]) -> str:
        return f'@"{prerelease}"' if prerelease is not None else "[NSNull null]"


class CppHeaderVersionRenderer(SourceConstantRenderer):
    format = ArtifactFormat.CPP_HEADER

    def prerelease_literal(self, prerelease: Optional[str]) -> str:
        return f'"{prerelease}"' if prerelease is not None else '""'


class JavaScriptVersionRenderer(SourceConstantRenderer):
    format = ArtifactFormat.JAVASCRIPT

    def prerelease_literal(self, prerelease: Optional[str]) -> str:
        return f"'{prerelease}'" if prerelease is not None else "null"


class PropertiesVersionRenderer(VersionRenderer):
    """Rewrites the ``VERSION_NAME=`` line of a build-tool properties file."""

    format = ArtifactFormat.PROPERTIES
    key = "VERSION_NAME"
    line_pattern = re.compile(r"^VERSION_NAME=[^\r\n]*", re.MULTILINE)

    def render(self, template: str, version: VersionRecord) -> str:
        rendered, count = self.line_pattern.subn(
            lambda _m: f"{self.key}={version.version}", template
        )
        if count == 0:
            raise PropertiesUpdateError(f"No line starting with {self.key}= found")
        return rendered


class LibraryManifestRenderer(VersionRenderer):
    """Sets the manifest ``version`` and applies dependency overrides."""

    format = ArtifactFormat.LIBRARY_MANIFEST

    def render(
        self,
        template: str,
        version: VersionRecord,
        dependency_versions: Optional[Mapping[str, str]] = None,
    ) -> str:
        manifest = loads_manifest(template)
        if dependency_versions is not None:
            manifest = apply_package_versions(manifest, dependency_versions)
        manifest["version"] = version.version
        return dumps_manifest(manifest)


_RENDERERS: Dict[ArtifactFormat, VersionRenderer] = {
    renderer.format: renderer
    for renderer in (
        JavaVersionRenderer(),
        ObjCVersionRenderer(),
        CppHeaderVersionRenderer(),
        JavaScriptVersionRenderer(),
        PropertiesVersionRenderer(),
        LibraryManifestRenderer(),
    )
}


def get_renderer(fmt: ArtifactFormat) -> VersionRenderer:
    """Renderer for ``fmt``; the template manifest goes through update_template_package."""
    try:
        return _RENDERERS[ArtifactFormat(fmt)]
    except KeyError:
        raise KeyError(f"No renderer for format {ArtifactFormat(fmt).value}") from None
