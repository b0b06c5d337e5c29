"""
Package manifest helpers.

Manifests are JSON objects with the usual dependency sections. Overrides are
applied best-effort: a package name that does not appear in any dependency
section is ignored rather than reported.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .exceptions import ManifestError
from .run_summary import WriteResult

DEPENDENCY_SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def apply_package_versions(
    manifest: Mapping[str, Any],
    overrides: Optional[Mapping[str, str]],
) -> Dict[str, Any]:
    """Return a copy of ``manifest`` with matching dependency versions replaced.

    Only keys already present in a dependency section are touched; the input
    mapping is never mutated.
    """
    result = copy.deepcopy(dict(manifest))
    if not overrides:
        return result

    for name, version in overrides.items():
        for section in DEPENDENCY_SECTIONS:
            deps = result.get(section)
            if isinstance(deps, dict) and name in deps:
                deps[name] = version
    return result


def loads_manifest(text: str, path: Optional[Path] = None) -> Dict[str, Any]:
    """Parse manifest text, requiring a top-level JSON object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(
            f"Manifest is not valid JSON: {e.msg} at line {e.lineno}",
            path=str(path) if path else None,
            original_exception=e,
        ) from e
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object", path=str(path) if path else None)
    return data


def dumps_manifest(data: Mapping[str, Any]) -> str:
    """Serialize with two-space indentation and a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def read_manifest(path: Path) -> Dict[str, Any]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError("Manifest not found", path=str(path), original_exception=e) from e
    except UnicodeDecodeError as e:
        raise ManifestError(
            f"Manifest is not valid UTF-8: {e.reason} at byte {e.start}",
            path=str(path),
            original_exception=e,
        ) from e
    return loads_manifest(text, path)


def write_text_if_changed(path: Path, content: str) -> bool:
    """Write ``content`` to ``path``; return whether the bytes on disk changed."""
    path = Path(path)
    previous = path.read_text(encoding="utf-8") if path.exists() else None
    if previous == content:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


def write_manifest(path: Path, data: Mapping[str, Any]) -> bool:
    return write_text_if_changed(path, dumps_manifest(data))


def update_template_package(
    path: Path,
    version_map: Mapping[str, str],
    target_name: str = "template_manifest",
) -> WriteResult:
    """Apply ``version_map`` to the template manifest at ``path`` and write it.

    The map normally carries the library's own entry plus any caller
    overrides; names the template does not depend on are ignored.
    """
    manifest = read_manifest(path)
    updated = apply_package_versions(manifest, version_map)
    changed = write_manifest(path, updated)
    return WriteResult(target=target_name, path=Path(path), changed=changed)
