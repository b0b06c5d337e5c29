"""Unit tests for package manifest helpers."""

import json
from pathlib import Path

import pytest

from verstamp_orchestrator.exceptions import ManifestError
from verstamp_orchestrator.manifests import (
    apply_package_versions,
    dumps_manifest,
    loads_manifest,
    read_manifest,
    update_template_package,
    write_text_if_changed,
)


def _manifest():
    return {
        "name": "this-package",
        "version": "1000.0.0",
        "dependencies": {"some-lib": "1.0.0", "other-lib": "3.1.4"},
        "devDependencies": {"some-lib": "1.0.0", "test-runner": "29.0.0"},
        "peerDependencies": {"peer-lib": "*"},
    }


class TestApplyPackageVersions:
    def test_overrides_every_section_containing_the_name(self):
        result = apply_package_versions(_manifest(), {"some-lib": "2.0.0"})

        assert result["dependencies"]["some-lib"] == "2.0.0"
        assert result["devDependencies"]["some-lib"] == "2.0.0"
        assert result["dependencies"]["other-lib"] == "3.1.4"
        assert result["devDependencies"]["test-runner"] == "29.0.0"

    def test_unknown_names_ignored(self):
        result = apply_package_versions(_manifest(), {"not-a-dep": "1.2.3"})

        assert result == _manifest()

    def test_input_not_mutated(self):
        manifest = _manifest()

        apply_package_versions(manifest, {"peer-lib": "5.0.0"})

        assert manifest["peerDependencies"]["peer-lib"] == "*"

    @pytest.mark.parametrize("overrides", [None, {}])
    def test_no_overrides_returns_copy(self, overrides):
        manifest = _manifest()

        result = apply_package_versions(manifest, overrides)

        assert result == manifest
        assert result is not manifest

    def test_top_level_version_untouched(self):
        result = apply_package_versions(_manifest(), {"version": "9.9.9", "name": "x"})

        assert result["version"] == "1000.0.0"
        assert result["name"] == "this-package"


class TestManifestIO:
    def test_dumps_two_space_indent_trailing_newline(self):
        text = dumps_manifest({"name": "a", "dependencies": {"b": "1.0.0"}})

        assert text == '{\n  "name": "a",\n  "dependencies": {\n    "b": "1.0.0"\n  }\n}\n'

    def test_loads_rejects_non_object(self):
        with pytest.raises(ManifestError) as exc_info:
            loads_manifest("[1, 2]", Path("package.json"))

        assert "package.json" in exc_info.value.message

    def test_loads_rejects_invalid_json(self):
        with pytest.raises(ManifestError) as exc_info:
            loads_manifest('{"name": }')

        assert isinstance(exc_info.value.original_exception, json.JSONDecodeError)

    def test_read_missing_manifest(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="Manifest not found"):
            read_manifest(tmp_path / "package.json")

    def test_read_non_utf8_manifest(self, tmp_path: Path):
        (tmp_path / "package.json").write_bytes(b'{"name": "caf\xe9"}\n')

        with pytest.raises(ManifestError, match="not valid UTF-8") as exc_info:
            read_manifest(tmp_path / "package.json")

        assert isinstance(exc_info.value.original_exception, UnicodeDecodeError)

    def test_dumps_keeps_non_ascii(self):
        assert dumps_manifest({"author": "Zoë"}) == '{\n  "author": "Zoë"\n}\n'

    def test_write_text_if_changed(self, tmp_path: Path):
        path = tmp_path / "nested" / "file.txt"

        assert write_text_if_changed(path, "one\n") is True
        assert write_text_if_changed(path, "one\n") is False
        assert write_text_if_changed(path, "two\n") is True
        assert path.read_text() == "two\n"


class TestUpdateTemplatePackage:
    def test_self_entry_and_overrides(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text(dumps_manifest({
            "name": "HelloWorld",
            "dependencies": {"this-package": "1000.0.0", "some-lib": "1.0.0"},
        }))

        result = update_template_package(path, {"this-package": "0.75.0", "some-lib": "2.0.0"})

        assert result.changed is True
        assert result.target == "template_manifest"
        deps = json.loads(path.read_text())["dependencies"]
        assert deps == {"this-package": "0.75.0", "some-lib": "2.0.0"}

    def test_unchanged_when_already_current(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text(dumps_manifest({"dependencies": {"this-package": "0.75.0"}}))

        result = update_template_package(path, {"this-package": "0.75.0"})

        assert result.changed is False
