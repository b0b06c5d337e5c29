"""
Unit tests for pre-write snapshots and changed-line verification.
"""

from __future__ import annotations

from pathlib import Path

from verstamp_orchestrator.snapshots import (
    changed_lines,
    count_matching_changed_lines,
    create_snapshot_dir,
    save_files,
    verify_changes,
)


class TestChangedLines:
    def test_replaced_line(self):
        before = "a\nVERSION_NAME=1.0.0\nb\n"
        after = "a\nVERSION_NAME=0.75.0\nb\n"

        assert list(changed_lines(before, after)) == ["VERSION_NAME=0.75.0"]

    def test_inserted_lines(self):
        assert list(changed_lines(["a"], ["a", "b", "c"])) == ["b", "c"]

    def test_deleted_lines_not_reported(self):
        assert list(changed_lines("a\nb\n", "a\n")) == []

    def test_identical(self):
        assert list(changed_lines("a\nb\n", "a\nb\n")) == []


class TestCountMatchingChangedLines:
    def test_counts_only_changed_lines_with_needle(self):
        before = '{\n  "version": "1.0.0",\n  "dep": "0.75.0"\n}\n'
        after = '{\n  "version": "0.75.0",\n  "dep": "0.75.0"\n}\n'

        assert count_matching_changed_lines(before, after, "0.75.0") == 1

    def test_changed_line_without_needle(self):
        assert count_matching_changed_lines("x=1\n", "x=2\n", "0.75.0") == 0

    def test_no_change_counts_zero(self):
        text = "VERSION_NAME=0.75.0\n"

        assert count_matching_changed_lines(text, text, "0.75.0") == 0

    def test_several_lines(self):
        before = ["a=1", "b=1", "c=1"]
        after = ["a=0.75.0", "b=1", "c=0.75.0"]

        assert count_matching_changed_lines(before, after, "0.75.0") == 2


class TestSnapshotFiles:
    def test_create_snapshot_dir(self, isolated_tempdir):
        first = create_snapshot_dir("verstamp-test-")
        second = create_snapshot_dir("verstamp-test-")

        assert first.is_dir() and second.is_dir()
        assert first != second
        assert first.name.startswith("verstamp-test-")
        assert first.parent == isolated_tempdir

    def test_save_files_keeps_layout(self, tmp_path: Path):
        root = tmp_path / "root"
        (root / "android").mkdir(parents=True)
        (root / "android" / "gradle.properties").write_text("VERSION_NAME=1.0.0\n")
        (root / "package.json").write_text("{}\n")
        snapshot = tmp_path / "snapshot"

        saved = save_files([Path("package.json"), Path("android/gradle.properties")], root, snapshot)

        assert saved == [Path("package.json"), Path("android/gradle.properties")]
        assert (snapshot / "android" / "gradle.properties").read_text() == "VERSION_NAME=1.0.0\n"

    def test_save_files_skips_missing(self, tmp_path: Path):
        saved = save_files([Path("missing.json")], tmp_path, tmp_path / "snapshot")

        assert saved == []
        assert not (tmp_path / "snapshot" / "missing.json").exists()


class TestVerifyChanges:
    def _layout(self, tmp_path: Path):
        root, snapshot = tmp_path / "root", tmp_path / "snapshot"
        root.mkdir()
        snapshot.mkdir()
        for name in ("a.txt", "b.txt"):
            (snapshot / name).write_text("version=1.0.0\n")
        return root, snapshot

    def test_all_files_changed(self, tmp_path: Path):
        root, snapshot = self._layout(tmp_path)
        (root / "a.txt").write_text("version=0.75.0\n")
        (root / "b.txt").write_text("version=0.75.0\n")

        report = verify_changes(snapshot, root, [Path("a.txt"), Path("b.txt")], "0.75.0")

        assert report.is_verified
        assert report.expected == 2
        assert report.per_file == {"a.txt": 1, "b.txt": 1}

    def test_unchanged_file_reported(self, tmp_path: Path):
        root, snapshot = self._layout(tmp_path)
        (root / "a.txt").write_text("version=0.75.0\n")
        (root / "b.txt").write_text("version=1.0.0\n")

        report = verify_changes(snapshot, root, [Path("a.txt"), Path("b.txt")], "0.75.0")

        assert not report.is_verified
        assert report.matched == 1
        assert report.to_dict()["verified"] is False

    def test_missing_snapshot_counts_zero(self, tmp_path: Path):
        root, snapshot = self._layout(tmp_path)
        (root / "new.txt").write_text("version=0.75.0\n")

        report = verify_changes(snapshot, root, [Path("new.txt")], "0.75.0")

        assert report.per_file == {"new.txt": 0}
