"""Tests for the diff preview generator."""
import json
from unittest.mock import patch

import pytest

from notch_hook.errors import PreviewError
from notch_hook.handlers.diff_preview import (
    DiffStats,
    artifact_paths,
    count_changes,
    generate_preview_diff,
    read_baseline,
    synthesize_modified,
)
from notch_hook.hook_utils import file_identity


class TestSynthesizeModified:
    """Tests for post-edit content synthesis."""

    def test_replaces_first_occurrence_only(self):
        assert synthesize_modified("a a a", "a", "b") == "b a a"

    def test_full_write(self):
        assert synthesize_modified("old", None, "new content") == "new content"

    def test_neither_fragment(self):
        assert synthesize_modified("keep", None, None) == "keep"

    def test_missing_old_text_leaves_content(self):
        assert synthesize_modified("abc", "zzz", "y") == "abc"

    def test_empty_new_text_deletes(self):
        assert synthesize_modified("keep drop", " drop", "") == "keep"


class TestCountChanges:
    """Tests for line-level change counting."""

    def test_equal_lines_do_not_count(self):
        assert count_changes("a\nb\n", "a\nb\n") == (0, 0)

    def test_insertions(self):
        assert count_changes("a\n", "a\nb\nc\n") == (2, 0)

    def test_deletions(self):
        assert count_changes("a\nb\nc\n", "a\n") == (0, 2)


class TestGeneratePreviewDiff:
    """Tests for generate_preview_diff."""

    def test_edit_replacement(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("foo\nbaz\n")
        diff_dir = tmp_path / "diffs"

        result = generate_preview_diff(target, "foo", "bar", diff_dir)

        assert result.stats == DiffStats(added=1, removed=1, file=str(target), preview=True)
        assert result.modified_content == "bar\nbaz\n"
        diff_text = result.diff_path.read_text()
        assert f"--- {target}" in diff_text
        assert f"+++ {target}" in diff_text
        assert "-foo\n" in diff_text
        assert "+bar\n" in diff_text
        assert " baz\n" in diff_text
        # Preview does not touch the real file
        assert target.read_text() == "foo\nbaz\n"

    def test_full_write_to_new_file(self, tmp_path):
        target = tmp_path / "new.py"
        content = "line1\nline2\nline3\nline4\n"

        result = generate_preview_diff(target, None, content, tmp_path / "diffs")

        assert result.stats.added == 4
        assert result.stats.removed == 0
        assert not target.exists()

    def test_no_fragments_gives_empty_diff(self, tmp_path):
        target = tmp_path / "same.txt"
        target.write_text("x\n")

        result = generate_preview_diff(target, None, None, tmp_path / "diffs")

        assert (result.stats.added, result.stats.removed) == (0, 0)
        assert result.diff_path.read_text() == ""

    def test_stats_artifact(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("a\n")

        result = generate_preview_diff(target, "a", "b", tmp_path / "diffs")

        stats = json.loads(result.stats_path.read_text())
        assert stats == {"added": 1, "removed": 1, "file": str(target), "preview": True}

    def test_artifacts_named_by_file_identity(self, tmp_path):
        target = tmp_path / "file.txt"
        diff_dir = tmp_path / "diffs"

        result = generate_preview_diff(target, None, "x\n", diff_dir)

        file_id = file_identity(target)
        assert result.diff_path == diff_dir / f"{file_id}.preview.diff"
        assert result.stats_path == diff_dir / f"{file_id}.preview.stats.json"
        assert artifact_paths(target, diff_dir) == (result.diff_path, result.stats_path)

    def test_repeat_preview_overwrites(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("one\n")
        diff_dir = tmp_path / "diffs"

        first = generate_preview_diff(target, "one", "two", diff_dir)
        second = generate_preview_diff(target, "one", "three", diff_dir)

        assert first.diff_path == second.diff_path
        assert sorted(p.name for p in diff_dir.iterdir()) == sorted(
            [first.diff_path.name, first.stats_path.name]
        )
        assert "+three" in second.diff_path.read_text()

    def test_missing_trailing_newline_marked(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("a\nb")

        result = generate_preview_diff(target, "b", "c", tmp_path / "diffs")

        assert "\\ No newline at end of file" in result.diff_path.read_text()
        assert (result.stats.added, result.stats.removed) == (1, 1)

    def test_non_utf8_file_raises_preview_error(self, tmp_path):
        target = tmp_path / "legacy.txt"
        target.write_bytes("café\nnaïve\n".encode("latin-1"))
        diff_dir = tmp_path / "diffs"

        with pytest.raises(PreviewError, match="cannot read"):
            generate_preview_diff(target, None, "café\nnaïve\n", diff_dir)
        assert not diff_dir.exists()

    def test_directory_target_raises_preview_error(self, tmp_path):
        with pytest.raises(PreviewError):
            generate_preview_diff(tmp_path, None, "x\n", tmp_path / "diffs")

    def test_missing_file_gives_empty_baseline(self, tmp_path):
        assert read_baseline(tmp_path / "absent.txt") == ""

    def test_write_failure_raises_preview_error(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")

        with pytest.raises(PreviewError):
            generate_preview_diff(tmp_path / "f.txt", None, "x", blocker)

    def test_stats_write_failure_raises_preview_error(self, tmp_path):
        with patch("notch_hook.handlers.diff_preview.atomic_write_bytes", side_effect=OSError("disk full")):
            with pytest.raises(PreviewError, match="disk full"):
                generate_preview_diff(tmp_path / "f.txt", None, "x", tmp_path / "diffs")
