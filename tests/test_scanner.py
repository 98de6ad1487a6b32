"""
Tests for FileScannerImpl over several scan roots.
"""
import os
import sys
import pytest

from dupescope.core.scanner import FileScannerImpl


class TestScanner:
    """Enumeration of regular files below the scan roots."""

    def test_finds_all_files_recursively(self, dup_tree):
        paths = FileScannerImpl([str(dup_tree["keep"]), str(dup_tree["del"])]).scan()

        expected = {str(dup_tree[k]) for k in ("a_keep", "a_del", "b1", "b2", "b3", "c1", "c2", "unique")}
        assert set(paths) == expected
        assert len(paths) == len(expected)

    def test_returns_absolute_paths(self, dup_tree, monkeypatch):
        monkeypatch.chdir(dup_tree["keep"].parent)

        paths = FileScannerImpl(["keep"]).scan()

        assert paths
        assert all(os.path.isabs(p) for p in paths)

    def test_roots_are_scanned_in_given_order(self, dup_tree):
        paths = FileScannerImpl([str(dup_tree["keep"]), str(dup_tree["del"])]).scan()

        keep_positions = [i for i, p in enumerate(paths) if p.startswith(str(dup_tree["keep"]))]
        del_positions = [i for i, p in enumerate(paths) if p.startswith(str(dup_tree["del"]) + os.sep)]
        assert max(keep_positions) < min(del_positions)

    def test_missing_root_is_skipped_not_fatal(self, dup_tree, temp_dir, caplog):
        missing = str(temp_dir / "nowhere")
        scanner = FileScannerImpl([missing, str(dup_tree["keep"])])

        with caplog.at_level("WARNING"):
            paths = scanner.scan()

        assert set(paths) == {str(dup_tree["a_keep"]), str(dup_tree["c1"]), str(dup_tree["c2"])}
        assert scanner.missing_roots == [missing]
        assert "Directory not found" in caplog.text

    def test_file_given_as_root_is_skipped(self, dup_tree):
        scanner = FileScannerImpl([str(dup_tree["unique"])])

        assert scanner.scan() == []
        assert scanner.missing_roots == [str(dup_tree["unique"])]

    def test_overlapping_roots_yield_each_file_once(self, dup_tree):
        """del/ and del/nested/ both scanned: B3 must appear a single time."""
        paths = FileScannerImpl([str(dup_tree["del"]), str(dup_tree["del"] / "nested")]).scan()

        assert paths.count(str(dup_tree["b3"])) == 1

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    def test_symlinks_are_skipped(self, dup_tree):
        link = dup_tree["del"] / "link.txt"
        link.symlink_to(dup_tree["a_keep"])
        dir_link = dup_tree["del"] / "keep_link"
        dir_link.symlink_to(dup_tree["keep"], target_is_directory=True)

        paths = FileScannerImpl([str(dup_tree["del"])]).scan()

        assert str(link) not in paths
        assert not any(p.startswith(str(dir_link)) for p in paths)

    @pytest.mark.skipif(sys.platform != "linux", reason="freedesktop trash layout")
    def test_trash_directory_is_skipped(self, temp_dir):
        trash = temp_dir / ".local" / "share" / "Trash" / "files"
        trash.mkdir(parents=True)
        (trash / "old.txt").write_text("trashed")
        (temp_dir / "live.txt").write_text("live")

        paths = FileScannerImpl([str(temp_dir)]).scan()

        assert paths == [str(temp_dir / "live.txt")]

    def test_progress_callback_reports_scanning(self, dup_tree):
        calls = []

        FileScannerImpl([str(dup_tree["keep"])]).scan(
            progress_callback=lambda stage, current, total: calls.append((stage, current, total))
        )

        assert calls == [("scanning", 3, None)]

    @pytest.mark.skipif(sys.platform == "win32", reason="Hard links need NTFS")
    def test_same_physical_file_under_two_paths_yields_once(self, temp_dir):
        """A hard link (like a bind mount) reaches one file by two names: one path only."""
        src = temp_dir / "src"
        dst = temp_dir / "dst"
        src.mkdir()
        dst.mkdir()
        (src / "photo.jpg").write_bytes(b"pixels")
        os.link(src / "photo.jpg", dst / "photo.jpg")

        paths = FileScannerImpl([str(src), str(dst)]).scan()

        assert paths == [str(src / "photo.jpg")]

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    def test_root_alias_yields_each_file_once(self, dup_tree, temp_dir):
        alias = temp_dir / "alias"
        alias.symlink_to(dup_tree["keep"], target_is_directory=True)

        paths = FileScannerImpl([str(dup_tree["keep"]), str(alias)]).scan()

        assert sorted(paths) == sorted(str(dup_tree[k]) for k in ("a_keep", "c1", "c2"))


class TestCountFiles:
    """Pre-pass count used as a progress total."""

    def test_matches_scan(self, dup_tree):
        scanner = FileScannerImpl([str(dup_tree["keep"]), str(dup_tree["del"]), str(dup_tree["del"] / "nested")])

        assert scanner.count_files() == len(scanner.scan()) == 8

    def test_missing_root_is_not_reported(self, dup_tree, temp_dir, caplog):
        scanner = FileScannerImpl([str(temp_dir / "nowhere"), str(dup_tree["keep"])])

        with caplog.at_level("WARNING"):
            assert scanner.count_files() == 3

        assert scanner.missing_roots == []
        assert "Directory not found" not in caplog.text

    def test_empty_root(self, temp_dir):
        assert FileScannerImpl([str(temp_dir)]).count_files() == 0
