"""
Tests for run parameters, enums and the session report.
"""
import pytest

from dupescope.core.models import (
    DeletionDecision, DuplicateGroup, FileRecord, HashAlgorithmType, Policy, RunParams, SessionReport
)


class TestRunParams:
    """Configuration errors are raised before anything runs."""

    def test_defaults(self):
        params = RunParams(scan_dirs=["/photos"])

        assert params.algorithm == HashAlgorithmType.SHA256
        assert params.policy == Policy.AUTOMATIC
        assert params.dry_run is True
        assert params.use_trash is True
        assert params.delete_dirs == []

    @pytest.mark.parametrize("scan_dirs", [[], ["", "  "], None])
    def test_no_directories_is_rejected(self, scan_dirs):
        with pytest.raises(ValueError, match="At least one directory"):
            RunParams(scan_dirs=scan_dirs)

    def test_unknown_algorithm_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid hash algorithm"):
            RunParams(scan_dirs=["/x"], algorithm="sha1")

    def test_algorithm_and_policy_names_are_converted(self):
        params = RunParams(scan_dirs=["/x"], algorithm="MD5", policy="manual")

        assert params.algorithm == HashAlgorithmType.MD5
        assert params.policy == Policy.MANUAL

    def test_unknown_policy_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid policy"):
            RunParams(scan_dirs=["/x"], policy="random")


class TestHashAlgorithmType:
    @pytest.mark.parametrize("name,expected", [
        ("md5", HashAlgorithmType.MD5),
        ("-md5", HashAlgorithmType.MD5),
        ("SHA-256", HashAlgorithmType.SHA256),
        ("-sha256", HashAlgorithmType.SHA256),
        ("xxhash64", HashAlgorithmType.XXH64),
        ("XXH128", HashAlgorithmType.XXH128),
    ])
    def test_from_name_accepts_known_spellings(self, name, expected):
        assert HashAlgorithmType.from_name(name) == expected

    def test_display_names(self):
        assert HashAlgorithmType.SHA256.display_name == "SHA-256"
        assert HashAlgorithmType.MD5.display_name == "MD5"


class TestDuplicateGroup:
    def test_paths_and_count(self):
        group = DuplicateGroup("h", (FileRecord("/a"), FileRecord("/b")))

        assert group.paths == ("/a", "/b")
        assert group.duplicate_count == 2
        assert group.is_duplicate()

    def test_singleton_is_not_duplicate(self):
        assert not DuplicateGroup("h", (FileRecord("/a"),)).is_duplicate()


class TestSessionReport:
    """Only confirmed, non-simulated deletions count as removed files."""

    def test_record_counts_each_kind(self, make_group):
        group = make_group("/a", "/b", "/c")
        report = SessionReport()

        report.record(DeletionDecision.keep("/a", group))
        report.record(DeletionDecision.delete("/b", group))
        report.record(DeletionDecision.delete("/c", group, dry_run=True))
        report.record(DeletionDecision.skip("/c", group))
        report.record(DeletionDecision.failed(DeletionDecision.delete("/c", group), "boom"))

        assert report.files_kept == 1
        assert report.files_deleted == 1
        assert report.deletions_simulated == 1
        assert report.files_skipped == 1
        assert report.deletions_failed == 1

    def test_summary_ends_with_count_and_log_location(self):
        report = SessionReport(files_scanned=10, files_indexed=10, files_deleted=3, log_path="log_1.txt")

        lines = report.print_summary().splitlines()

        assert lines[-2] == "3 Dup Files processed."
        assert lines[-1] == "Done. Check log_1.txt for details."
