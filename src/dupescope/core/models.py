"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for duplicate grouping, scope partitioning and deletion decisions.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from enum import Enum
import os


# =============================
# Enums
# =============================

class HashAlgorithmType(Enum):
    """
    Content fingerprint algorithm selected once per run.
    """
    MD5 = "md5"
    SHA256 = "sha256"
    XXH64 = "xxh64"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output and the log header."""
        mapping = {
            HashAlgorithmType.MD5: "MD5",
            HashAlgorithmType.SHA256: "SHA-256",
            HashAlgorithmType.XXH64: "xxHash64",
            HashAlgorithmType.XXH128: "xxHash128",
        }
        return mapping.get(self, self.value)

    @classmethod
    def from_name(cls, name: Union[str, "HashAlgorithmType"]) -> "HashAlgorithmType":
        """
        Accepts 'md5', 'MD5', '-md5', 'sha256', 'SHA-256', 'xxh64', ...
        Raises ValueError for anything else.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lstrip("-").lower().replace("-", "").replace("_", "")
        aliases = {
            "md5": cls.MD5,
            "sha256": cls.SHA256,
            "xxh64": cls.XXH64,
            "xxhash64": cls.XXH64,
            "xxh128": cls.XXH128,
            "xxhash128": cls.XXH128,
        }
        if key not in aliases:
            raise ValueError(f"Invalid hash algorithm: {name}")
        return aliases[key]

    def __repr__(self) -> str:
        return self.value


class Policy(Enum):
    """
    Keep/delete policy, fixed for the whole run.
    """
    MANUAL = "manual"
    AUTOMATIC = "automatic"

    @property
    def display_name(self) -> str:
        mapping = {
            Policy.MANUAL: "Manual",
            Policy.AUTOMATIC: "Automatic",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            Policy.MANUAL:
                "Ask which copy to keep for every group with deletable copies",
            Policy.AUTOMATIC:
                "Keep the first copy when every copy is deletable, otherwise delete all deletable copies",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class DecisionKind(Enum):
    KEEP = "keep"
    DELETE = "delete"
    SKIP = "skip"
    FAILED = "failed"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A regular file discovered during traversal.
    Never mutated: removing the file from disk is a side effect requested elsewhere.
    """
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __str__(self):
        return self.path

    def __repr__(self):
        return f"<FileRecord path={self.path}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    Files sharing one content fingerprint, in discovery order.
    """
    fingerprint: str
    files: Tuple[FileRecord, ...]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(f.path for f in self.files)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup fingerprint={self.fingerprint}, count={len(self.files)}>"


@dataclass(frozen=True)
class ScopePartition:
    """
    Group membership split into members inside an authorized root (eligible)
    and everything else (ineligible). Both keep group order.
    """
    eligible: Tuple[FileRecord, ...] = ()
    ineligible: Tuple[FileRecord, ...] = ()

    @property
    def covers_whole_group(self) -> bool:
        """True when no protected copy exists outside the authorized roots."""
        return bool(self.eligible) and not self.ineligible


@dataclass(frozen=True)
class DeletionDecision:
    """
    One planned or applied outcome for a single group member.
    Always carries the group fingerprint and the full membership for auditing.
    """
    kind: DecisionKind
    path: str
    fingerprint: str
    duplicates: Tuple[str, ...]
    cause: Optional[str] = None
    dry_run: bool = False

    @classmethod
    def keep(cls, path: str, group: DuplicateGroup) -> "DeletionDecision":
        return cls(DecisionKind.KEEP, path, group.fingerprint, group.paths)

    @classmethod
    def delete(cls, path: str, group: DuplicateGroup, dry_run: bool = False) -> "DeletionDecision":
        return cls(DecisionKind.DELETE, path, group.fingerprint, group.paths, dry_run=dry_run)

    @classmethod
    def skip(cls, path: str, group: DuplicateGroup) -> "DeletionDecision":
        return cls(DecisionKind.SKIP, path, group.fingerprint, group.paths)

    @classmethod
    def failed(cls, decision: "DeletionDecision", cause: str) -> "DeletionDecision":
        """Turns an attempted DELETE into a FAILED outcome."""
        return cls(DecisionKind.FAILED, decision.path, decision.fingerprint, decision.duplicates, cause=cause)

    def __repr__(self):
        return f"<DeletionDecision {self.kind.value} path={self.path}>"


@dataclass
class SessionReport:
    """
    Counters collected during one run, owned by the pipeline instead of globals.
    """
    files_scanned: int = 0
    files_indexed: int = 0
    fingerprint_failures: int = 0
    groups_processed: int = 0
    files_kept: int = 0
    files_deleted: int = 0
    files_skipped: int = 0
    deletions_simulated: int = 0
    deletions_failed: int = 0
    log_path: Optional[str] = None

    def record(self, decision: DeletionDecision) -> None:
        """Counts one applied decision. Only a real, confirmed DELETE bumps files_deleted."""
        if decision.kind == DecisionKind.KEEP:
            self.files_kept += 1
        elif decision.kind == DecisionKind.SKIP:
            self.files_skipped += 1
        elif decision.kind == DecisionKind.FAILED:
            self.deletions_failed += 1
        elif decision.kind == DecisionKind.DELETE:
            if decision.dry_run:
                self.deletions_simulated += 1
            else:
                self.files_deleted += 1

    def print_summary(self) -> str:
        lines = [
            "📊 Session Summary:",
            f"Files scanned: {self.files_scanned}",
            f"Files fingerprinted: {self.files_indexed}",
        ]
        if self.fingerprint_failures:
            lines.append(f"Fingerprint failures: {self.fingerprint_failures}")
        lines.append(f"Duplicate groups processed: {self.groups_processed}")
        lines.append(f"Kept: {self.files_kept} / Skipped: {self.files_skipped}")
        if self.deletions_simulated:
            lines.append(f"Would delete (dry run): {self.deletions_simulated}")
        if self.deletions_failed:
            lines.append(f"Failed deletions: {self.deletions_failed}")
        lines.append(f"{self.files_deleted} Dup Files processed.")
        lines.append(f"Done. Check {self.log_path} for details.")
        return "\n".join(lines)


"""
DTO for run parameters with built-in validation.
Interface-agnostic — built by the CLI, consumed by DeduplicationCommand.
"""

@dataclass
class RunParams:
    """Run-level configuration, validated once before anything is scanned."""
    scan_dirs: List[str]
    delete_dirs: List[str] = field(default_factory=list)
    algorithm: HashAlgorithmType = HashAlgorithmType.SHA256
    policy: Policy = Policy.AUTOMATIC
    dry_run: bool = True
    use_trash: bool = True
    log_dir: str = "."

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        self.scan_dirs = [d for d in (self.scan_dirs or []) if d and d.strip()]
        if not self.scan_dirs:
            raise ValueError("At least one directory must be specified")

        self.algorithm = HashAlgorithmType.from_name(self.algorithm)

        if not isinstance(self.policy, Policy):
            try:
                self.policy = Policy(str(self.policy).strip().lower())
            except ValueError:
                raise ValueError(f"Invalid policy: {self.policy}")

        self.delete_dirs = [d for d in (self.delete_dirs or []) if d and d.strip()]
