"""
DupeScope — duplicate file finder that only deletes where you allow it.

Core features:
- Content fingerprints: MD5, SHA-256 (default), xxHash64, xxHash128
- Deletion restricted to explicitly authorized directories; every group keeps a copy
- Manual (pick the copy to keep) or automatic (keep-one) policy
- Dry run by default, safe deletion to system trash (via send2trash)
- Append-only audit log of every kept, deleted, skipped and failed file
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupescope")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    from pathlib import Path as _Path

    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from dupescope.commands import DeduplicationCommand
from dupescope.core import (
    RunParams, Policy, HashAlgorithmType, FileRecord, DuplicateGroup,
    DeletionDecision, DecisionKind, SessionReport)
from dupescope.utils.convert_utils import ConvertUtils
from dupescope.services import ActionLog, DeletionService
from dupescope.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "RunParams",
    "Policy",
    "HashAlgorithmType",
    "FileRecord",
    "DuplicateGroup",
    "DeletionDecision",
    "DecisionKind",
    "SessionReport",
    "ConvertUtils",
    "ActionLog",
    "DeletionService",
    "FileService",
    "__version__",
]
