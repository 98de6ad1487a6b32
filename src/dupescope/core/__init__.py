"""
Core decision engine — scanner, hasher, fingerprint index, scope classifier and planner.

This package contains the logic that decides what may be deleted:
- FileScannerImpl: recursive traversal of several scan roots
- HasherImpl: MD5 / SHA-256 / xxHash content fingerprints
- FingerprintIndex: fingerprint -> files, handing out groups with 2+ members
- ScopeClassifier: canonical "is this file inside an authorized root" check
- DeletionPlanner: manual and automatic keep/delete policies
- Models: FileRecord, DuplicateGroup, DeletionDecision, SessionReport and run parameters

All components are pure Python with no console I/O.
"""

from .scanner import FileScannerImpl
from .hasher import HasherImpl, Md5AlgorithmImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, XXHash128AlgorithmImpl
from .index import FingerprintIndex
from .scope import ScopeClassifier
from .planner import DeletionPlanner
from .models import (
    FileRecord, DuplicateGroup, ScopePartition, DeletionDecision, DecisionKind,
    Policy, HashAlgorithmType, RunParams, SessionReport)

__all__ = [
    "FileScannerImpl",
    "HasherImpl",
    "Md5AlgorithmImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "XXHash128AlgorithmImpl",
    "FingerprintIndex",
    "ScopeClassifier",
    "DeletionPlanner",
    "FileRecord",
    "DuplicateGroup",
    "ScopePartition",
    "DeletionDecision",
    "DecisionKind",
    "Policy",
    "HashAlgorithmType",
    "RunParams",
    "SessionReport",
]
