"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scope.py
Decides which duplicate group members lie inside the directories authorized for deletion.
Both sides are canonicalized before comparison, since the answer gates real deletions.
"""

import os
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from dupescope.core.models import DuplicateGroup, FileRecord, ScopePartition

logger = logging.getLogger(__name__)


class ScopeClassifier:
    """
    Partitions group members into eligible (inside an authorized root) and ineligible.
    Authorized roots are resolved once per classifier, so use one instance per run.
    """

    def __init__(self):
        self._resolved_roots: Dict[str, Optional[str]] = {}

    def canonical_roots(self, roots: Sequence[str]) -> List[str]:
        """Canonical forms of the roots that resolve. Each root is resolved (and warned about) once."""
        for root in roots:
            if root not in self._resolved_roots:
                self._resolved_roots[root] = self.canonicalize(root)
        return [r for r in (self._resolved_roots[root] for root in roots) if r is not None]

    @staticmethod
    def canonicalize(path: str) -> Optional[str]:
        """
        Resolves symlinks and relative segments. Returns None if the path cannot be resolved.
        """
        try:
            return str(Path(path).resolve(strict=True))
        except (OSError, RuntimeError) as e:
            logger.warning(f"Cannot resolve path {path}: {e}")
            return None

    @staticmethod
    def is_within(path: str, root: str) -> bool:
        """
        True iff path is a strict descendant of root after canonicalization.
        The root itself is not within the root. Fails closed on any resolution error.
        """
        canonical_root = ScopeClassifier.canonicalize(root)
        if canonical_root is None:
            return False
        return ScopeClassifier._is_within_canonical(path, canonical_root)

    @staticmethod
    def _is_within_canonical(path: str, canonical_root: str) -> bool:
        canonical_path = ScopeClassifier.canonicalize(path)
        if canonical_path is None:
            return False
        try:
            relative = os.path.relpath(canonical_path, canonical_root)
        except ValueError as e:
            # Different drives on Windows
            logger.warning(f"Error comparing paths {path} and {canonical_root}: {e}")
            return False
        if not relative or relative == os.curdir:
            return False
        return os.pardir not in Path(relative).parts

    def partition(self, group: DuplicateGroup, roots: Sequence[str]) -> ScopePartition:
        """
        A member is eligible if it is within any root. Each member is listed once, in group order.
        """
        canonical_roots = self.canonical_roots(roots)

        eligible: List[FileRecord] = []
        ineligible: List[FileRecord] = []
        for file in group.files:
            if any(self._is_within_canonical(file.path, root) for root in canonical_roots):
                eligible.append(file)
            else:
                ineligible.append(file)

        return ScopePartition(eligible=tuple(eligible), ineligible=tuple(ineligible))
