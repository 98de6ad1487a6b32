"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/index.py
Accumulates fingerprint -> paths and hands out duplicate groups.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Set

from dupescope.core.interfaces import Fingerprinter
from dupescope.core.models import DuplicateGroup, FileRecord

logger = logging.getLogger(__name__)


class FingerprintIndex:
    """
    Maps each content fingerprint to the files carrying it, in insertion order.
    Paths without a fingerprint never enter the index.
    """

    def __init__(self):
        self._groups: Dict[str, List[FileRecord]] = defaultdict(list)
        self._paths: Set[str] = set()
        self.unfingerprinted: List[str] = []

    def add(self, path: str, fingerprint: Optional[str]) -> bool:
        """
        Appends path to the group keyed by fingerprint.
        Returns False if the path was left out (no fingerprint, or already indexed).
        """
        if not fingerprint:
            logger.debug(f"No fingerprint for {path}, leaving it out of the index")
            return False
        if path in self._paths:
            logger.debug(f"Already indexed: {path}")
            return False
        self._paths.add(path)
        self._groups[fingerprint].append(FileRecord(path=path))
        return True

    def index_file(self, path: str, fingerprinter: Fingerprinter) -> bool:
        """
        Fingerprints path and adds it. Returns True if the path was indexed.
        Paths the fingerprinter cannot read are kept in `unfingerprinted`.
        """
        fingerprint = fingerprinter.compute_fingerprint(path)
        if not fingerprint:
            self.unfingerprinted.append(path)
            return False
        return self.add(path, fingerprint)

    def groups(self) -> Iterator[DuplicateGroup]:
        """
        Yields groups with 2+ members. Each call starts a new pass.
        No ordering guarantee across groups.
        """
        for fingerprint, files in self._groups.items():
            if len(files) >= 2:
                yield DuplicateGroup(fingerprint=fingerprint, files=tuple(files))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: str) -> bool:
        return path in self._paths
