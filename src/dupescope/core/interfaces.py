"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) for the collaborators the decision engine talks to.
The engine only depends on these shapes, so tests can pass plain functions or stubs.

Key Components:
---------------
- HashAlgorithm: Incremental hash object factory (MD5, SHA-256, xxHash).
- Fingerprinter: Maps a file path to a content fingerprint, or None when unreadable.
- FileScanner: Enumerates regular files below one or more roots.
- KeepSelector: Interactive decision collaborator used by the manual policy.
- Remover: Removes a file from disk, raising on failure.
"""

from typing import Protocol, List, Optional, Callable, Sequence


class HashObject(Protocol):
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the deduplication logic.
    """

    @staticmethod
    def new() -> HashObject:
        """Returns a fresh incremental hash object."""
        ...


class Fingerprinter(Protocol):
    """Interface for computing a content fingerprint of a file."""
    def compute_fingerprint(self, path: str) -> Optional[str]: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems.

    Methods:
        scan: Returns absolute paths of regular files in discovery order.
    """
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[str]:
        ...


class KeepSelector(Protocol):
    """
    Interactive decision collaborator.

    Receives the group fingerprint and the eligible paths, returns a 1-based index
    of the file to keep. 0 or an out-of-range value means "skip this group".
    """
    def __call__(self, fingerprint: str, candidates: Sequence[str]) -> int: ...


class Remover(Protocol):
    """Removes one file. Returns on success, raises with the cause on failure."""
    def __call__(self, path: str) -> None: ...
