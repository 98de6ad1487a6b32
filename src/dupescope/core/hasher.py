"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content fingerprinting with pluggable hash algorithms.

HasherImpl streams a file through the selected algorithm and returns its hex digest.
A file that cannot be read yields None, so the caller can leave it out of the index.
"""

import hashlib
import logging
from typing import Dict, Optional, Type

import xxhash

from dupescope.core.interfaces import Fingerprinter, HashAlgorithm, HashObject
from dupescope.core.models import HashAlgorithmType

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 1024 * 1024  # 1MB


# Use the same way to implement and use any other hashing algorithm
class Md5AlgorithmImpl(HashAlgorithm):
    @staticmethod
    def new() -> HashObject:
        return hashlib.md5()


class Sha256AlgorithmImpl(HashAlgorithm):
    @staticmethod
    def new() -> HashObject:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def new() -> HashObject:
        return xxhash.xxh64()


class XXHash128AlgorithmImpl(HashAlgorithm):
    @staticmethod
    def new() -> HashObject:
        return xxhash.xxh128()


ALGORITHMS: Dict[HashAlgorithmType, Type[HashAlgorithm]] = {
    HashAlgorithmType.MD5: Md5AlgorithmImpl,
    HashAlgorithmType.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmType.XXH64: XXHashAlgorithmImpl,
    HashAlgorithmType.XXH128: XXHash128AlgorithmImpl,
}


class HasherImpl(Fingerprinter):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    """

    def __init__(self, algorithm: HashAlgorithm):
        self.algorithm = algorithm

    @classmethod
    def for_type(cls, algorithm_type: HashAlgorithmType) -> "HasherImpl":
        """Builds a hasher for a configured algorithm. Raises ValueError if unsupported."""
        algorithm = ALGORITHMS.get(HashAlgorithmType.from_name(algorithm_type))
        if algorithm is None:
            raise ValueError(f"Invalid hash algorithm: {algorithm_type}")
        return cls(algorithm())

    def compute_fingerprint(self, path: str) -> Optional[str]:
        """
        Computes the hex digest of the whole file.
        Returns None (and logs a warning) if the file cannot be read.
        """
        digest = self.algorithm.new()
        try:
            with open(path, 'rb') as f:
                for chunk in iter(lambda: f.read(READ_CHUNK_SIZE), b""):
                    digest.update(chunk)
        except OSError as e:
            logger.warning(f"Cannot fingerprint {path}: {e}")
            return None
        return digest.hexdigest()
