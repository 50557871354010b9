"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements whole-file fingerprinting with pluggable hash algorithms.

Files are streamed through a buffer so memory use does not depend on file size.
Read failures (locked, vanished, access denied) are returned to the caller, never retried.
"""

import hashlib
import logging
from typing import Dict, Type

import xxhash

from dircrawl.core.models import DigestAlgorithm, FingerprintResult
from dircrawl.core.interfaces import Digest, Fingerprinter, HashAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 1200000  # ~1MB


# Use the same way to implement and use any other hashing algorithm
class MD5AlgorithmImpl(HashAlgorithm):
    name = "md5"

    @staticmethod
    def new() -> Digest:
        return hashlib.md5()


class SHA256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    @staticmethod
    def new() -> Digest:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    @staticmethod
    def new() -> Digest:
        return xxhash.xxh64()


ALGORITHMS: Dict[DigestAlgorithm, Type[HashAlgorithm]] = {
    DigestAlgorithm.MD5: MD5AlgorithmImpl,
    DigestAlgorithm.SHA256: SHA256AlgorithmImpl,
    DigestAlgorithm.XXH64: XXHashAlgorithmImpl,
}


def algorithm_for(digest: DigestAlgorithm) -> HashAlgorithm:
    """Returns the HashAlgorithm implementation for a configured digest."""
    return ALGORITHMS[digest]()


class FingerprinterImpl(Fingerprinter):
    """
    A fingerprinter that supports any algorithm via the HashAlgorithm interface.
    Holds no state beyond the algorithm and buffer size.
    """

    def __init__(self, algorithm: HashAlgorithm, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("Buffer size must be positive")
        self.algorithm = algorithm
        self.buffer_size = buffer_size

    @classmethod
    def for_digest(cls, digest: DigestAlgorithm, buffer_size: int = DEFAULT_BUFFER_SIZE) -> "FingerprinterImpl":
        return cls(algorithm_for(digest), buffer_size=buffer_size)

    def hash(self, file_path: str) -> FingerprintResult:
        """Computes the lowercase hex digest of the whole file content."""
        digest = self.algorithm.new()
        try:
            with open(file_path, 'rb') as f:
                for chunk in iter(lambda: f.read(self.buffer_size), b''):
                    digest.update(chunk)
        except OSError as e:
            logger.debug(f"Could not hash {file_path}: {e}")
            return FingerprintResult(message=str(e))
        return FingerprintResult(digest=digest.hexdigest().lower())
