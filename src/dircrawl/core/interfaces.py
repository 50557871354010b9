"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the crawler.
These protocols enforce structural typing using Python's `typing.Protocol` so the
traversal engine depends only on narrow seams, never on concrete I/O.

Key Components:
---------------
- HashAlgorithm: Factory for incremental digest objects (MD5, SHA-256, xxHash64).
- Fingerprinter: Streams a file through a HashAlgorithm and returns a hex fingerprint.
- NodeLister: Lists subdirectories / files of a directory and reads node metadata.
- RecordSink: Receives directory, file, error and summary records.
- Clock: Supplies run start/end timestamps.
"""

from datetime import datetime
from typing import Protocol

from dircrawl.core.models import (
    DirectoryNode,
    ErrorKind,
    FileNode,
    FingerprintResult,
    ListResult,
    RunStatistics,
    StatResult,
)


# ===== Interfaces =====

class Digest(Protocol):
    """Incremental digest object, as returned by hashlib and xxhash constructors."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for digest algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the traversal logic.
    """
    name: str

    @staticmethod
    def new() -> Digest:
        """Returns a fresh incremental digest object."""
        ...


class Fingerprinter(Protocol):
    """Interface for fingerprinting whole-file content."""
    def hash(self, file_path: str) -> FingerprintResult: ...


class NodeLister(Protocol):
    """
    Interface for enumerating a directory's immediate children.

    Listing subdirectories and listing files are separate filesystem calls so that
    one failing independently of the other is distinguishable.
    """
    def list_children(self, directory_path: str) -> ListResult: ...
    def list_files(self, directory_path: str) -> ListResult: ...
    def is_directory(self, path: str) -> bool: ...
    def stat_directory(self, directory_path: str) -> StatResult: ...
    def stat_file(self, file_path: str) -> StatResult: ...


class RecordSink(Protocol):
    """
    Receives everything a run produces. The engine never opens, names or formats
    output destinations itself.
    """
    def emit_directory(self, node: DirectoryNode) -> None: ...
    def emit_file(self, node: FileNode) -> None: ...
    def emit_error(self, kind: ErrorKind, context: str, message: str) -> None: ...
    def emit_summary(self, stats: RunStatistics) -> None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...
