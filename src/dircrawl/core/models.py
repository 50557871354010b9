"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for directory crawling: records, result values, statistics and configuration.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Optional, FrozenSet
import os
from enum import Enum

from dircrawl.core.normalizer import PathNormalizer


# =============================
# Enums
# =============================

class DigestAlgorithm(Enum):
    """
    Digest used to fingerprint file content. Chosen once per run.
    """
    MD5 = "md5"
    SHA256 = "sha256"
    XXH64 = "xxh64"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output."""
        mapping = {
            DigestAlgorithm.MD5: "MD5",
            DigestAlgorithm.SHA256: "SHA-256",
            DigestAlgorithm.XXH64: "xxHash64",
        }
        return mapping.get(self, self.value)

    @property
    def hex_length(self) -> int:
        """Length of the hex-encoded fingerprint."""
        mapping = {
            DigestAlgorithm.MD5: 32,
            DigestAlgorithm.SHA256: 64,
            DigestAlgorithm.XXH64: 16,
        }
        return mapping[self]

    def __repr__(self) -> str:
        return self.value


class ErrorKind(str, Enum):
    ROOT_INVALID = "Directory not found (skipping root)"
    DIRECTORY_METADATA = "Directory info unavailable"
    SUBDIR_PERMISSION_DENIED = "Directory Subfolder Listing Access Error"
    SUBDIR_NOT_FOUND = "Directory Not Found"
    SUBDIR_IO = "Directory Subfolder Listing Error"
    FILE_LIST_PERMISSION_DENIED = "Directory File Listing Access Error"
    FILE_LIST_NOT_FOUND = "Directory Not Found (file listing)"
    FILE_LIST_IO = "Directory File Listing Error"
    FILE_FAILED = "File info or hash unavailable"
    CYCLE_DETECTED = "Cycle encountered, skipping redundant traversal"


class Metric(str, Enum):
    """Named run statistics, in summary display order."""
    DISTINCT_FILES = "distinct files"
    DISTINCT_DIRECTORIES = "distinct directories"
    CHILD_DIRECTORIES = "child directories"
    SKIPPED_DIRECTORIES = "skipped directories"
    LEAF_DIRECTORIES = "leaf directories"  # i.e. childless, bottom directories
    FILE_LIST_ERROR = "file list error"
    SUBFOLDER_LIST_ERROR = "subfolder list error"
    DIR_PERMISSION_ERROR = "dir permission error"
    DIR_NOT_FOUND_ERROR = "dir not found error"
    CYCLES_DETECTED = "cycles detected"
    DIR_INFO_ERROR = "dir info error"
    FILE_ERROR = "file error"
    BYTES_PROCESSED = "bytes processed"
    PROCESSING_SPEED = "processing speed B/s"

    @classmethod
    def get_all(cls):
        return list(cls)


# Every classified node error increments exactly one counter; invalid roots are
# reported through the sink only
ERROR_METRICS: Dict[ErrorKind, Metric] = {
    ErrorKind.DIRECTORY_METADATA: Metric.DIR_INFO_ERROR,
    ErrorKind.SUBDIR_PERMISSION_DENIED: Metric.DIR_PERMISSION_ERROR,
    ErrorKind.SUBDIR_NOT_FOUND: Metric.DIR_NOT_FOUND_ERROR,
    ErrorKind.SUBDIR_IO: Metric.SUBFOLDER_LIST_ERROR,
    ErrorKind.FILE_LIST_PERMISSION_DENIED: Metric.DIR_PERMISSION_ERROR,
    ErrorKind.FILE_LIST_NOT_FOUND: Metric.DIR_NOT_FOUND_ERROR,
    ErrorKind.FILE_LIST_IO: Metric.FILE_LIST_ERROR,
    ErrorKind.FILE_FAILED: Metric.FILE_ERROR,
    ErrorKind.CYCLE_DETECTED: Metric.CYCLES_DETECTED,
}


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class NodeTimes:
    """Creation, last-write and last-access times; any of them may be unavailable."""
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    accessed_at: Optional[datetime] = None


def _base_name(path: str) -> str:
    stripped = path.rstrip("/\\")
    return os.path.basename(stripped) or path


@dataclass
class DirectoryNode:
    """
    A directory discovered during a run.
    `id` is assigned once, in first-discovery order; roots have parent_id 0 and depth 0.
    """
    path: str
    canonical_key: str
    id: int
    parent_id: int
    depth: int
    times: NodeTimes = field(default_factory=NodeTimes)
    degraded: bool = False  # True when the directory's own metadata could not be read

    @property
    def name(self) -> str:
        return _base_name(self.path)

    @property
    def created_at(self) -> Optional[datetime]:
        return self.times.created_at

    @property
    def modified_at(self) -> Optional[datetime]:
        return self.times.modified_at

    @property
    def accessed_at(self) -> Optional[datetime]:
        return self.times.accessed_at

    def __repr__(self):
        return f"<DirectoryNode id={self.id}, parent={self.parent_id}, depth={self.depth}, path={self.path}>"


@dataclass
class FileNode:
    """
    A file discovered during a run. Degraded records keep their id but report size -1
    and no fingerprint.
    """
    path: str
    id: int
    owner_directory_id: int
    size: int = -1  # in bytes, -1 if unknown
    fingerprint: Optional[str] = None
    times: NodeTimes = field(default_factory=NodeTimes)
    degraded: bool = False

    @property
    def name(self) -> str:
        return _base_name(self.path)

    @property
    def created_at(self) -> Optional[datetime]:
        return self.times.created_at

    @property
    def modified_at(self) -> Optional[datetime]:
        return self.times.modified_at

    @property
    def accessed_at(self) -> Optional[datetime]:
        return self.times.accessed_at

    def __repr__(self):
        return f"<FileNode id={self.id}, dir={self.owner_directory_id}, size={self.size}, path={self.path}>"


@dataclass(frozen=True)
class WorklistEntry:
    """A directory waiting to be processed, with the id of its already-registered parent."""
    path: str
    depth: int
    parent_id: int


# ======================
#  Result values
# ======================

@dataclass(frozen=True)
class ListResult:
    """Outcome of listing one directory: child paths, or a classified error."""
    paths: List[str] = field(default_factory=list)
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FingerprintResult:
    digest: Optional[str] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.digest is not None


@dataclass(frozen=True)
class StatResult:
    """Outcome of reading a node's own metadata."""
    times: Optional[NodeTimes] = None
    size: int = -1
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.times is not None


# ======================
#  Statistics
# ======================

class RunStatistics:
    """
    Counters collected during a crawl run.
    Created at run start, mutated by the engine, read once at the end for the summary.
    """
    def __init__(self):
        self.counts: Dict[Metric, int] = {metric: 0 for metric in Metric.get_all()}
        self.started_at: Optional[datetime] = None
        self.finished_at: Optional[datetime] = None
        self.throughput: float = 0.0

    def increment(self, metric: Metric, amount: int = 1) -> None:
        self.counts[metric] += amount

    def record_error(self, kind: ErrorKind) -> None:
        metric = ERROR_METRICS.get(kind)
        if metric is not None:
            self.increment(metric)

    def __getitem__(self, metric: Metric) -> int:
        return self.counts[metric]

    @property
    def elapsed_seconds(self) -> float:
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return max(0.0, (self.finished_at - self.started_at).total_seconds())

    def finalize(self, distinct_directories: int, distinct_files: int, finished_at: datetime) -> None:
        """Records final counts and derives throughput (zero when no time elapsed)."""
        self.counts[Metric.DISTINCT_DIRECTORIES] = distinct_directories
        self.counts[Metric.DISTINCT_FILES] = distinct_files
        self.finished_at = finished_at

        elapsed = self.elapsed_seconds
        processed = self.counts[Metric.BYTES_PROCESSED]
        self.throughput = processed / elapsed if elapsed > 0 else 0.0
        self.counts[Metric.PROCESSING_SPEED] = int(self.throughput)

    @property
    def error_count(self) -> int:
        return sum(self.counts[metric] for metric in set(ERROR_METRICS.values())
                   if metric is not Metric.CYCLES_DETECTED)

    def __repr__(self):
        return (f"<RunStatistics dirs={self.counts[Metric.DISTINCT_DIRECTORIES]}, "
                f"files={self.counts[Metric.DISTINCT_FILES]}, "
                f"bytes={self.counts[Metric.BYTES_PROCESSED]}>")


# ======================
#  Configuration
# ======================

@dataclass(frozen=True)
class EngineConfig:
    """Immutable per-run engine configuration."""
    digest_algorithm: DigestAlgorithm = DigestAlgorithm.MD5
    exclusion_set: FrozenSet[str] = frozenset()
    follow_symlinks: bool = False
    case_sensitive: bool = False


@dataclass
class CrawlParams:
    """DTO for crawl parameters, validated at construction."""
    roots: List[str]
    output_base: str = "."
    algorithm: DigestAlgorithm = DigestAlgorithm.MD5
    excluded_dirs: List[str] = field(default_factory=list)
    tab_separated: bool = True
    justify_fields: bool = True
    follow_symlinks: bool = False
    case_sensitive: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ValueError("At least one root path is required")

        if not self.output_base:
            raise ValueError("Output directory cannot be empty")

        if isinstance(self.algorithm, str):
            self.algorithm = DigestAlgorithm(self.algorithm.strip().lower())

        # Drop blank entries, keep order
        self.roots = [root for root in self.roots if root and root.strip()]
        if not self.roots:
            raise ValueError("At least one root path is required")
        self.excluded_dirs = [d.strip() for d in self.excluded_dirs if d and d.strip()]

    def to_engine_config(self, extra_excluded: Optional[List[str]] = None) -> EngineConfig:
        """Builds the immutable engine configuration, canonicalizing excluded directories."""
        normalizer = PathNormalizer(case_sensitive=self.case_sensitive)
        excluded = list(self.excluded_dirs) + list(extra_excluded or [])
        return EngineConfig(
            digest_algorithm=self.algorithm,
            exclusion_set=frozenset(normalizer.canonical_key(d) for d in excluded),
            follow_symlinks=self.follow_symlinks,
            case_sensitive=self.case_sensitive,
        )
