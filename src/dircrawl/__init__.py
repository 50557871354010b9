"""
dircrawl: filesystem inventory with content fingerprints.

Core features:
- Iterative walk of one or more directory trees, every directory and file reported once
- Stable run-unique ids with parent/child links, suitable for relational import
- MD5, SHA-256 or xxHash64 fingerprint for every file
- Per-node error recovery with classified error counts in the run summary
- CLI writing dir/file/error/crawl logs into a timestamped run folder
"""

# Get version
from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("dircrawl")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API, only what users should import directly
from dircrawl.commands import CrawlCommand
from dircrawl.core import (
    CrawlParams, DigestAlgorithm, DirectoryNode, EngineConfig, ErrorKind, FileNode, Metric,
    RunStatistics, TraversalEngine)
from dircrawl.services import LogFileSink, RunDirectory
from dircrawl.utils.convert_utils import ConvertUtils

__all__ = [
    "CrawlCommand",
    "CrawlParams",
    "DigestAlgorithm",
    "DirectoryNode",
    "EngineConfig",
    "ErrorKind",
    "FileNode",
    "Metric",
    "RunStatistics",
    "TraversalEngine",
    "LogFileSink",
    "RunDirectory",
    "ConvertUtils",
    "__version__",
]
