"""
Core crawl engine: normalizer, registry, lister, fingerprinter and traversal.

This package contains the algorithmic foundation of dircrawl:
- TraversalEngine: iterative FIFO walk with cycle avoidance and per-node error recovery
- IdentityRegistry: run-unique directory and file ids
- NodeListerImpl: classified directory listing and metadata reads
- FingerprinterImpl: buffered MD5 / SHA-256 / xxHash64 content fingerprints
- Models: DirectoryNode, FileNode, RunStatistics and configuration objects

All components are pure Python and never format or open output destinations.
"""

from .normalizer import PathNormalizer, CanonicalKey
from .models import (
    DirectoryNode, FileNode, WorklistEntry, NodeTimes, RunStatistics, EngineConfig, CrawlParams,
    DigestAlgorithm, ErrorKind, Metric, ListResult, FingerprintResult, StatResult)
from .hasher import FingerprinterImpl, MD5AlgorithmImpl, SHA256AlgorithmImpl, XXHashAlgorithmImpl
from .registry import IdentityRegistry
from .lister import NodeListerImpl
from .worklist import Worklist
from .engine import TraversalEngine, SystemClock

__all__ = [
    "PathNormalizer",
    "CanonicalKey",
    "DirectoryNode",
    "FileNode",
    "WorklistEntry",
    "NodeTimes",
    "RunStatistics",
    "EngineConfig",
    "CrawlParams",
    "DigestAlgorithm",
    "ErrorKind",
    "Metric",
    "ListResult",
    "FingerprintResult",
    "StatResult",
    "FingerprinterImpl",
    "MD5AlgorithmImpl",
    "SHA256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "IdentityRegistry",
    "NodeListerImpl",
    "Worklist",
    "TraversalEngine",
    "SystemClock",
]
