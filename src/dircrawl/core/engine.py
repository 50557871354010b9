"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/engine.py
Iterative directory-tree walk: assigns ids, emits directory and file records,
recovers from per-node errors and accumulates run statistics.

Walk order:
- Roots are queued in the order given; a root starts only when everything reachable
  from the previous root has been processed
- Within a root, directories are processed first-in first-out (level by level)
- A directory whose canonical key already has an id is a cycle hit and is skipped
"""

import os
import logging
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Iterable, Optional

from dircrawl.core.models import (
    DirectoryNode,
    EngineConfig,
    ErrorKind,
    FileNode,
    Metric,
    NodeTimes,
    RunStatistics,
    WorklistEntry,
)
from dircrawl.core.interfaces import Clock, Fingerprinter, NodeLister, RecordSink
from dircrawl.core.hasher import FingerprinterImpl
from dircrawl.core.lister import NodeListerImpl
from dircrawl.core.normalizer import PathNormalizer
from dircrawl.core.registry import IdentityRegistry
from dircrawl.core.worklist import Worklist

logger = logging.getLogger(__name__)


class SystemClock(Clock):
    """Local wall-clock time."""
    def now(self) -> datetime:
        return datetime.now()


PROGRESS_INTERVAL = 1000  # files between progress updates


class TraversalEngine:
    """
    Walks one or more directory trees and reports every directory and file exactly once.

    Single-threaded; one engine instance must not run concurrently on overlapping roots.
    Registry, worklist and statistics live only for the duration of `run`.
    """

    def __init__(
            self,
            config: EngineConfig,
            sink: RecordSink,
            lister: Optional[NodeLister] = None,
            fingerprinter: Optional[Fingerprinter] = None,
            clock: Optional[Clock] = None,
            normalizer: Optional[PathNormalizer] = None
    ):
        self.config = config
        self.sink = sink
        self.lister = lister or NodeListerImpl(follow_symlinks=config.follow_symlinks)
        self.fingerprinter = fingerprinter or FingerprinterImpl.for_digest(config.digest_algorithm)
        self.clock = clock or SystemClock()
        self.normalizer = normalizer or PathNormalizer(case_sensitive=config.case_sensitive)

    def run(
            self,
            roots: Iterable[str],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> RunStatistics:
        """
        Crawl all valid roots to completion and emit the summary once.
        Invalid roots are reported through the sink and skipped.

        Args:
            roots: Candidate root directories, processed in order
            progress_callback: Optional callback (stage, files_processed, None)

        Returns:
            RunStatistics: final counters, also passed to sink.emit_summary
        """
        stats = RunStatistics()
        stats.started_at = self.clock.now()
        registry = IdentityRegistry()
        worklist = Worklist()

        pending_roots = self._seed(roots)
        logger.debug(f"Starting crawl of {len(pending_roots)} root(s), algorithm={self.config.digest_algorithm.value}")

        while worklist or pending_roots:
            if not worklist:
                # Start next queued root only once the previous tree is exhausted
                worklist.push(WorklistEntry(path=pending_roots.popleft(), depth=0, parent_id=0))
            reported_files = registry.file_count
            self._process_directory(worklist.pop(), registry, worklist, stats)
            if progress_callback and registry.file_count // PROGRESS_INTERVAL > reported_files // PROGRESS_INTERVAL:
                progress_callback('crawling', registry.file_count, None)

        if progress_callback:
            progress_callback('crawling', registry.file_count, None)

        stats.finalize(
            distinct_directories=registry.directory_count,
            distinct_files=registry.file_count,
            finished_at=self.clock.now()
        )
        logger.debug(f"Crawl completed in {stats.elapsed_seconds:.2f} seconds, "
                     f"{worklist.total_enqueued} directories queued: {stats}")
        self.sink.emit_summary(stats)
        return stats

    def _seed(self, roots: Iterable[str]) -> Deque[str]:
        pending: Deque[str] = deque()
        for root in roots:
            if root and self.lister.is_directory(root):
                pending.append(os.path.abspath(root))
                continue
            logger.error(f"Directory not found (skipping): {root}")
            self.sink.emit_error(ErrorKind.ROOT_INVALID, str(root), "Directory not found")
        return pending

    def _process_directory(
            self,
            entry: WorklistEntry,
            registry: IdentityRegistry,
            worklist: Worklist,
            stats: RunStatistics
    ) -> None:
        key = self.normalizer.canonical_key(entry.path)
        dir_id, already_existed = registry.assign_directory_id(key)
        if already_existed:
            logger.info(f"Cycle encountered, skipping {entry.path} (directory {dir_id})")
            stats.record_error(ErrorKind.CYCLE_DETECTED)
            self.sink.emit_error(ErrorKind.CYCLE_DETECTED, entry.path, f"already traversed as directory {dir_id}")
            return

        self.sink.emit_directory(self._directory_node(entry, key, dir_id, stats))

        subdirs = self.lister.list_children(entry.path)
        if not subdirs.ok:
            self._report(subdirs.error, entry.path, subdirs.message, stats)
            return

        files = self.lister.list_files(entry.path)
        if not files.ok:
            self._report(files.error, entry.path, files.message, stats)
            return

        for file_path in files.paths:
            self._process_file(file_path, dir_id, registry, stats)

        for child in subdirs.paths:
            if self.normalizer.canonical_key(child) in self.config.exclusion_set:
                logger.debug(f"Skipping excluded directory: {child}")
                stats.increment(Metric.SKIPPED_DIRECTORIES)
                continue
            worklist.push(WorklistEntry(path=child, depth=entry.depth + 1, parent_id=dir_id))
            stats.increment(Metric.CHILD_DIRECTORIES)

        if not subdirs.paths:
            stats.increment(Metric.LEAF_DIRECTORIES)

    def _directory_node(
            self,
            entry: WorklistEntry,
            key: str,
            dir_id: int,
            stats: RunStatistics
    ) -> DirectoryNode:
        info = self.lister.stat_directory(entry.path)
        if not info.ok:
            # Still emitted: children reference this id as their parent
            self._report(ErrorKind.DIRECTORY_METADATA, entry.path, info.message, stats)
        return DirectoryNode(
            path=entry.path,
            canonical_key=key,
            id=dir_id,
            parent_id=entry.parent_id,
            depth=entry.depth,
            times=info.times if info.ok else NodeTimes(),
            degraded=not info.ok,
        )

    def _process_file(
            self,
            file_path: str,
            dir_id: int,
            registry: IdentityRegistry,
            stats: RunStatistics
    ) -> None:
        file_id = registry.next_file_id()
        info = self.lister.stat_file(file_path)
        fingerprint = self.fingerprinter.hash(file_path) if info.ok else None

        if info.ok and fingerprint.ok:
            node = FileNode(
                path=file_path,
                id=file_id,
                owner_directory_id=dir_id,
                size=info.size,
                fingerprint=fingerprint.digest,
                times=info.times,
            )
            if info.size > 0:
                stats.increment(Metric.BYTES_PROCESSED, info.size)
        else:
            message = fingerprint.message if info.ok else info.message
            self._report(ErrorKind.FILE_FAILED, file_path, message, stats)
            node = FileNode(path=file_path, id=file_id, owner_directory_id=dir_id, degraded=True)

        self.sink.emit_file(node)

    def _report(self, kind: ErrorKind, context: str, message: str, stats: RunStatistics) -> None:
        logger.warning(f"{kind.value}: {context}: {message}")
        stats.record_error(kind)
        self.sink.emit_error(kind, context, message)
