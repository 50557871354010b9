"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/lister.py
Lists directory contents and reads node metadata using os.scandir / os.stat.
Features:
- Separate calls for subdirectories and files, so each can fail on its own
- Failures are classified (permission denied / not found / other I/O) and returned, not raised
- Results sorted by path for a stable walk order
"""

import os
import logging
from datetime import datetime
from typing import Callable, Optional

from dircrawl.core.models import ErrorKind, ListResult, NodeTimes, StatResult
from dircrawl.core.interfaces import NodeLister

logger = logging.getLogger(__name__)


def classify_listing_error(error: OSError, listing_files: bool) -> ErrorKind:
    """Maps an OSError raised while listing a directory to its ErrorKind."""
    if isinstance(error, PermissionError):
        return ErrorKind.FILE_LIST_PERMISSION_DENIED if listing_files else ErrorKind.SUBDIR_PERMISSION_DENIED
    # NotADirectoryError: the path was replaced by a file after it was discovered
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return ErrorKind.FILE_LIST_NOT_FOUND if listing_files else ErrorKind.SUBDIR_NOT_FOUND
    return ErrorKind.FILE_LIST_IO if listing_files else ErrorKind.SUBDIR_IO


def _to_datetime(timestamp: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return None


def times_from_stat(stat_result: os.stat_result) -> NodeTimes:
    """Creation time is st_birthtime where the platform has it, st_ctime otherwise."""
    created = getattr(stat_result, "st_birthtime", stat_result.st_ctime)
    return NodeTimes(
        created_at=_to_datetime(created),
        modified_at=_to_datetime(stat_result.st_mtime),
        accessed_at=_to_datetime(stat_result.st_atime),
    )


class NodeListerImpl(NodeLister):
    """
    Lists immediate children of a directory.

    Attributes:
        follow_symlinks: Descend into symbolic links to directories (no cycle protection beyond
                         canonical path comparison)
    """

    def __init__(self, follow_symlinks: bool = False):
        self.follow_symlinks = follow_symlinks

    def list_children(self, directory_path: str) -> ListResult:
        return self._list(directory_path, self._is_subdirectory, listing_files=False)

    def list_files(self, directory_path: str) -> ListResult:
        return self._list(directory_path, self._is_file, listing_files=True)

    @staticmethod
    def is_directory(path: str) -> bool:
        return os.path.isdir(path)

    @staticmethod
    def stat_directory(directory_path: str) -> StatResult:
        try:
            stat_result = os.stat(directory_path)
        except OSError as e:
            logger.debug(f"Could not read directory info for {directory_path}: {e}")
            return StatResult(message=str(e))
        return StatResult(times=times_from_stat(stat_result))

    @staticmethod
    def stat_file(file_path: str) -> StatResult:
        try:
            stat_result = os.stat(file_path)
        except OSError as e:
            logger.debug(f"Could not read file info for {file_path}: {e}")
            return StatResult(message=str(e))
        return StatResult(times=times_from_stat(stat_result), size=stat_result.st_size)

    def _list(
            self,
            directory_path: str,
            accept: Callable[[os.DirEntry], bool],
            listing_files: bool
    ) -> ListResult:
        try:
            with os.scandir(directory_path) as entries:
                paths = sorted(entry.path for entry in entries if accept(entry))
        except OSError as e:
            kind = classify_listing_error(e, listing_files)
            logger.debug(f"{kind.value}: {directory_path}: {e}")
            return ListResult(error=kind, message=str(e))
        return ListResult(paths=paths)

    def _is_subdirectory(self, entry: os.DirEntry) -> bool:
        if entry.is_dir(follow_symlinks=self.follow_symlinks):
            return True
        if not self.follow_symlinks and entry.is_symlink() and entry.is_dir():
            logger.debug(f"Skipping symbolic link to directory: {entry.path}")
        return False

    @staticmethod
    def _is_file(entry: os.DirEntry) -> bool:
        # Regular files and links to them; sockets, pipes and dangling links are not content
        if entry.is_file():
            return True
        if not entry.is_dir():
            logger.debug(f"Skipping non-regular entry: {entry.path}")
        return False
